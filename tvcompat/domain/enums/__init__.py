from tvcompat.domain.enums.codec import (
    AudioCodec,
    ClassificationReason,
    FileVerdict,
    SubtitleCodec,
    VideoCodec,
)
from tvcompat.domain.enums.media_type import MediaType
__all__ = [
    "AudioCodec",
    "ClassificationReason",
    "FileVerdict",
    "MediaType",
    "SubtitleCodec",
    "VideoCodec",
]
