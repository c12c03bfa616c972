from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from tvcompat.domain.entities.probe import ContainerInfo, StreamDescriptor
from tvcompat.domain.enums.codec import ClassificationReason
from tvcompat.domain.enums.media_type import MediaType


@dataclass(frozen=True)
class ClassificationResult:
    stream: StreamDescriptor
    supported: bool
    reason: ClassificationReason

    @property
    def media_type(self) -> MediaType:
        return self.stream.media_type

    @property
    def is_bitmap_subtitle(self) -> bool:
        return self.reason is ClassificationReason.SUBTITLE_BITMAP_UNSUPPORTED

    @property
    def needs_reencode(self) -> bool:
        """Unsupported, and re-encoding could help (bitmap subtitles never can)."""
        return not self.supported and not self.is_bitmap_subtitle


@dataclass(frozen=True)
class FileOutcome:
    """
    Verdict for one probed file. Computed once from the stream list by
    `compatibility.evaluate()`; only video/audio/subtitle streams are listed.
    """
    container: ContainerInfo
    container_supported: bool
    stream_results: Tuple[ClassificationResult, ...] = field(default_factory=tuple)
    all_supported: bool = False
    can_transcode: bool = False
    has_unsupported_bitmap_subtitle: bool = False
    has_video: bool = False
    has_audio: bool = False

    @property
    def is_unfixable(self) -> bool:
        """Unsupported only because of bitmap subtitles; nothing to re-encode."""
        return (
            not self.all_supported
            and not self.can_transcode
            and self.has_unsupported_bitmap_subtitle
        )

    @property
    def has_audio_or_video(self) -> bool:
        return self.has_video or self.has_audio
