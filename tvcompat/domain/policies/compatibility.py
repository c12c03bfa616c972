# tvcompat/domain/policies/compatibility.py
"""
Support matrix for the Samsung Frame (2024) media player.

The lists follow Samsung's published spec sheets and are not exhaustive.
Every function here is pure: unknown codecs and containers are unsupported.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from tvcompat.domain.dataclasses.outcome import ClassificationResult, FileOutcome
from tvcompat.domain.entities.probe import ContainerInfo, StreamDescriptor
from tvcompat.domain.enums.codec import (
    AudioCodec,
    ClassificationReason,
    SubtitleCodec,
    VideoCodec,
)
from tvcompat.domain.enums.media_type import MediaType

SUPPORTED_VIDEO: FrozenSet[str] = frozenset(c.value for c in (
    VideoCodec.H264,
    VideoCodec.HEVC,
    VideoCodec.MPEG2,
    VideoCodec.VP9,
    VideoCodec.AV1,
    VideoCodec.MJPEG,
    VideoCodec.PNG,
))

# MPEG-4 Part 2 as written by DivX/Xvid-era encoders; case matters.
EXCLUDED_MPEG4_TAGS: FrozenSet[str] = frozenset({
    "XVID", "xvid",
    "DIVX", "divx",
    "DX50",
    "MP4V", "mp4v",
    "FMP4", "fmp4",
})

# Normalized (lowercase, without the trailing "profile") ffprobe profile names
EXCLUDED_MPEG4_PROFILES: FrozenSet[str] = frozenset({
    "advanced simple",
    "simple studio",
})

SUPPORTED_AUDIO: FrozenSet[str] = frozenset(c.value for c in AudioCodec)

TEXT_SUBTITLES: FrozenSet[str] = frozenset(c.value for c in (
    SubtitleCodec.SUBRIP,
    SubtitleCodec.ASS,
    SubtitleCodec.SSA,
    SubtitleCodec.WEBVTT,
    SubtitleCodec.MOV_TEXT,
    SubtitleCodec.MICRODVD,
    SubtitleCodec.TEXT,
))
SUPPORTED_SUBTITLES: FrozenSet[str] = TEXT_SUBTITLES

BITMAP_SUBTITLES: FrozenSet[str] = frozenset(c.value for c in (
    SubtitleCodec.PGS,
    SubtitleCodec.DVD,
))

SUPPORTED_CONTAINER_TOKENS = (
    "matroska",
    "mp4",
    "mov",
    "mpegts",
    "webm",
    "avi",
    "asf",
    "wav",
    "flac",
    "mp3",
    "ogg",
    "wmv",
)


def _norm(codec_id: Optional[str]) -> str:
    return (codec_id or "").strip().lower()


def _norm_profile(profile: Optional[str]) -> str:
    p = (profile or "").strip().lower().replace("_", " ").replace("-", " ")
    if p.endswith(" profile"):
        p = p[: -len(" profile")]
    return " ".join(p.split())


# ---- stream classifiers -------------------------------------------------------

def video_reason(
    codec_id: Optional[str], codec_tag: Optional[str] = None, profile: Optional[str] = None
) -> ClassificationReason:
    cid = _norm(codec_id)
    if cid in SUPPORTED_VIDEO:
        return ClassificationReason.CODEC_ALLOWED
    if cid != VideoCodec.MPEG4.value:
        return ClassificationReason.CODEC_NOT_ALLOWED
    if codec_tag is not None and codec_tag in EXCLUDED_MPEG4_TAGS:
        return ClassificationReason.CODEC_TAG_EXCLUDED
    if _norm_profile(profile) in EXCLUDED_MPEG4_PROFILES:
        return ClassificationReason.PROFILE_EXCLUDED
    return ClassificationReason.CODEC_ALLOWED


def is_video_supported(
    codec_id: Optional[str], codec_tag: Optional[str] = None, profile: Optional[str] = None
) -> bool:
    return video_reason(codec_id, codec_tag, profile) is ClassificationReason.CODEC_ALLOWED


def is_audio_supported(codec_id: Optional[str]) -> bool:
    return _norm(codec_id) in SUPPORTED_AUDIO


def is_subtitle_supported(codec_id: Optional[str]) -> bool:
    return _norm(codec_id) in SUPPORTED_SUBTITLES


def is_text_subtitle(codec_id: Optional[str]) -> bool:
    return _norm(codec_id) in TEXT_SUBTITLES


def is_bitmap_subtitle(codec_id: Optional[str]) -> bool:
    return _norm(codec_id) in BITMAP_SUBTITLES


def is_container_supported(format_name: Optional[str]) -> bool:
    """
    Substring match: probers report alias lists such as
    "mov,mp4,m4a,3gp,3g2,mj2" or "matroska,webm".
    """
    if not format_name:
        return False
    return any(token in format_name for token in SUPPORTED_CONTAINER_TOKENS)


def classify_stream(stream: StreamDescriptor) -> ClassificationResult:
    """Classify one video/audio/subtitle stream. Raises ValueError for `other`."""
    mt = stream.media_type
    if mt is MediaType.video:
        reason = video_reason(stream.codec_id, stream.codec_tag, stream.profile)
    elif mt is MediaType.audio:
        reason = (
            ClassificationReason.CODEC_ALLOWED
            if is_audio_supported(stream.codec_id)
            else ClassificationReason.CODEC_NOT_ALLOWED
        )
    elif mt is MediaType.subtitle:
        if is_subtitle_supported(stream.codec_id):
            reason = ClassificationReason.CODEC_ALLOWED
        elif is_bitmap_subtitle(stream.codec_id):
            reason = ClassificationReason.SUBTITLE_BITMAP_UNSUPPORTED
        else:
            reason = ClassificationReason.SUBTITLE_TEXT_UNSUPPORTED
    else:
        raise ValueError(f"stream {stream.index} is not a media stream ({mt})")

    return ClassificationResult(
        stream=stream,
        supported=reason is ClassificationReason.CODEC_ALLOWED,
        reason=reason,
    )


# ---- file-level outcome -------------------------------------------------------

def evaluate(container: ContainerInfo, streams: Iterable[StreamDescriptor]) -> FileOutcome:
    """Apply the container and stream rules to a whole file."""
    container_ok = is_container_supported(container.format_name)
    results = tuple(classify_stream(s) for s in streams if s.is_media)

    return FileOutcome(
        container=container,
        container_supported=container_ok,
        stream_results=results,
        all_supported=container_ok and all(r.supported for r in results),
        can_transcode=any(r.needs_reencode for r in results),
        has_unsupported_bitmap_subtitle=any(r.is_bitmap_subtitle for r in results),
        has_video=any(r.media_type is MediaType.video for r in results),
        has_audio=any(r.media_type is MediaType.audio for r in results),
    )
