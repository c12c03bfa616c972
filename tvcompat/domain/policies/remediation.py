# tvcompat/domain/policies/remediation.py
"""
Build the ffmpeg command lines we suggest for unsupported files.

Nothing here runs ffmpeg; the functions only return shell-ready strings.
Every path argument goes through `quote_single`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, Iterable, List, Optional

from tvcompat.common.settings import RemediationConfig
from tvcompat.common.strings.shell import quote_single
from tvcompat.domain.dataclasses.outcome import ClassificationResult, FileOutcome
from tvcompat.domain.enums.media_type import MediaType
from tvcompat.domain.policies.compatibility import is_text_subtitle

REMUX_PREFIX = "remuxed_"
TRANSCODE_PREFIX = "fixed_"

_DEFAULT_CONFIG = RemediationConfig()


def _basename(path: str | PurePath) -> str:
    # the part after the last "/", even for "dir/" style inputs
    return str(path).rsplit("/", 1)[-1]


def remux_output_name(path: str | PurePath, cfg: RemediationConfig = _DEFAULT_CONFIG) -> str:
    """'movie.avi' -> 'remuxed_movie.avi.mkv' (the original extension is kept)."""
    return f"{REMUX_PREFIX}{_basename(path)}{cfg.output_ext}"


def transcode_output_name(path: str | PurePath, cfg: RemediationConfig = _DEFAULT_CONFIG) -> str:
    """'movie.avi' -> 'fixed_movie.mkv'; only the last extension is dropped."""
    base = _basename(path)
    stem, dot, _ext = base.rpartition(".")
    if not dot:
        stem = base
    return f"{TRANSCODE_PREFIX}{stem}{cfg.output_ext}"


def should_suggest_remux(outcome: FileOutcome) -> bool:
    return not outcome.all_supported and outcome.has_audio_or_video


def should_suggest_transcode(outcome: FileOutcome) -> bool:
    return should_suggest_remux(outcome) and outcome.can_transcode


def suggest_remux(path: str | PurePath, cfg: RemediationConfig = _DEFAULT_CONFIG) -> str:
    """Copy every stream into a Matroska container, no re-encoding."""
    return " ".join([
        cfg.tool,
        "-i", quote_single(str(path)),
        "-map", "0",
        "-c", "copy",
        quote_single(remux_output_name(path, cfg)),
    ])


@dataclass
class _OutputCounters:
    """Next output index per stream type (the N in -c:v:N)."""
    video: int = 0
    audio: int = 0
    subtitle: int = 0

    def take(self, media_type: MediaType) -> int:
        n = getattr(self, media_type.value)
        setattr(self, media_type.value, n + 1)
        return n


@dataclass
class _TranscodePlan:
    maps: List[str] = field(default_factory=list)
    codec_flags: Dict[MediaType, List[str]] = field(
        default_factory=lambda: {
            MediaType.video: [],
            MediaType.audio: [],
            MediaType.subtitle: [],
        }
    )
    counters: _OutputCounters = field(default_factory=_OutputCounters)

    def add(self, media_type: MediaType, codec: str) -> None:
        selector = media_type.selector
        map_arg = f"-map 0:{selector}"
        if map_arg not in self.maps:
            self.maps.append(map_arg)
        idx = self.counters.take(media_type)
        self.codec_flags[media_type].append(f"-c:{selector}:{idx} {codec}")

    def flags(self) -> List[str]:
        # all video flags, then audio, then subtitles, whatever the input order
        out = list(self.maps)
        for mt in (MediaType.video, MediaType.audio, MediaType.subtitle):
            out.extend(self.codec_flags[mt])
        return out


def output_codec(result: ClassificationResult, cfg: RemediationConfig = _DEFAULT_CONFIG) -> str:
    """Codec to use for one stream in the transcode command."""
    if result.supported:
        return "copy"
    mt = result.media_type
    if mt is MediaType.video:
        return cfg.video_encoder
    if mt is MediaType.audio:
        return cfg.audio_encoder
    # Bitmap subtitles cannot become text; they are carried over unchanged.
    if is_text_subtitle(result.stream.codec_id):
        return cfg.text_subtitle_codec
    return "copy"


def suggest_transcode(
    path: str | PurePath,
    stream_results: Iterable[ClassificationResult],
    cfg: Optional[RemediationConfig] = None,
) -> str:
    """
    Re-encode only what the TV cannot play and copy the rest, e.g.

        ffmpeg -i 'a.avi' -map 0:v -map 0:a -c:v:0 libx264 -c:a:0 copy 'fixed_a.mkv'

    Streams are visited in index order; non-media streams are ignored.
    """
    cfg = cfg or _DEFAULT_CONFIG
    plan = _TranscodePlan()
    for result in sorted(stream_results, key=lambda r: r.stream.index):
        if not result.stream.is_media:
            continue
        plan.add(result.media_type, output_codec(result, cfg))

    parts = [cfg.tool, "-i", quote_single(str(path))]
    parts.extend(plan.flags())
    parts.append(quote_single(transcode_output_name(path, cfg)))
    return " ".join(parts)
