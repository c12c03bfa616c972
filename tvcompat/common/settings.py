# tvcompat/common/settings.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


class FFProbeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    bin: str = "ffprobe"
    # None means wait for ffprobe however long it takes
    timeout_sec: Optional[float] = Field(default=None, gt=0)
    log_level: str = "error"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace


class RemediationConfig(BaseModel):
    """Tool and encoder names used in the suggested commands."""

    model_config = ConfigDict(frozen=True)

    tool: str = "ffmpeg"
    video_encoder: str = "libx264"
    audio_encoder: str = "aac"
    text_subtitle_codec: str = "srt"
    output_ext: str = ".mkv"


class CheckOptions(BaseModel):
    """Per-run switches passed explicitly to the analyzer and the walker."""

    model_config = ConfigDict(frozen=True)

    brief: bool = False
    skip_ok: bool = False
    skip_unfixable: bool = False
    show_full_path: bool = False
    excludes: List[str] = Field(default_factory=list)

    @field_validator("excludes", mode="before")
    @classmethod
    def _split_csv(cls, v):
        # "a,b" from code; argparse hands over a list, taken item by item
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(s).strip() for s in v if s is not None and str(s).strip()]


class Settings(BaseModel):
    """
    Everything one run needs. Built from CLI arguments only; nothing is read
    from the environment or from disk.
    """

    model_config = ConfigDict(frozen=True)

    log_level: str = "warning"
    ffprobe: FFProbeConfig = FFProbeConfig()
    remediation: RemediationConfig = RemediationConfig()
    options: CheckOptions = CheckOptions()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v):
        s = str(v or "warning").strip().lower()
        if s not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v!r}")
        return s
