# tvcompat/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tvcompat.domain.enums.media_type import MediaType

UNDETERMINED_LANGUAGE = "und"
UNKNOWN_CONTAINER = "unknown"


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One elementary stream as reported by a prober.
    codec_tag and profile only matter for video; both may be absent.
    """
    index: int
    media_type: MediaType
    codec_id: str
    codec_tag: Optional[str] = None
    profile: Optional[str] = None
    language: str = UNDETERMINED_LANGUAGE

    @property
    def is_media(self) -> bool:
        return self.media_type is not MediaType.other


@dataclass(frozen=True)
class ContainerInfo:
    # e.g. "mov,mp4,m4a,3gp,3g2,mj2"; None when the prober could not tell
    format_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.format_name or UNKNOWN_CONTAINER
