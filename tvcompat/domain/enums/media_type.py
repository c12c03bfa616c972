from __future__ import annotations
from enum import StrEnum

_SELECTORS = {"video": "v", "audio": "a", "subtitle": "s"}


class MediaType(StrEnum):
    video = "video"
    audio = "audio"
    subtitle = "subtitle"
    other = "other"

    @classmethod
    def from_codec_type(cls, value: str | None) -> "MediaType":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.other

    @property
    def selector(self) -> str:
        """Stream-specifier letter used by ffmpeg (-map 0:v, -c:a:0 ...)."""
        try:
            return _SELECTORS[self.value]
        except KeyError:
            raise ValueError(f"no ffmpeg stream selector for {self.value!r} streams") from None
