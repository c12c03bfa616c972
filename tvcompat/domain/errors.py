# tvcompat/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class ProbeError(RuntimeError):
    """A file could not be probed. `code` is the prober's numeric status."""
    message: str
    code: Optional[int] = None

    stage = "probe"

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class ProbeOpenError(ProbeError):
    """The file could not be opened/demuxed (missing, empty, corrupt framing)."""
    stage = "open"


@dataclass(eq=False)
class StreamInfoError(ProbeError):
    """The container opened but its stream metadata could not be read."""
    stage = "stream-info"
