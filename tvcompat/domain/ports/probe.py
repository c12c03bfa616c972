from __future__ import annotations
from pathlib import Path
from typing import ContextManager, Protocol, Sequence

from tvcompat.domain.entities.probe import ContainerInfo, StreamDescriptor


class ProbeHandle(Protocol):
    """An opened media file. Valid only inside the prober's `with` block."""

    def probe_streams(self) -> None:
        """Read stream metadata; raises StreamInfoError on failure."""
        ...

    @property
    def container(self) -> ContainerInfo: ...

    @property
    def streams(self) -> Sequence[StreamDescriptor]: ...


class MediaProbePort(Protocol):
    # open() raises ProbeOpenError; the handle is released when the block exits
    def open(self, path: Path) -> ContextManager[ProbeHandle]: ...
