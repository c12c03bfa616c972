# tests/conftest.py
from __future__ import annotations

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pytest

from tvcompat.domain.entities.probe import ContainerInfo, StreamDescriptor
from tvcompat.domain.enums.media_type import MediaType
from tvcompat.domain.errors import ProbeError, ProbeOpenError
from tvcompat.services.check.render import make_console


def video(index: int, codec: str, tag: Optional[str] = None, profile: Optional[str] = None, lang: str = "und"):
    return StreamDescriptor(index, MediaType.video, codec, codec_tag=tag, profile=profile, language=lang)


def audio(index: int, codec: str, lang: str = "und"):
    return StreamDescriptor(index, MediaType.audio, codec, language=lang)


def subtitle(index: int, codec: str, lang: str = "und"):
    return StreamDescriptor(index, MediaType.subtitle, codec, language=lang)


def data(index: int, codec: str = "bin_data"):
    return StreamDescriptor(index, MediaType.other, codec)


class _FakeHandle:
    def __init__(self, container: str, streams: Sequence[StreamDescriptor], stream_error: Optional[ProbeError]):
        self._container = ContainerInfo(container)
        self._streams = list(streams)
        self._stream_error = stream_error
        self.closed = False

    def probe_streams(self) -> None:
        if self._stream_error is not None:
            raise self._stream_error

    @property
    def container(self) -> ContainerInfo:
        return self._container

    @property
    def streams(self):
        return tuple(self._streams)


class FakeProber:
    """
    In-memory MediaProbePort. Register files by name (basename); anything
    unknown fails to open like a missing file would.
    """

    def __init__(self):
        self.files: Dict[str, Union[tuple, ProbeError]] = {}
        self.opened: List[Path] = []
        self.handles: List[_FakeHandle] = []

    def add(self, name: str, container: str, streams: Sequence[StreamDescriptor], *,
            stream_error: Optional[ProbeError] = None) -> "FakeProber":
        self.files[name] = (container, list(streams), stream_error)
        return self

    def fail(self, name: str, error: ProbeError) -> "FakeProber":
        self.files[name] = error
        return self

    @contextmanager
    def open(self, path: Path):
        self.opened.append(Path(path))
        entry = self.files.get(Path(path).name)
        if entry is None:
            raise ProbeOpenError("No such file or directory", code=-2)
        if isinstance(entry, ProbeError):
            raise entry
        container, streams, stream_error = entry
        handle = _FakeHandle(container, streams, stream_error)
        self.handles.append(handle)
        try:
            yield handle
        finally:
            handle.closed = True


@pytest.fixture()
def prober() -> FakeProber:
    return FakeProber()


class CapturedConsole:
    def __init__(self):
        self.buffer = io.StringIO()
        self.console = make_console(self.buffer, force_terminal=False, color_system=None)

    def text(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture()
def out() -> CapturedConsole:
    """A colourless console writing into a buffer."""
    return CapturedConsole()
