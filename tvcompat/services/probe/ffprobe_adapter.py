# tvcompat/services/probe/ffprobe_adapter.py
from __future__ import annotations

import errno
import json
import os
import shlex
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from tvcompat.common.logging import get_logger
from tvcompat.common.settings import FFProbeConfig
from tvcompat.domain.entities.probe import (
    UNDETERMINED_LANGUAGE,
    ContainerInfo,
    StreamDescriptor,
)
from tvcompat.domain.enums.media_type import MediaType
from tvcompat.domain.errors import ProbeOpenError, StreamInfoError
from tvcompat.domain.ports.probe import MediaProbePort

logger = get_logger()

# ffprobe prints an all-zero codec tag like this
_EMPTY_TAG = "[0][0][0][0]"


class FFprobeNotFound(RuntimeError):
    """The ffprobe binary is missing; nothing can be probed."""


def build_ffprobe_cmd(ffprobe_bin: str, input_path: str | Path, log_level: str = "error") -> List[str]:
    return [
        ffprobe_bin,
        "-v", log_level,
        "-show_format",
        "-show_streams",
        "-print_format", "json",
        "--",  # Stop option parsing in case of weird filenames
        str(input_path),
    ]


class FFprobeHandle:
    """
    The result of one ffprobe run, parsed lazily in the same two stages the
    libav API uses: container first, then `probe_streams()`.
    """

    def __init__(self, path: Path, payload: Dict[str, Any]):
        self.path = path
        self._payload = payload
        self._streams: Optional[List[StreamDescriptor]] = None
        self._closed = False

    @property
    def container(self) -> ContainerInfo:
        fmt = self._payload.get("format") or {}
        name = fmt.get("format_name")
        return ContainerInfo(format_name=str(name) if name else None)

    def probe_streams(self) -> None:
        raw = self._payload.get("streams")
        if not isinstance(raw, list):
            raise StreamInfoError(
                f"no stream information in ffprobe output for {self.path}",
                code=-errno.EINVAL,
            )
        try:
            self._streams = [parse_stream(s, i) for i, s in enumerate(raw)]
        except (TypeError, ValueError, AttributeError) as e:
            raise StreamInfoError(f"malformed stream entry: {e}", code=-errno.EINVAL) from e

    @property
    def streams(self) -> Sequence[StreamDescriptor]:
        if self._streams is None:
            raise StreamInfoError("probe_streams() has not been called", code=-errno.EINVAL)
        return tuple(self._streams)

    def close(self) -> None:
        self._payload = {}
        self._streams = None
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed


class FFprobeAdapter(MediaProbePort):
    """
    MediaProbePort backed by the `ffprobe` executable. One subprocess per
    file; calls block until ffprobe exits (or `timeout_sec`, if configured).
    """

    def __init__(self, config: Optional[FFProbeConfig] = None):
        cfg = config or FFProbeConfig()
        candidate = cfg.bin
        resolved = shutil.which(candidate)
        if not resolved:
            raise FFprobeNotFound(f"{candidate} not found on PATH; install ffmpeg or pass --ffprobe.")
        self.ffprobe_bin = resolved
        self.timeout_sec = cfg.timeout_sec
        self.log_level = cfg.log_level

    # ---- Port API -------------------------------------------------------------
    @contextmanager
    def open(self, path: Path) -> Iterator[FFprobeHandle]:
        handle = FFprobeHandle(Path(path), self._run(Path(path)))
        try:
            yield handle
        finally:
            handle.close()

    def _run(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            raise ProbeOpenError(os.strerror(errno.ENOENT), code=-errno.ENOENT)

        cmd = build_ffprobe_cmd(self.ffprobe_bin, path, self.log_level)
        logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeOpenError(f"ffprobe timed out after {self.timeout_sec}s", code=-errno.ETIMEDOUT) from e
        except OSError as e:
            raise ProbeOpenError(f"failed to execute ffprobe: {e}", code=-(e.errno or errno.EIO)) from e

        if proc.returncode != 0:
            raise ProbeOpenError(_last_line(proc.stderr) or "ffprobe failed", code=proc.returncode)

        try:
            data = json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as e:
            raise ProbeOpenError("ffprobe produced invalid JSON", code=-errno.EINVAL) from e
        if not isinstance(data, dict) or not data.get("format"):
            raise ProbeOpenError("Invalid data found when processing input", code=-errno.EINVAL)
        return data


# ---- Parsing helpers ------------------------------------------------------
def parse_stream(s: Dict[str, Any], position: int) -> StreamDescriptor:
    index = s.get("index", position)
    media_type = MediaType.from_codec_type(s.get("codec_type"))
    codec_id = str(s.get("codec_name") or "none")

    codec_tag = None
    profile = None
    if media_type is MediaType.video:
        codec_tag = _parse_tag(s.get("codec_tag_string"))
        profile = _parse_profile(s.get("profile"))

    return StreamDescriptor(
        index=int(index),
        media_type=media_type,
        codec_id=codec_id,
        codec_tag=codec_tag,
        profile=profile,
        language=_get_tag(s, "language") or UNDETERMINED_LANGUAGE,
    )


def _parse_tag(tag: Any) -> Optional[str]:
    if tag is None:
        return None
    t = str(tag)
    if not t or t == _EMPTY_TAG:
        return None
    return t


def _parse_profile(profile: Any) -> Optional[str]:
    # ffprobe writes "unknown" when the decoder reports no profile
    if profile is None:
        return None
    p = str(profile).strip()
    if not p or p.lower() == "unknown":
        return None
    return p


def _get_tag(obj: Dict[str, Any] | None, key: str) -> Optional[str]:
    if not obj:
        return None
    tags = obj.get("tags") or {}
    if not isinstance(tags, dict):
        return None
    val = tags.get(key)
    if val is None or not str(val).strip():
        return None
    return str(val)


def _last_line(text: Optional[str]) -> str:
    lines = [ln.strip() for ln in (text or "").splitlines() if ln.strip()]
    return lines[-1] if lines else ""
