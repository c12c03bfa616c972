# tvcompat/services/filesystem/walker.py
from __future__ import annotations

import os
import stat
import sys
from fnmatch import fnmatchcase
from typing import Callable, Iterator, Optional, Sequence

from tvcompat.common.logging import get_logger

logger = get_logger()

Matcher = Callable[[str, str], bool]  # (pattern, path) -> matched
ErrorHook = Callable[[str, OSError], None]


def glob_matches(pattern: str, path: str) -> bool:
    """Shell-style match over the whole path; '*' also crosses '/'."""
    return fnmatchcase(path, pattern)


def is_excluded(path: str, excludes: Sequence[str], matcher: Matcher = glob_matches) -> bool:
    return any(matcher(pattern, path) for pattern in excludes)


def report_unreadable_dir(path: str, exc: OSError) -> None:
    reason = exc.strerror or str(exc)
    print(f"Could not open directory: {path} ({reason})", file=sys.stderr)


def walk_media_files(
    root: str | os.PathLike,
    excludes: Sequence[str] = (),
    *,
    matcher: Matcher = glob_matches,
    on_dir_error: Optional[ErrorHook] = report_unreadable_dir,
) -> Iterator[str]:
    """
    Yield regular files under `root`, depth first, entries sorted by name.

    Paths are built as "<dir>/<name>" from `root` exactly as given, so
    "./videos" yields "./videos/a.mkv" and exclude patterns see that same
    string. Directories whose path matches an exclude pattern are pruned,
    never entered. Files are not matched against the patterns. An unreadable
    directory is reported through `on_dir_error` and skipped; entries that
    vanish before they can be stat'ed are skipped quietly.
    """
    root = os.fspath(root)
    try:
        names = sorted(os.listdir(root))
    except OSError as e:
        if on_dir_error is not None:
            on_dir_error(root, e)
        return

    for name in names:
        path = f"{root}/{name}"
        try:
            st = os.stat(path)
        except OSError as e:
            logger.debug("skipping %s: %s", path, e)
            continue

        if stat.S_ISDIR(st.st_mode):
            if is_excluded(path, excludes, matcher):
                logger.debug("excluded directory %s", path)
                continue
            yield from walk_media_files(path, excludes, matcher=matcher, on_dir_error=on_dir_error)
        elif stat.S_ISREG(st.st_mode):
            yield path
