# tvcompat/common/strings/shell.py
from __future__ import annotations


def quote_single(arg: str) -> str:
    """
    Wrap `arg` in single quotes for a POSIX shell. Embedded single quotes
    become '\\'' (close, escaped quote, reopen), so any byte sequence survives.

    Unlike shlex.quote, the result is always quoted, even for plain names.
    """
    return "'" + str(arg).replace("'", "'\\''") + "'"
