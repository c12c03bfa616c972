# tvcompat/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass

from tvcompat.domain.enums.codec import FileVerdict


@dataclass
class Summary:
    """Run-wide counters. One instance is threaded through a whole run."""
    total: int = 0
    ok: int = 0
    not_supported: int = 0
    errors: int = 0

    def record(self, verdict: FileVerdict) -> None:
        # errors and skipped files do not count towards `total`
        if verdict is FileVerdict.ok:
            self.ok += 1
            self.total += 1
        elif verdict is FileVerdict.not_supported:
            self.not_supported += 1
            self.total += 1
        elif verdict is FileVerdict.error:
            self.errors += 1
