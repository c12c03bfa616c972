# tvcompat/services/check/service.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from tvcompat.common.logging import get_logger
from tvcompat.common.settings import Settings
from tvcompat.domain.dataclasses.reports import Summary
from tvcompat.domain.ports.probe import MediaProbePort
from tvcompat.services.check import render
from tvcompat.services.check.analyzer import FileAnalyzer
from tvcompat.services.filesystem.walker import Matcher, glob_matches, walk_media_files

logger = get_logger()


class CheckService:
    """
    High-level orchestrator: resolves the input into files, runs the
    analyzer on each in turn and folds the verdicts into a Summary.
    """

    def __init__(
        self,
        prober: MediaProbePort,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        matcher: Matcher = glob_matches,
    ):
        self.settings = settings or Settings()
        self.console = console or render.make_console()
        self.matcher = matcher
        self.analyzer = FileAnalyzer(
            prober,
            options=self.settings.options,
            console=self.console,
            remediation_config=self.settings.remediation,
        )

    def check_file(self, path: Path | str, summary: Optional[Summary] = None) -> Summary:
        summary = summary if summary is not None else Summary()
        summary.record(self.analyzer.analyze(path))
        return summary

    def check_files(self, paths: Iterable[Path | str], summary: Optional[Summary] = None) -> Summary:
        summary = summary if summary is not None else Summary()
        for p in paths:
            self.check_file(p, summary)
        return summary

    def check_tree(self, root: Path | str, summary: Optional[Summary] = None) -> Summary:
        files = walk_media_files(root, self.settings.options.excludes, matcher=self.matcher)
        return self.check_files(files, summary)

    def run(self, target: Path | str) -> Summary:
        """Check a file or a directory tree; the caller validates `target` exists."""
        p = Path(target)
        if p.is_dir():
            summary = self.check_tree(target)
        else:
            summary = self.check_file(target)
        logger.info(
            "checked %d file(s): %d ok, %d not supported, %d errors",
            summary.total, summary.ok, summary.not_supported, summary.errors,
        )
        return summary

    def print_summary(self, summary: Summary) -> None:
        if self.settings.options.brief:
            return
        for line in render.summary_block(summary):
            self.console.print(line)
