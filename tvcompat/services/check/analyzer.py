# tvcompat/services/check/analyzer.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console

from tvcompat.common.logging import get_logger
from tvcompat.common.settings import CheckOptions, RemediationConfig
from tvcompat.domain.dataclasses.outcome import FileOutcome
from tvcompat.domain.enums.codec import FileVerdict
from tvcompat.domain.errors import ProbeError
from tvcompat.domain.policies import compatibility, remediation
from tvcompat.domain.ports.probe import MediaProbePort
from tvcompat.services.check import render

logger = get_logger()

# Only these are worth the cost of a probe.
CHECKED_EXTS = {".mkv", ".mp4", ".mov", ".webm", ".avi"}


def has_checked_extension(path: Path | str) -> bool:
    # text after the last dot of the basename; ".mkv" on its own counts
    base = str(path).rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return dot >= 0 and base[dot:].lower() in CHECKED_EXTS


class FileAnalyzer:
    """
    Probe one file, classify it, print its report and return the verdict.
    The caller owns the Summary; `analyze()` never touches shared state.
    """

    def __init__(
        self,
        prober: MediaProbePort,
        options: Optional[CheckOptions] = None,
        console: Optional[Console] = None,
        remediation_config: Optional[RemediationConfig] = None,
    ):
        self.prober = prober
        self.options = options or CheckOptions()
        self.console = console or render.make_console()
        self.remediation_config = remediation_config or RemediationConfig()

    def display_name(self, path: Path | str) -> str:
        p = str(path)
        return p if self.options.show_full_path else p.rsplit("/", 1)[-1]

    # --- main ---------------------------------------------------------------

    def analyze(self, path: Path | str) -> FileVerdict:
        if not has_checked_extension(path):
            return FileVerdict.skipped

        name = self.display_name(path)
        try:
            outcome = self.probe(path)
        except ProbeError as e:
            logger.debug("probe failed for %s at %s stage: %s (%s)", path, e.stage, e.message, e.code)
            if self.options.brief:
                self.console.print(render.brief_error_line(name, e))
            else:
                self.console.print(render.error_line(name, e))
            return FileVerdict.error

        verdict = FileVerdict.ok if outcome.all_supported else FileVerdict.not_supported

        if self.options.brief:
            line = render.brief_line(name, outcome)
            if line is not None:
                self.console.print(line)
            return verdict

        if self.options.skip_ok and outcome.all_supported:
            return verdict
        if self.options.skip_unfixable and outcome.is_unfixable:
            return verdict

        self.report(path, name, outcome)
        return verdict

    def probe(self, path: Path | str) -> FileOutcome:
        """Run the prober and classify; the handle is closed on every path out."""
        with self.prober.open(Path(path)) as handle:
            handle.probe_streams()
            return compatibility.evaluate(handle.container, handle.streams)

    def report(self, path: Path | str, name: str, outcome: FileOutcome) -> None:
        cfg = self.remediation_config
        remux_cmd = None
        transcode_cmd = None
        if remediation.should_suggest_remux(outcome):
            remux_cmd = remediation.suggest_remux(str(path), cfg)
        if remediation.should_suggest_transcode(outcome):
            transcode_cmd = remediation.suggest_transcode(str(path), outcome.stream_results, cfg)

        for line in render.verbose_report(name, outcome, remux_cmd=remux_cmd, transcode_cmd=transcode_cmd):
            self.console.print(line)
