# tvcompat/cli.py
from __future__ import annotations

import argparse
import os
import stat
import sys
from typing import List, NoReturn, Optional, Sequence

from pydantic import ValidationError
from rich.console import Console

from tvcompat import __version__
from tvcompat.common.logging import configure_logging, get_logger
from tvcompat.common.settings import CheckOptions, FFProbeConfig, Settings
from tvcompat.domain.ports.probe import MediaProbePort
from tvcompat.services.check.service import CheckService
from tvcompat.services.probe.ffprobe_adapter import FFprobeAdapter, FFprobeNotFound

logger = get_logger()

EXIT_OK = 0
EXIT_USAGE = 1


class _ArgumentParser(argparse.ArgumentParser):
    # bad arguments exit 1 like every other input problem (argparse uses 2)
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="tvcompat",
        description=(
            "Check whether video files play on a Samsung Frame (2024) TV and "
            "suggest ffmpeg commands to remux or transcode the ones that do not."
        ),
    )
    p.add_argument("input", nargs="?", help="file or directory to check")
    p.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="skip directories whose full path matches GLOB (repeatable)",
    )
    p.add_argument("--fullpath", action="store_true", help="show paths as given instead of file names")
    p.add_argument("--brief", action="store_true", help="one line per unsupported file, no summary")
    p.add_argument("--skip-ok", action="store_true", help="hide fully supported files")
    p.add_argument(
        "--skip-unfixable",
        action="store_true",
        help="hide files whose only problem is a bitmap subtitle",
    )
    p.add_argument("--ffprobe", default="ffprobe", metavar="PATH", help="ffprobe executable")
    p.add_argument(
        "--probe-timeout",
        type=float,
        default=None,
        metavar="SEC",
        help="give up on a file after SEC seconds (default: wait)",
    )
    p.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error", "critical"],
        help="diagnostics written to stderr",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(
        log_level=args.log_level,
        ffprobe=FFProbeConfig(bin=args.ffprobe, timeout_sec=args.probe_timeout),
        options=CheckOptions(
            brief=args.brief,
            skip_ok=args.skip_ok,
            skip_unfixable=args.skip_unfixable,
            show_full_path=args.fullpath,
            excludes=args.exclude,
        ),
    )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    prober: Optional[MediaProbePort] = None,
    console: Optional[Console] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if not args.input:
        parser.print_usage(sys.stderr)
        print("No file or directory specified.", file=sys.stderr)
        return EXIT_USAGE

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return EXIT_USAGE
    configure_logging(settings.log_level)

    target: str = args.input
    try:
        st = os.stat(target)
    except OSError as e:
        print(f"Could not stat '{target}': {e.strerror or e}", file=sys.stderr)
        return EXIT_USAGE
    if not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode)):
        print(f"'{target}' is not a regular file or directory.", file=sys.stderr)
        return EXIT_USAGE

    if prober is None:
        try:
            prober = FFprobeAdapter(settings.ffprobe)
        except FFprobeNotFound as e:
            print(str(e), file=sys.stderr)
            return EXIT_USAGE

    service = CheckService(prober, settings=settings, console=console)
    summary = service.run(target)
    service.print_summary(summary)
    return EXIT_OK


def run(argv: Optional[List[str]] = None) -> NoReturn:
    """Console-script entry point."""
    sys.exit(main(argv))
