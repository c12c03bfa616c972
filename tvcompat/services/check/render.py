# tvcompat/services/check/render.py
from __future__ import annotations

from typing import List, Optional, TextIO, Tuple, Union

from rich.console import Console, ConsoleOptions, RenderResult
from rich.segment import Segment
from rich.style import Style
from rich.text import Text

from tvcompat.domain.dataclasses.outcome import ClassificationResult, FileOutcome
from tvcompat.domain.dataclasses.reports import Summary
from tvcompat.domain.errors import ProbeError, StreamInfoError

OK_STYLE = "green"
BAD_STYLE = "red"
WARN_STYLE = "yellow"

SEPARATOR = "----------------"

Part = Union[str, Tuple[str, str]]


def make_console(
    file: Optional[TextIO] = None,
    *,
    force_terminal: Optional[bool] = None,
    color_system: Optional[str] = "auto",
) -> Console:
    """
    Console for report output. File names and ffmpeg commands must print
    verbatim: no markup, emoji or highlighting, and no wrapping.
    """
    return Console(
        file=file,
        force_terminal=force_terminal,
        color_system=color_system,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


class Verbatim:
    """
    One output line written exactly as given, optionally styled per part.

    `Text` strips control characters and expands tabs, which would change
    file names and the quoted paths inside a suggested command.
    """

    def __init__(self, *parts: Part):
        self._parts: List[Tuple[str, Optional[str]]] = []
        for part in parts:
            if isinstance(part, str):
                self.append(part)
            else:
                self.append(*part)

    def append(self, text: str, style: Optional[str] = None) -> "Verbatim":
        self._parts.append((text, style))
        return self

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        for text, style in self._parts:
            yield Segment(text, Style.parse(style) if style else None)
        yield Segment.line()


Line = Union[Text, Verbatim]


def _verdict(ok: bool) -> Text:
    return Text("OK", style=OK_STYLE) if ok else Text("NOT SUPPORTED", style=BAD_STYLE)


# ---- brief -------------------------------------------------------------------

def brief_line(name: str, outcome: FileOutcome) -> Optional[Verbatim]:
    """`name:[container:x][0:video:h264:eng]...`, or None when all is fine."""
    if outcome.all_supported:
        return None
    line = Verbatim(f"{name}:")
    if not outcome.container_supported:
        line.append(f"[container:{outcome.container.display_name}]", BAD_STYLE)
    for r in outcome.stream_results:
        s = r.stream
        line.append(
            f"[{s.index}:{s.media_type.value}:{s.codec_id}:{s.language}]",
            OK_STYLE if r.supported else BAD_STYLE,
        )
    return line


def brief_error_line(name: str, err: ProbeError) -> Verbatim:
    what = "could not read stream info" if isinstance(err, StreamInfoError) else "could not open"
    return Verbatim(f"{name}: ", (f"error: {what} ({err.code})", WARN_STYLE))


# ---- verbose -----------------------------------------------------------------

def error_line(name: str, err: ProbeError) -> Verbatim:
    return Verbatim(f"{name}: ", (f"error: {err.message}", WARN_STYLE))


def stream_line(r: ClassificationResult) -> Text:
    s = r.stream
    return Text.assemble(
        f"    [{s.index}] {s.media_type.value} | {s.codec_id} | {s.language} | ",
        _verdict(r.supported),
    )


def bitmap_note(r: ClassificationResult) -> Text:
    s = r.stream
    return Text(
        f"  Note: Subtitle stream {s.index} ({s.codec_id}) is bitmap-based and cannot be "
        "converted to srt. It will be copied as-is (may not be supported on your TV).",
        style=WARN_STYLE,
    )


def verbose_report(
    name: str,
    outcome: FileOutcome,
    *,
    remux_cmd: Optional[str] = None,
    transcode_cmd: Optional[str] = None,
) -> List[Line]:
    lines: List[Line] = [
        Text(SEPARATOR),
        Text(""),
        Verbatim(name),
        Text.assemble(f"  container: {outcome.container.display_name} | ", _verdict(outcome.container_supported)),
    ]
    for r in outcome.stream_results:
        lines.append(stream_line(r))
        if r.is_bitmap_subtitle:
            lines.append(bitmap_note(r))

    overall = "ALL TRACKS SUPPORTED" if outcome.all_supported else "SOME TRACKS UNSUPPORTED"
    lines.append(Text.assemble("  overall: ", (overall, OK_STYLE if outcome.all_supported else BAD_STYLE)))

    if remux_cmd:
        lines += [
            Text(""),
            Text("  Suggested remuxing command:"),
            Verbatim(f"    {remux_cmd}"),
            Text(
                "    (This changes only the container; streams are copied without re-encoding)",
                style=WARN_STYLE,
            ),
        ]
    if transcode_cmd:
        lines += [
            Text(""),
            Text("  Suggested ffmpeg command:"),
            Verbatim(f"    {transcode_cmd}"),
        ]
    lines.append(Text(""))
    return lines


# ---- summary -----------------------------------------------------------------

def summary_block(summary: Summary) -> List[Text]:
    return [
        Text(""),
        Text("--- Summary ---"),
        Text(f"Total checked: {summary.total}"),
        Text(f"OK: {summary.ok}", style=OK_STYLE),
        Text(f"NOT SUPPORTED: {summary.not_supported}", style=BAD_STYLE),
        Text(f"Errors: {summary.errors}", style=WARN_STYLE),
    ]
