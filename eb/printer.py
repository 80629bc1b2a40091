"""Print file contents with optional numbering, wrapping, and highlighting.

Source text is decoded tolerantly, neutralized or caret-escaped, colorized
with Pygments when color is on, then cut to a line range and wrapped to the
terminal width under a line-number gutter.
"""

from __future__ import annotations

import argparse
import logging
import pydoc
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TextIO

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ansi import wrap_ansi_line
from .config import DEFAULT_STYLE
from .terminal import stdout_is_tty, terminal_height, terminal_width

LOGGER = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
GUTTER_SEPARATOR = " │ "
FALLBACK_WRAP_WIDTH = 80
OPEN_BOUND = -1


class WrapMode(Enum):
    AUTO = "auto"
    NEVER = "never"
    CHARACTER = "character"


class PagingMode(Enum):
    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True)
class LineRange:
    """Inclusive 1-based line span; ``-1`` leaves that side open."""

    start: int = OPEN_BOUND
    end: int = OPEN_BOUND

    def contains(self, number: int) -> bool:
        if self.start != OPEN_BOUND and number < self.start:
            return False
        if self.end != OPEN_BOUND and number > self.end:
            return False
        return True


def parse_line_range(value: str) -> LineRange:
    """argparse type for ``N:M`` line ranges."""
    parts = value.split(":")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"invalid line range: {value!r} (expected N:M)")
    try:
        start, end = (int(part) if part else OPEN_BOUND for part in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid line range: {value!r}") from exc
    for bound in (start, end):
        if bound == 0 or bound < OPEN_BOUND:
            raise argparse.ArgumentTypeError(f"line numbers start at 1: {value!r}")
    if start != OPEN_BOUND and end != OPEN_BOUND and end < start:
        raise argparse.ArgumentTypeError(f"range end precedes start: {value!r}")
    return LineRange(start, end)


@dataclass(frozen=True)
class PrintOptions:
    numbers: bool = False
    line_range: LineRange = field(default_factory=LineRange)
    wrap: WrapMode = WrapMode.AUTO
    show_all: bool = False
    file_name: str = ""
    paging: PagingMode = PagingMode.AUTO
    color: bool = False
    style: str = DEFAULT_STYLE


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def show_nonprinting(line: str) -> str:
    """Render control characters in caret notation and mark the line end with ``$``."""
    out: list[str] = []
    for ch in line:
        code = ord(ch)
        if code == 127:
            out.append("^?")
        elif code < 32:
            out.append(f"^{chr(code + 64)}")
        elif 0x80 <= code <= 0x9F:
            out.append(f"M-^{chr(code - 0x80 + 64)}")
        else:
            out.append(ch)
    out.append("$")
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        LOGGER.warning("unknown style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for a 256-color terminal based on the file name."""
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    formatter = Terminal256Formatter(style=_normalize_style(style))
    return highlight(source, lexer, formatter)


def split_lines(source: str) -> list[str]:
    """Split on ``\\n`` only; a final newline does not start another line."""
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _source_lines(source: str, path: Path, options: PrintOptions) -> list[str]:
    if options.show_all:
        return [show_nonprinting(line) for line in split_lines(source)]
    source = sanitize_terminal_text(source.replace("\r\n", "\n"))
    lines = split_lines(source)
    if not options.color or not lines:
        return lines
    colored = split_lines(colorize_source(source, path, options.style))
    if len(colored) < len(lines):
        LOGGER.debug("highlighter changed line count for %s; printing plain text", path)
        return lines
    return colored[: len(lines)]


def _wrap_width(options: PrintOptions) -> int | None:
    if options.wrap is WrapMode.NEVER:
        return None
    width = terminal_width()
    if options.wrap is WrapMode.CHARACTER:
        return width or FALLBACK_WRAP_WIDTH
    if not stdout_is_tty():
        return None
    return width


def render_file(path: Path, options: PrintOptions, width: int | None = None) -> list[str]:
    """Return display lines for ``path`` (without trailing newlines).

    ``width`` is the wrap width in columns; ``None`` disables wrapping.
    """
    lines = _source_lines(read_text(path), path, options)
    number_width = len(str(len(lines))) if options.numbers else 0
    gutter = GUTTER_SEPARATOR if options.numbers else ""
    text_width = None if width is None else width - number_width - len(gutter)

    out: list[str] = []
    if options.file_name:
        out.append(f"File: {options.file_name}")
    for number, line in enumerate(lines, start=1):
        if not options.line_range.contains(number):
            continue
        chunks = wrap_ansi_line(line, text_width) if text_width and text_width > 0 else [line]
        prefix = f"{number:>{number_width}}{gutter}" if options.numbers else ""
        continuation = " " * number_width + gutter
        for idx, chunk in enumerate(chunks):
            out.append((prefix if idx == 0 else continuation) + chunk)
    return out


def _should_page(options: PrintOptions, line_count: int) -> bool:
    if options.paging is PagingMode.ALWAYS:
        return True
    if options.paging is PagingMode.NEVER or not stdout_is_tty():
        return False
    height = terminal_height()
    return height is not None and line_count > height


def print_file(path: Path, options: PrintOptions, out: TextIO | None = None) -> None:
    """Render ``path`` and write it to ``out`` or through the pager."""
    lines = render_file(path, options, _wrap_width(options))
    text = "".join(f"{line}\n" for line in lines)
    if out is None and _should_page(options, len(lines)):
        LOGGER.debug("paging %d lines for %s", len(lines), path)
        pydoc.pager(text)
        return
    (out or sys.stdout).write(text)
