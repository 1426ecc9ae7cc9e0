"""
wrap.py — Word wrap and grid placement for text plates.

Two steps:
  1. wrap: split text into lines, optionally greedy-wrapping at a maximum length.
  2. layout: place every visible character on a (row, col) grid cell.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

LOG = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class PlacedChar:
    """One visible character and the grid cell it occupies."""

    char: str
    row: int
    col: int


def split_lines(text: str) -> list[str]:
    """Split on explicit line breaks only (``\\r\\n``, ``\\r``, ``\\n``)."""
    return _LINE_BREAK_RE.split(text)


def _wrap_words(text: str, max_line_length: int) -> list[str]:
    """Greedy wrap of one break-free line.

    A word joins the current line while ``len(line) + len(word) + 1`` fits.
    Words are never split; an over-long word ends up alone on its line.
    """
    lines: list[str] = []
    line = ""
    flushed = False
    for word in text.split(" "):
        if len(line) + len(word) + 1 <= max_line_length:
            line += (" " if line else "") + word
        else:
            # an empty first line is dropped, never emitted
            if flushed or line:
                lines.append(line)
                flushed = True
            line = word
    lines.append(line)
    return lines


def wrap(text: str, max_line_length: int = 0, preserve_line_breaks: bool = True) -> list[str]:
    """Return the lines of ``text`` after applying ``max_line_length``.

    ``max_line_length <= 0`` disables wrapping; the text is then split on its
    own line breaks and nothing else. With wrapping enabled and
    ``preserve_line_breaks`` false, existing breaks are collapsed to single
    spaces before wrapping.
    """
    if max_line_length <= 0:
        return split_lines(text)

    if preserve_line_breaks:
        lines: list[str] = []
        for source_line in split_lines(text):
            lines.extend(_wrap_words(source_line, max_line_length))
    else:
        lines = _wrap_words(_LINE_BREAK_RE.sub(" ", text), max_line_length)
    LOG.debug("wrapped %d chars into %d lines (max %d)", len(text), len(lines), max_line_length)
    return lines


def wrap_text(text: str, max_line_length: int = 0, preserve_line_breaks: bool = True) -> str:
    """Same as :func:`wrap`, joined back with ``\\n``."""
    return "\n".join(wrap(text, max_line_length, preserve_line_breaks))


def layout(lines: Iterable[str]) -> list[PlacedChar]:
    """Place visible characters row-major; whitespace cells are skipped, not filled."""
    placed: list[PlacedChar] = []
    for row, line in enumerate(lines):
        for col, ch in enumerate(line):
            if ch.isspace():
                continue
            placed.append(PlacedChar(ch, row, col))
    return placed
