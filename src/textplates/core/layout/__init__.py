"""Layout package: word wrap + (char, row, col) placement."""

from __future__ import annotations

from .wrap import PlacedChar, layout, split_lines, wrap, wrap_text

__all__ = [
    "PlacedChar",
    "layout",
    "split_lines",
    "wrap",
    "wrap_text",
]
