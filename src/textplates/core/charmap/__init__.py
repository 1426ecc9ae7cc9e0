"""Character map package.

Public API:
- `resolve_variant(character)`
- `unsupported_characters(text)`, `strip_unsupported(text)`
- `TABLE` (the loaded, immutable character table)

    from textplates.core.charmap import resolve_variant
"""

from __future__ import annotations

from .characters import (
    TABLE,
    CharacterEntry,
    CharacterTable,
    build_table,
    is_supported,
    load_table,
    resolve_variant,
    strip_unsupported,
    unsupported_characters,
)

__all__ = [
    "TABLE",
    "CharacterEntry",
    "CharacterTable",
    "build_table",
    "is_supported",
    "load_table",
    "resolve_variant",
    "strip_unsupported",
    "unsupported_characters",
]
