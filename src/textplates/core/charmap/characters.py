"""
characters.py — Character table for text plate variants.

The table lives in ``characters.json`` next to this module and is keyed by a
logical name:

    {"A": {"char": "A", "replacements": ["a", ...], "variant": 2}, ...}

``char`` is the glyph the plate shows, ``replacements`` are characters drawn
with the same plate, ``variant`` is the 1-indexed plate variation. The entry
named ``Cog`` is used for anything the table does not know.

Load-time invariants (checked once, raise CharacterTableError):
  - table conforms to schemas/characters.schema.json
  - no character is claimed by two entries (canonical or replacement)
  - no two entries share a variant
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from textplates.core.errors import CharacterTableError
from textplates.core.utils.schema_validate import schema_path, validate_instance

LOG = logging.getLogger(__name__)

CHARACTERS_PATH = Path(__file__).resolve().parent / "characters.json"
FALLBACK_NAME = "Cog"


@dataclass(frozen=True)
class CharacterEntry:
    name: str
    char: str
    replacements: tuple[str, ...]
    variant: int

    @property
    def characters(self) -> tuple[str, ...]:
        return (self.char, *self.replacements)


@dataclass(frozen=True)
class CharacterTable:
    entries: tuple[CharacterEntry, ...]
    index: Mapping[str, CharacterEntry]
    fallback: CharacterEntry

    @property
    def variant_count(self) -> int:
        return max(e.variant for e in self.entries)

    def lookup(self, character: str) -> CharacterEntry | None:
        return self.index.get(character)


def build_table(raw: Mapping[str, Any], *, label: str = "character table") -> CharacterTable:
    """Validate ``raw`` and build the immutable character index."""
    validate_instance(
        schema_path=schema_path("characters"),
        instance=raw,
        label=label,
        error_cls=CharacterTableError,
    )

    entries: list[CharacterEntry] = []
    index: dict[str, CharacterEntry] = {}
    variants: dict[int, str] = {}
    for name, value in raw.items():
        entry = CharacterEntry(
            name=name,
            char=value["char"],
            replacements=tuple(value.get("replacements", ())),
            variant=int(value["variant"]),
        )
        if entry.variant in variants:
            raise CharacterTableError(
                f"{label}: variant {entry.variant} used by both {variants[entry.variant]!r} and {name!r}"
            )
        variants[entry.variant] = name
        for ch in entry.characters:
            owner = index.get(ch)
            if owner is not None:
                raise CharacterTableError(
                    f"{label}: character {ch!r} claimed by both {owner.name!r} and {name!r}"
                )
            index[ch] = entry
        entries.append(entry)

    fallback = next(e for e in entries if e.name == FALLBACK_NAME)
    LOG.debug("%s: %d entries, %d characters indexed", label, len(entries), len(index))
    return CharacterTable(entries=tuple(entries), index=MappingProxyType(index), fallback=fallback)


def load_table(path: Path = CHARACTERS_PATH) -> CharacterTable:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CharacterTableError(f"cannot read character table {path}: {exc}") from exc
    return build_table(raw, label=path.name)


TABLE = load_table()


def resolve_variant(character: str) -> int:
    """Return the 1-indexed plate variant for ``character``.

    Never fails: characters missing from the table map to the ``Cog`` variant.
    """
    entry = TABLE.lookup(character)
    if entry is None:
        return TABLE.fallback.variant
    return entry.variant


def is_supported(character: str) -> bool:
    return character in TABLE.index


def unsupported_characters(text: str) -> list[str]:
    """Distinct non-whitespace characters of ``text`` that fall back to the ``Cog`` plate, in order of appearance."""
    seen: dict[str, None] = {}
    for ch in text:
        if ch.isspace() or ch in seen or is_supported(ch):
            continue
        seen[ch] = None
    return list(seen)


def strip_unsupported(text: str) -> str:
    """Remove characters that have no plate of their own (whitespace is kept)."""
    return "".join(ch for ch in text if ch.isspace() or is_supported(ch))
