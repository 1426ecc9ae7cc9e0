from __future__ import annotations

import pytest

from textplates.core.charmap import (
    TABLE,
    build_table,
    resolve_variant,
    strip_unsupported,
    unsupported_characters,
)
from textplates.core.errors import CharacterTableError


def test_resolve_variant_canonical_and_replacements():
    assert resolve_variant("A") == 2
    assert resolve_variant("a") == 2
    assert resolve_variant("é") == resolve_variant("E")
    assert resolve_variant("[") == resolve_variant("(")
    assert resolve_variant("0") == 28


def test_resolve_variant_falls_back_to_cog():
    cog = TABLE.fallback
    assert cog.name == "Cog"
    assert resolve_variant("€") == cog.variant
    assert resolve_variant("\U0001F600") == cog.variant
    assert resolve_variant("⚙") == cog.variant


def test_every_variant_is_in_range():
    for code_point in range(0, 0x3000, 7):
        variant = resolve_variant(chr(code_point))
        assert 1 <= variant <= TABLE.variant_count


def test_table_claims_each_character_once():
    claimed = [ch for entry in TABLE.entries for ch in entry.characters]
    assert len(claimed) == len(set(claimed)) == len(TABLE.index)


def test_build_table_rejects_duplicate_character():
    raw = {
        "A": {"char": "A", "replacements": ["a"], "variant": 1},
        "Other": {"char": "a", "variant": 2},
        "Cog": {"char": "⚙", "variant": 3},
    }
    with pytest.raises(CharacterTableError, match="claimed by both"):
        build_table(raw)


def test_build_table_rejects_duplicate_variant():
    raw = {
        "A": {"char": "A", "variant": 1},
        "B": {"char": "B", "variant": 1},
        "Cog": {"char": "⚙", "variant": 2},
    }
    with pytest.raises(CharacterTableError, match="variant 1"):
        build_table(raw)


def test_build_table_requires_fallback_entry():
    with pytest.raises(CharacterTableError, match="Cog"):
        build_table({"A": {"char": "A", "variant": 1}})


def test_build_table_index_is_read_only():
    table = build_table({"A": {"char": "A", "variant": 1}, "Cog": {"char": "⚙", "variant": 2}})
    with pytest.raises(TypeError):
        table.index["B"] = table.fallback  # type: ignore[index]


def test_unsupported_characters_are_distinct_and_ordered():
    assert unsupported_characters("Hi €€ ü\n¥") == ["€", "ü", "¥"]
    assert unsupported_characters("Hello, World!") == []


def test_strip_unsupported_keeps_whitespace():
    assert strip_unsupported("a€ b\nü c") == "a b\n c"
