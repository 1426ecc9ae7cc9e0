from __future__ import annotations

import pytest

from textplates.core.blueprint import PROJECT_URL, Blueprint, Position, generate_blueprint
from textplates.core.charmap import TABLE, resolve_variant
from textplates.core.errors import ConfigurationError, EmptyInputError
from textplates.core.settings import TextPlateSettings


def _positions(bp: Blueprint) -> list[tuple[float, float]]:
    return [(e.position.x, e.position.y) for e in bp.entities]


def test_hi_example():
    bp = generate_blueprint("Hi", {"size": "small", "material": "copper"})

    assert [e.entity_number for e in bp.entities] == [1, 2]
    assert _positions(bp) == [(0.5, 0.5), (1.5, 0.5)]
    assert {e.name for e in bp.entities} == {"textplate-small-copper"}
    assert [e.variation for e in bp.entities] == [resolve_variant("H"), resolve_variant("I")]
    assert [(i.signal.type, i.signal.name, i.index) for i in bp.icons] == [
        ("virtual", "signal-H", 1),
        ("virtual", "signal-I", 2),
    ]
    assert bp.item == "blueprint"
    assert bp.label == "Text plates"
    assert bp.version == 562949954207746


def test_empty_text_raises():
    with pytest.raises(EmptyInputError):
        generate_blueprint("")


def test_whitespace_only_text_has_no_entities():
    bp = generate_blueprint("  \n ")
    assert bp.entities == ()
    assert bp.icons[0].signal.name == "textplate-small-copper"


def test_entity_numbers_are_contiguous():
    bp = generate_blueprint("a b\n  c\td\n\nef")
    assert [e.entity_number for e in bp.entities] == [1, 2, 3, 4, 5, 6]


def test_line_spacing_moves_rows():
    assert _positions(generate_blueprint("A\nB")) == [(0.5, 0.5), (0.5, 2.5)]
    assert _positions(generate_blueprint("A\nB", line_spacing=0)) == [(0.5, 0.5), (0.5, 1.5)]
    assert _positions(generate_blueprint("A\nB", line_spacing=-2)) == [(0.5, 0.5), (0.5, -0.5)]


def test_large_right_to_left():
    bp = generate_blueprint("AB\nC", size="large", text_direction="rtl")
    assert _positions(bp) == [(0.5, 0.5), (-1.5, 0.5), (0.5, -2.5)]
    assert bp.entities[0].name == "textplate-large-copper"


def test_max_line_length_wraps_before_layout():
    bp = generate_blueprint("ab cd", max_line_length=3)
    assert _positions(bp) == [(0.5, 0.5), (1.5, 0.5), (0.5, 2.5), (1.5, 2.5)]


def test_unsupported_character_uses_fallback_variant():
    bp = generate_blueprint("A€")
    assert [e.variation for e in bp.entities] == [2, TABLE.fallback.variant]


def test_icons_use_first_four_letters_or_digits():
    bp = generate_blueprint("ab-c d9 ef")
    assert [i.signal.name for i in bp.icons] == ["signal-A", "signal-B", "signal-C", "signal-D"]
    assert [i.index for i in bp.icons] == [1, 2, 3, 4]


def test_icon_defaults_to_plate_item():
    bp = generate_blueprint("!?", material="gold")
    assert len(bp.icons) == 1
    assert bp.icons[0].signal.name == "textplate-small-gold"
    assert bp.icons[0].signal.type is None
    assert bp.icons[0].index == 1


def test_description_embeds_text():
    bp = generate_blueprint("Hi")
    item = "[item=textplate-small-copper]"
    assert bp.description == f"{item} {PROJECT_URL}\nHi {item}"


def test_long_description_is_truncated():
    text = "x" * 600
    bp = generate_blueprint(text)
    raw = f"[item=textplate-small-copper] {PROJECT_URL}\n{text}"
    assert len(bp.description) == 499
    assert bp.description == raw[:496] + "..."


def test_settings_object_and_overrides():
    settings = TextPlateSettings(material="steel", label="Sign")
    bp = generate_blueprint("Hi", settings, size="large")
    assert bp.label == "Sign"
    assert bp.entities[0].name == "textplate-large-steel"
    assert bp.entities[1].position == Position(2.5, 0.5)


def test_invalid_settings_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        generate_blueprint("Hi", {"material": "cheese"})
    with pytest.raises(ConfigurationError):
        generate_blueprint("Hi", colour="red")


def test_long_label_is_kept_by_builder():
    bp = generate_blueprint("Hi", label="L" * 250)
    assert bp.label == "L" * 250


def _description_overhead() -> int:
    return len(generate_blueprint("x").description) - 1


def test_description_of_exactly_max_length_is_untouched():
    text = "y" * (499 - _description_overhead())
    bp = generate_blueprint(text)
    assert len(bp.description) == 499
    assert not bp.description.endswith("...")
    assert bp.description.endswith("[item=textplate-small-copper]")


def test_description_one_over_max_length_is_truncated():
    text = "y" * (500 - _description_overhead())
    bp = generate_blueprint(text)
    raw = f"[item=textplate-small-copper] {PROJECT_URL}\n{text} [item=textplate-small-copper]"
    assert len(raw) == 500
    assert bp.description == raw[:496] + "..."
