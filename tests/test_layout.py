from __future__ import annotations

from textplates.core.layout import PlacedChar, layout, wrap, wrap_text


def test_no_limit_splits_on_explicit_breaks_only():
    assert wrap("Hello world", 0) == ["Hello world"]
    assert wrap("a\nb\r\nc\rd", 0) == ["a", "b", "c", "d"]
    assert wrap("a\nb", -3, preserve_line_breaks=False) == ["a", "b"]


def test_greedy_wrap():
    assert wrap("the quick brown fox", 10) == ["the quick", "brown fox"]


def test_long_word_is_never_split():
    assert wrap("a extraordinary b", 5) == ["a", "extraordinary", "b"]


def test_word_filling_the_whole_line_does_not_leave_empty_first_line():
    assert wrap("abc", 3) == ["abc"]
    assert wrap("abcd ef", 3) == ["abcd", "ef"]


def test_line_breaks_collapse_unless_preserved():
    assert wrap("ab\ncd", 10, preserve_line_breaks=True) == ["ab", "cd"]
    assert wrap("ab\ncd", 10, preserve_line_breaks=False) == ["ab cd"]
    assert wrap("ab\r\ncd ef", 5, preserve_line_breaks=False) == ["ab cd", "ef"]


def test_wrapped_lines_respect_limit_unless_single_long_word():
    text = "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod"
    for limit in range(1, 20):
        for line in wrap(text, limit):
            assert len(line) <= limit or " " not in line


def test_empty_text_yields_one_empty_line():
    assert wrap("", 0) == [""]
    assert wrap("", 5) == [""]


def test_wrap_text_joins_with_newlines():
    assert wrap_text("the quick brown fox", 10) == "the quick\nbrown fox"


def test_layout_skips_whitespace_in_row_major_order():
    assert layout(["Hi", " a\t", ""]) == [
        PlacedChar("H", 0, 0),
        PlacedChar("i", 0, 1),
        PlacedChar("a", 1, 1),
    ]
