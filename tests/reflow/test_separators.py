# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_separators.py
#   file_relpath : tests/reflow/test_separators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for separators and top-level split point discovery."""

from __future__ import annotations

import re

import pytest

from argflow.buffer import Span
from argflow.config.policy import PlacementPolicy
from argflow.lexers import get_scanner
from argflow.reflow.separators import Separator, iter_split_points


def _points(text: str, separator: Separator, language: str = "python") -> list[str]:
    """Return the text of every top-level split point of the first bracket pair."""
    scanner = get_scanner(language)
    start = text.index("(")
    region = Span(start + 1, scanner.matching_close(text, start) - 1)
    return [text[p.start : p.end] for p in iter_split_points(text, region, separator, scanner)]


def _offsets(text: str, separator: Separator, language: str = "python") -> list[int]:
    scanner = get_scanner(language)
    start = text.index("(")
    region = Span(start + 1, scanner.matching_close(text, start) - 1)
    return [p.start for p in iter_split_points(text, region, separator, scanner)]


def test_separator_rejects_empty_text() -> None:
    """An empty separator would split everywhere."""
    with pytest.raises(ValueError):
        Separator("")


def test_literal_separator_is_escaped() -> None:
    """Literal separators match their text verbatim."""
    assert Separator(".*;").compile().pattern == re.escape(".*;")
    assert Separator(".*;").regex.search("a.*;b") is not None
    assert Separator(".*;").regex.search("ab;") is None


def test_pattern_separator_is_a_regex() -> None:
    """Pattern separators are compiled as-is."""
    sep = Separator(r"[,;]", is_pattern=True)
    assert sep.regex.pattern == "[,;]"
    with pytest.raises(re.error):
        Separator("(", is_pattern=True).compile()


def test_whitespace_separator_matches_runs() -> None:
    """A literal space separator matches a run of spaces and tabs."""
    sep = Separator(" ")
    assert sep.is_whitespace
    match = sep.regex.search("a  \tb")
    assert match is not None
    assert match.group(0) == "  \t"
    assert not Separator(",").is_whitespace


def test_separator_from_policy() -> None:
    """The policy carries the separator text and kind."""
    sep = Separator.from_policy(PlacementPolicy(argument_separator=";", separator_is_pattern=True))
    assert sep == Separator(";", is_pattern=True)


def test_only_top_level_separators_are_split_points() -> None:
    """Separators in nested brackets, strings and comments are skipped."""
    text = 'f(a, "b, c", [d, e], {f: g, h: i}, j)'
    assert _offsets(text, Separator(",")) == [3, 11, 19, 33]


def test_separators_in_comments_are_skipped() -> None:
    """A comma inside a line comment is not a split point."""
    text = "f(a,  # x, y\n  b)"
    assert _offsets(text, Separator(",")) == [3]


def test_separators_in_block_comments_are_skipped() -> None:
    """A comma inside a block comment is not a split point."""
    text = "f(a /* x, y */, b)"
    assert _points(text, Separator(","), "c") == [","]


def test_pattern_separator_keeps_matched_text() -> None:
    """Each split point covers the text its match actually consumed."""
    text = "f(a; b, c)"
    assert _points(text, Separator(r"[,;]", is_pattern=True)) == [";", ","]


def test_pattern_crossing_a_nesting_boundary_is_rejected() -> None:
    """A match that ends inside a nested bracket is not top-level."""
    text = "f(a, [b], c)"
    assert _offsets(text, Separator(r", \[", is_pattern=True)) == []
    assert _offsets(text, Separator(r",", is_pattern=True)) == [3, 8]


def test_greedy_pattern_split_point_excludes_item_text() -> None:
    """A pattern that also matches item text only claims the separator at its end."""
    text = "f(a.*; b.*; c)"
    assert _points(text, Separator(".*;", is_pattern=True)) == [";"]
    assert _offsets(text, Separator(".*;", is_pattern=True)) == [text.rindex(";")]
    assert _points(text, Separator(".*?;", is_pattern=True)) == [";", ";"]


def test_pattern_keeps_whitespace_around_the_separator() -> None:
    """Only item text is cut from a match, never whitespace."""
    text = "f(a , b)"
    assert _points(text, Separator(r"\s*,\s*", is_pattern=True)) == [" , "]


def test_empty_pattern_matches_are_ignored() -> None:
    """Zero-width matches never delimit items."""
    text = "f(a;b)"
    assert _points(text, Separator(r";?", is_pattern=True)) == [";"]


def test_no_separator_yields_nothing() -> None:
    """A single-item list has no split points; that is not an error."""
    assert _offsets("f(abc)", Separator(",")) == []


def test_split_points_are_lazy() -> None:
    """The generator only scans as far as the consumer asks."""
    scanner = get_scanner("plain")
    text = "f(a, b, c)"
    gen = iter_split_points(text, Span(2, 9), Separator(","), scanner)
    assert next(gen) == Span(3, 4)
    assert next(gen) == Span(6, 7)
    assert list(gen) == []


def test_lisp_whitespace_split_points() -> None:
    """Lisp items are separated by runs of whitespace."""
    text = "(foo  a \"b c\" (d e))"
    assert _offsets(text, Separator(" "), "lisp") == [4, 7, 13]
