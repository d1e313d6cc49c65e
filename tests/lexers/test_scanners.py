# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_scanners.py
#   file_relpath : tests/lexers/test_scanners.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the lexical scanners of each comment/string family."""

from __future__ import annotations

import pytest

from argflow.errors import UnbalancedBracketsError
from argflow.lexers import SyntaxState, get_scanner


def test_state_is_resumable_and_immutable() -> None:
    """Advancing from a state never alters it and matches a scan from the start."""
    scanner = get_scanner("python")
    text = "f(a, 'x(', [b, c])"
    mid: SyntaxState = scanner.parse_state(text, 7)
    resumed = scanner.advance(mid, text, 13)
    assert mid.pos == 7
    assert resumed == scanner.parse_state(text, 13)
    assert resumed.depth == 2


def test_advance_to_an_earlier_offset_returns_the_same_state() -> None:
    """A state is never rewound."""
    scanner = get_scanner("plain")
    state = scanner.parse_state("(a)", 2)
    assert scanner.advance(state, "(a)", 1) is state


@pytest.mark.parametrize(
    ("language", "text", "probe", "in_string", "in_comment"),
    [
        ("python", "f('a, b')", "b", True, False),
        ("python", 'f("""a, (b""")', "b", True, False),
        ("python", "f(a)  # (b", "b", False, True),
        ("c", "f(a /* (b */)", "b", False, True),
        ("c", "f(a) // (b", "b", False, True),
        ("javascript", "f(`a, ${b}`)", "b", True, False),
        ("lisp", '(foo "a (b")', "b", True, False),
        ("lisp", "(foo a) ; (b", "b", False, True),
        ("lisp", "(foo #| (b |# a)", "b", False, True),
        ("html", "<!-- <b -->", "b", False, True),
        ("css", "a { url(http://b) }", "b", False, False),
        ("json", '{"a": "b, c"}', "b", True, False),
        ("plain", "f('a, b')", "b", False, False),
    ],
)
def test_string_and_comment_detection(
    language: str, text: str, probe: str, in_string: bool, in_comment: bool
) -> None:
    """Each family recognizes its own strings and comments."""
    scanner = get_scanner(language)
    state = scanner.parse_state(text, text.index(probe))
    assert state.in_string is in_string
    assert state.in_comment is in_comment


def test_escaped_quote_does_not_end_a_string() -> None:
    """A backslash escapes the next character inside a string."""
    scanner = get_scanner("python")
    text = r"f('a\', b', c)"
    assert scanner.parse_state(text, text.index("b")).in_string
    assert not scanner.parse_state(text, text.index("c")).in_string


def test_go_raw_strings_have_no_escapes() -> None:
    """A backslash does not escape the closing backquote of a Go raw string."""
    scanner = get_scanner("go")
    text = "f(`a\\`, b)"
    assert not scanner.parse_state(text, text.index("b")).in_string


def test_rust_lifetimes_are_not_strings() -> None:
    """`'a` introduces a lifetime in Rust, not a character literal."""
    scanner = get_scanner("rust")
    text = "f::<'a>(x, y)"
    state = scanner.parse_state(text, text.index("y"))
    assert not state.in_string
    assert state.innermost_open == text.index("(")


def test_lisp_character_literals_are_not_brackets() -> None:
    """`?\\(` quotes the bracket in Lisp code."""
    scanner = get_scanner("lisp")
    text = "(foo ?\\( bar)"
    assert scanner.matching_close(text, 0) == len(text)


def test_markup_quotes_are_strings_only_inside_tags() -> None:
    """An apostrophe in text content does not open a string."""
    scanner = get_scanner("html")
    text = "<p>don't (a, b)</p>"
    state = scanner.parse_state(text, text.index("a,"))
    assert not state.in_string
    assert state.innermost_open == text.index("(")

    attrs = '<a title="x, y" href="z">'
    assert scanner.parse_state(attrs, attrs.index("y")).in_string
    assert scanner.parse_state(attrs, attrs.index("href")).innermost_open == 0


def test_matching_close_returns_offset_past_the_closer() -> None:
    """The returned offset is one past the balancing bracket."""
    scanner = get_scanner("python")
    text = "x = {'a': [1, (2)], 'b': ')'}"
    assert scanner.matching_close(text, 4) == len(text)
    assert scanner.matching_close(text, 10) == text.index("]") + 1


def test_matching_close_rejects_non_structural_offsets() -> None:
    """An offset inside a string or on a non-bracket is refused."""
    scanner = get_scanner("python")
    text = "f('(', a)"
    with pytest.raises(ValueError):
        scanner.matching_close(text, 3)
    with pytest.raises(ValueError):
        scanner.matching_close(text, 0)


def test_matching_close_raises_when_unbalanced() -> None:
    """A bracket without its closer raises with the opener offset."""
    scanner = get_scanner("c")
    text = "f(a, g(b)"
    with pytest.raises(UnbalancedBracketsError) as excinfo:
        scanner.matching_close(text, 1)
    assert excinfo.value.offset == 1


def test_bracket_characters() -> None:
    """Openers and closers list the bracket pairs of the scanner."""
    scanner = get_scanner("html")
    assert "<" in scanner.openers
    assert ">" in scanner.closers
    assert scanner.closer_for("[") == "]"
    with pytest.raises(ValueError):
        scanner.closer_for("x")
