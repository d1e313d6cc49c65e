# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_scope.py
#   file_relpath : tests/test_scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `argflow.scope.ScopeResolver`."""

from __future__ import annotations

import pytest

from argflow.buffer import Span, TextBuffer
from argflow.errors import UnbalancedBracketsError
from argflow.lexers import get_scanner
from argflow.scope import ScopeResolver
from tests.conftest import split_cursor


def _resolver(text: str, language: str = "python") -> ScopeResolver:
    return ScopeResolver(TextBuffer(text), get_scanner(language))


def test_bounded_view_returns_the_innermost_pair() -> None:
    """The span covers both brackets of the innermost enclosing pair."""
    text, cursor = split_cursor("foo(a, g(b|, c), d)")
    span = _resolver(text).bounded_view(cursor)
    assert span == Span(8, 14)
    assert text[span.start : span.end] == "(b, c)"


def test_bounded_view_skips_brackets_in_strings_and_comments() -> None:
    """Brackets inside strings or comments are not structural."""
    text, cursor = split_cursor('foo(")", # (\n  a|)')
    span = _resolver(text).bounded_view(cursor)
    assert span is not None
    assert span.start == 3
    assert span.end == len(text)


def test_bounded_view_without_enclosing_bracket_is_none() -> None:
    """Top-level prose has no enclosing pair; that is not an error."""
    text, cursor = split_cursor("x = 1| + 2")
    assert _resolver(text).bounded_view(cursor) is None


def test_bounded_view_raises_on_unbalanced_brackets() -> None:
    """An opening bracket that is never closed is reported with its offset."""
    text, cursor = split_cursor("foo(a|, b")
    with pytest.raises(UnbalancedBracketsError) as excinfo:
        _resolver(text).bounded_view(cursor)
    assert excinfo.value.offset == 3


def test_bounded_view_raises_on_mismatched_brackets() -> None:
    """A pair closed by the wrong kind of bracket is unbalanced."""
    text, cursor = split_cursor("foo(a|, b]")
    with pytest.raises(UnbalancedBracketsError):
        _resolver(text).bounded_view(cursor)


def test_active_region_and_single_line() -> None:
    """The active region excludes the brackets; line checks use the buffer text."""
    resolver = _resolver("f(a,\n  b)")
    span = Span(1, 9)
    assert resolver.active_region(span) == Span(2, 8)
    assert not resolver.is_single_line(span)
    assert resolver.is_single_line(Span(1, 4))
    assert resolver.bracket_char_at(1) == "("


def test_comment_and_string_predicates() -> None:
    """Predicates distinguish code, strings and comments."""
    text = "f('a, b')  # c"
    resolver = _resolver(text)
    assert resolver.is_in_comment_or_string(text.index("a"))
    assert resolver.is_in_string_or_comment(text.index("c"))
    assert resolver.is_in_comment(text.index("c"))
    assert not resolver.is_in_comment(text.index("a"))
    assert not resolver.is_in_comment_or_string(1)


def test_lexical_state_ignores_narrowing() -> None:
    """Narrowing never changes what counts as a string."""
    text = "x = 'a (b, c)'"
    buf = TextBuffer(text)
    resolver = ScopeResolver(buf, get_scanner("python"))
    cursor = text.index("b")
    with buf.narrowed(text.index("("), len(text)):
        assert resolver.bounded_view(cursor) is None
        assert resolver.is_in_comment_or_string(cursor)
