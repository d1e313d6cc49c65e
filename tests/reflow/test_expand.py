# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_expand.py
#   file_relpath : tests/reflow/test_expand.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for expanding a list to one item per line (`to_multi_line`)."""

from __future__ import annotations

import pytest

from argflow.errors import UnbalancedBracketsError
from argflow.languages import IndentStyle
from argflow.lexers import get_scanner
from argflow.reflow import BracketIndenter, to_multi_line
from tests.conftest import buffer_at, make_policy


def _expand(marked: str, language: str = "python", **overrides: object) -> str:
    buf = buffer_at(marked)
    to_multi_line(buf, get_scanner(language), make_policy(**overrides))
    return buf.text


def test_expand_scenario_two() -> None:
    """Opening bracket, each item and the closing bracket end up on their own lines."""
    assert _expand("foo(x|, y, z)") == "foo(\n    x,\n    y,\n    z\n)"


def test_expand_scenario_three_string_commas_are_not_split_points() -> None:
    """A string literal holding separators stays on one line."""
    result = _expand('foo(x, "a string, with commas", |y)')
    assert result == 'foo(\n    x,\n    "a string, with commas",\n    y\n)'


def test_expand_scenario_four_nested_calls_stay_intact() -> None:
    """Only the enclosing list is split; nested calls stay on one line."""
    result = _expand("foo(x, g(a, b, c), |y, z)")
    assert result == "foo(\n    x,\n    g(a, b, c),\n    y,\n    z\n)"


def test_expand_inner_list_from_cursor_inside_it() -> None:
    """The innermost pair around the cursor is the one expanded."""
    result = _expand("f(a, g(|b, c))")
    assert result == "f(a, g(\n    b,\n    c\n))"


def test_expand_keeps_outer_indentation() -> None:
    """Continuation lines are indented from the line holding the opener."""
    result = _expand("    x = foo(a|, b)")
    assert result == "    x = foo(\n        a,\n        b\n    )"


def test_expand_first_argument_same_line_aligns_visually() -> None:
    """Items align with the first item kept after the opening bracket."""
    result = _expand("foo(a|, b, c)", first_argument_same_line=True)
    assert result == "foo(a,\n    b,\n    c\n)"


def test_expand_last_argument_same_line() -> None:
    """The closing bracket stays on the line of the last item."""
    result = _expand("foo(a|, b)", last_argument_same_line=True)
    assert result == "foo(\n    a,\n    b)"


def test_expand_second_argument_same_line_skips_first_separator() -> None:
    """The first two items share a line."""
    result = _expand(
        "foo(a|, b, c)",
        first_argument_same_line=True,
        second_argument_same_line=True,
    )
    assert result == "foo(a, b,\n    c\n)"


def test_expand_adds_trailing_separator() -> None:
    """The trailing separator follows the last item."""
    result = _expand("foo(a|, b)", trailing_separator=True)
    assert result == "foo(\n    a,\n    b,\n)"


def test_expand_trailing_separator_with_last_argument_same_line() -> None:
    """The separator goes right before the closing bracket on the last item line."""
    result = _expand("foo(a|, b)", trailing_separator=True, last_argument_same_line=True)
    assert result == "foo(\n    a,\n    b,)"


def test_expand_does_not_duplicate_existing_trailing_separator() -> None:
    """An existing trailing separator is kept and not followed by a break of its own."""
    result = _expand("foo(a|, b,)", trailing_separator=True)
    assert result == "foo(\n    a,\n    b,\n)"


def test_expand_trailing_separator_before_line_comment() -> None:
    """The added separator is placed after the last item, not after its comment."""
    result = _expand("foo(\n    a,\n    b  # last\n|)", trailing_separator=True)
    assert result == "foo(\n    a,\n    b,  # last\n)"


def test_expand_pattern_trailing_separator_reuses_last_match() -> None:
    """A regex separator appends the text of the last separator found."""
    result = _expand(
        "foo(a;| b; c)",
        argument_separator=";",
        separator_is_pattern=True,
        trailing_separator=True,
    )
    assert result == "foo(\n    a;\n    b;\n    c;\n)"


def test_expand_is_idempotent() -> None:
    """Expanding an expanded list changes nothing."""
    marked = "foo(\n    a|,\n    b\n)"
    buf = buffer_at(marked)
    assert to_multi_line(buf, get_scanner("python"), make_policy()) is False
    assert buf.text == marked.replace("|", "")


def test_expand_does_not_break_before_line_comments() -> None:
    """A comment trailing an item stays on that item's line."""
    result = _expand("foo(a,  # first\n    |b)")
    assert result == "foo(\n    a,  # first\n    b\n)"


def test_expand_empty_list() -> None:
    """An empty list gets a single line break between its brackets."""
    assert _expand("f(|)") == "f(\n)"
    assert _expand("f( | )") == "f(\n)"


def test_expand_empty_list_kept_inline_when_both_ends_stay() -> None:
    """Without any demanded break, an empty list loses its inner whitespace."""
    result = _expand("f( | )", first_argument_same_line=True, last_argument_same_line=True)
    assert result == "f()"


def test_expand_single_item() -> None:
    """A single item still moves to its own line."""
    assert _expand("f(|a)") == "f(\n    a\n)"


def test_expand_ignores_leading_separator() -> None:
    """An empty first item does not produce an empty line."""
    assert _expand("f(, |a)") == "f(\n    , a\n)"


def test_expand_trims_whitespace_around_breaks() -> None:
    """No trailing whitespace is left in front of a new line break."""
    assert _expand("f( a ,  |b )") == "f(\n    a ,\n    b\n)"


def test_expand_without_indent_after_fill() -> None:
    """With indentation disabled, new lines start at column 0."""
    assert _expand("foo(a|, b)", indent_after_fill=False) == "foo(\na,\nb\n)"


def test_expand_custom_indent_width() -> None:
    """The default indenter uses the configured width."""
    assert _expand("foo(a|, b)", indent_width=2) == "foo(\n  a,\n  b\n)"


def test_expand_with_injected_indenter() -> None:
    """A caller-provided indenter replaces the default one."""
    buf = buffer_at("foo(a|, b)")
    to_multi_line(
        buf,
        get_scanner("python"),
        make_policy(),
        indenter=BracketIndenter(width=8, style=IndentStyle.BLOCK),
    )
    assert buf.text == "foo(\n        a,\n        b\n)"


def test_expand_lisp_form() -> None:
    """Lisp forms keep the head and first argument and align with the first argument."""
    result = _expand(
        "(foo a| b c)",
        "lisp",
        argument_separator=" ",
        first_argument_same_line=True,
        second_argument_same_line=True,
        last_argument_same_line=True,
    )
    assert result == "(foo a\n     b\n     c)"


def test_expand_html_attributes() -> None:
    """Tag attribute lists expand on whitespace and align with the tag name."""
    result = _expand(
        '<a |href="x" title="y z">',
        "html",
        argument_separator=" ",
        first_argument_same_line=True,
        last_argument_same_line=True,
    )
    assert result == '<a\n href="x"\n title="y z">'


def test_expand_unbalanced_raises_and_keeps_buffer() -> None:
    """Unbalanced input is refused without edits."""
    marked = "foo(a|, b"
    buf = buffer_at(marked)
    with pytest.raises(UnbalancedBracketsError):
        to_multi_line(buf, get_scanner("python"), make_policy())
    assert buf.text == "foo(a, b"
    assert buf.point == marked.index("|")


def test_expand_point_follows_its_character() -> None:
    """The point stays on the same character after the edits."""
    buf = buffer_at("foo(a|, b)")
    to_multi_line(buf, get_scanner("python"), make_policy())
    assert buf.text[buf.point] == ","


def test_expand_keeps_tab_indentation() -> None:
    """Items of a tab-indented call are indented with tabs, as gofmt does."""
    marked = "func f() {\n\tfoo(a|, b)\n}\n"
    assert _expand(marked, "go") == "func f() {\n\tfoo(\n\t\ta,\n\t\tb\n\t)\n}\n"


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        (".*;", "foo(\n    a.*; b.*;\n    c\n)"),
        (".*?;", "foo(\n    a.*;\n    b.*;\n    c\n)"),
    ],
)
def test_expand_with_pattern_separator_scenario_five(pattern: str, expected: str) -> None:
    """A greedy pattern breaks after its longest match; a lazy one after each `;`."""
    result = _expand("foo(a.*; |b.*; c)", argument_separator=pattern, separator_is_pattern=True)
    assert result == expected
