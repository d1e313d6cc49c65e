# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_api_text.py
#   file_relpath : tests/api/test_api_text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `argflow.api.reflow_text` and configuration normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from argflow import api
from argflow.config import Config
from argflow.errors import UnbalancedBracketsError
from argflow.reflow import ReflowAction
from tests.conftest import make_config, split_cursor

if TYPE_CHECKING:
    from argflow.buffer import TextBuffer
    from argflow.lexers.base import LexicalScanner


class RecordingFiller:
    """Paragraph filler that records its calls and edits nothing."""

    def __init__(self) -> None:
        self.calls: list[int] = []

    def fill_paragraph(self, buffer: TextBuffer, offset: int, scanner: LexicalScanner) -> bool:
        self.calls.append(offset)
        return False


def test_reflow_text_dwim_expands() -> None:
    text, offset = split_cursor("foo(a|, b, c)")
    result = api.reflow_text(text, offset)
    assert result.text == "foo(\n    a,\n    b,\n    c\n)"
    assert result.changed
    assert result.action is ReflowAction.EXPAND
    assert result.text[result.point] == ","


def test_reflow_text_collapse() -> None:
    text, offset = split_cursor("foo(\n    a|,\n    b\n)")
    result = api.reflow_text(text, offset, action="collapse")
    assert result.text == "foo(a, b)"
    assert result.action is ReflowAction.COLLAPSE


def test_reflow_text_no_change_reports_noop() -> None:
    """A collapse of a single-line list changes nothing."""
    result = api.reflow_text("foo(a, b)", 5, action="collapse")
    assert result.text == "foo(a, b)"
    assert not result.changed
    assert result.action is ReflowAction.NOOP


def test_reflow_text_with_mapping_config() -> None:
    """A TOML-shaped mapping is merged over the packaged defaults."""
    result = api.reflow_text(
        "foo(a, b)", 5, action="expand", config={"reflow": {"trailing-separator": True}}
    )
    assert result.text == "foo(\n    a,\n    b,\n)"


def test_reflow_text_with_frozen_config() -> None:
    result = api.reflow_text("foo(a, b)", 5, action="expand", config=make_config(indent_width=2))
    assert result.text == "foo(\n  a,\n  b\n)"


def test_reflow_text_language_policy() -> None:
    """The lisp table of the packaged defaults applies to lisp text."""
    text, offset = split_cursor("(foo a |b c)")
    result = api.reflow_text(text, offset, action="expand", language="lisp")
    assert result.text == "(foo a\n     b\n     c)"


def test_reflow_text_language_aware_strings() -> None:
    """Strings only protect separators when the language knows them."""
    text, offset = split_cursor('f("a, b"|, c)')
    python = api.reflow_text(text, offset, action="expand", language="python")
    assert python.text == 'f(\n    "a, b",\n    c\n)'
    plain = api.reflow_text(text, offset, action="expand")
    assert plain.text == 'f(\n    "a,\n    b",\n    c\n)'


def test_reflow_text_dwim_fills_comments_at_fill_column() -> None:
    result = api.reflow_text(
        "# one two three four",
        3,
        language="python",
        config={"reflow": {"fill-column": 10}},
    )
    assert result.action is ReflowAction.FILL_PARAGRAPH
    assert result.text == "# one two\n# three\n# four"


@pytest.mark.parametrize(
    "marked",
    [
        "|x = 1\ny = compute(a)\nz = 2\n",
        'x = 1\ny = foo("a|b", c)\nz = 2\n',
    ],
)
def test_reflow_text_dwim_never_joins_code_lines(marked: str) -> None:
    """Paragraph fill on code, or in a short string, leaves the text as is."""
    text, offset = split_cursor(marked)
    result = api.reflow_text(text, offset, language="python")
    assert result.text == text
    assert not result.changed


def test_reflow_text_uses_injected_filler() -> None:
    filler = RecordingFiller()
    result = api.reflow_text("just prose", 4, filler=filler)
    assert filler.calls == [4]
    assert result.action is ReflowAction.FILL_PARAGRAPH
    assert not result.changed


@pytest.mark.parametrize("offset", [-1, 11])
def test_reflow_text_rejects_offsets_outside_the_text(offset: int) -> None:
    with pytest.raises(ValueError):
        api.reflow_text("foo(a, b)", offset)


def test_reflow_text_rejects_unknown_action() -> None:
    bogus: Any = "shuffle"
    with pytest.raises(ValueError):
        api.reflow_text("foo(a, b)", 5, action=bogus)


def test_reflow_text_rejects_unknown_language() -> None:
    with pytest.raises(KeyError):
        api.reflow_text("foo(a, b)", 5, language="cobol")


def test_reflow_text_unbalanced_raises() -> None:
    with pytest.raises(UnbalancedBracketsError):
        api.reflow_text("foo(a, b", 5, action="expand")


def test_resolve_config() -> None:
    """Mappings are merged over defaults; frozen configs pass through."""
    cfg = make_config()
    assert api.resolve_config(cfg) is cfg
    defaults = api.resolve_config(None)
    assert isinstance(defaults, Config)
    assert defaults.policy.indent_width == 4
    custom = api.resolve_config({"languages": {"go": {"indent-width": 8}}})
    assert custom.policy_by_language["go"].indent_width == 8
    assert custom.policy_by_language["lisp"].argument_separator == " "
