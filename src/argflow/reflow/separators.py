# topmark:header:start
#
#   project      : ArgFlow
#   file         : separators.py
#   file_relpath : src/argflow/reflow/separators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Argument separators and top-level split point discovery.

Finding split points is kept apart from applying edits: `iter_split_points`
lazily yields every *top-level* separator occurrence of an Active Region, and
the reflow engine decides afterwards what to do with them.

A separator occurrence is top-level when:

* it starts and ends at the nesting depth of the Active Region itself, and
* neither end lies inside a string literal or a comment.

The generator carries an immutable `SyntaxState` from one candidate to the
next, so the text before a candidate is scanned exactly once. Probing the end
of a candidate derives a new state and never disturbs the running one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from argflow.buffer import Span
from argflow.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from argflow.config.logging import ArgflowLogger
    from argflow.config.policy import PlacementPolicy
    from argflow.lexers.base import LexicalScanner, SyntaxState

logger: ArgflowLogger = get_logger(__name__)


@dataclass(frozen=True)
class Separator:
    """An item separator, literal by default.

    Attributes:
        text (str): Separator text, or a regular expression when ``is_pattern`` is True.
        is_pattern (bool): Match ``text`` as a regular expression.
    """

    text: str = ","
    is_pattern: bool = False

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Separator text must not be empty")

    @classmethod
    def from_policy(cls, policy: PlacementPolicy) -> Separator:
        """Build the separator configured by ``policy``."""
        return cls(text=policy.argument_separator, is_pattern=policy.separator_is_pattern)

    @cached_property
    def regex(self) -> re.Pattern[str]:
        """Compiled form of the separator."""
        return self.compile()

    def compile(self) -> re.Pattern[str]:
        """Return the separator as a compiled regular expression.

        A literal whitespace separator matches a whole run of spaces and tabs.

        Raises:
            re.error: If a pattern separator is not a valid regular expression.
        """
        if self.is_whitespace:
            return re.compile(r"[ \t]+")
        return re.compile(self.text if self.is_pattern else re.escape(self.text))

    @property
    def is_whitespace(self) -> bool:
        """True for a literal separator made only of spaces and tabs (Lisp style)."""
        return not self.is_pattern and self.text.strip(" \t") == ""


def _is_top_level(state: SyntaxState, depth: int) -> bool:
    return state.depth == depth and not state.in_string_or_comment


def _trim_item_text(regex: re.Pattern[str], text: str, start: int, end: int) -> int:
    """Return where the separator part of the match ``[start, end)`` begins.

    A greedy pattern (``.*;``) can match item text in front of the separator.
    The match is cut down to its shortest suffix the pattern still matches,
    as long as the part cut off holds more than whitespace.
    """
    for candidate in range(end - 1, start, -1):
        if regex.fullmatch(text, candidate, end):
            return candidate if text[start:candidate].strip() else start
    return start


def iter_split_points(
    text: str,
    region: Span,
    separator: Separator,
    scanner: LexicalScanner,
) -> Iterator[Span]:
    """Yield the top-level separator occurrences inside ``region``.

    Args:
        text (str): Full buffer text (lexical state is computed from offset 0).
        region (Span): Active Region to search (the text between two brackets).
        separator (Separator): Separator to look for.
        scanner (LexicalScanner): Scanner providing the lexical rules.

    Yields:
        Span: Each top-level occurrence, in increasing offset order.
    """
    state: SyntaxState = scanner.parse_state(text, region.start)
    depth: int = state.depth
    regex: re.Pattern[str] = separator.regex
    pos: int = region.start

    while pos < region.end:
        match = regex.search(text, pos, region.end)
        if match is None:
            return
        start, end = match.span()
        if end == start:
            # Empty matches never delimit items
            pos = start + 1
            continue
        if separator.is_pattern:
            start = _trim_item_text(regex, text, start, end)

        state = scanner.advance(state, text, start)
        if state.pos != start or not _is_top_level(state, depth):
            # Inside a nested bracket pair, a string, a comment, or a delimiter
            pos = max(start + 1, state.pos)
            continue

        after: SyntaxState = scanner.advance(state, text, end)
        if after.pos != end or not _is_top_level(after, depth):
            logger.trace("Separator match [%d, %d) crosses a nesting boundary", start, end)
            pos = start + 1
            continue

        logger.trace("Split point [%d, %d)", start, end)
        yield Span(start, end)
        pos = end
