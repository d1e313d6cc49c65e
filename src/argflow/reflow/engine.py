# topmark:header:start
#
#   project      : ArgFlow
#   file         : engine.py
#   file_relpath : src/argflow/reflow/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reflow engine: collapse and expand a bracketed list.

Both transformations operate on an Enclosing Pair Span ``[open, close + 1)``
of a `TextBuffer` and edit only the Active Region between the brackets.

Collapse:
    Join lines from the end of the Active Region toward its start using
    join-line semantics, then strip a dangling trailing separator in front of
    the closing bracket. A region already on one line is left untouched.

Expand:
    Break after the opening bracket, after every top-level separator and
    before the closing bracket (each subject to the placement policy), add a
    trailing separator when requested, then re-indent the new lines.

Split points are collected up front (`iter_split_points`) and edits are applied
from the last split point to the first, tracked by buffer markers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from argflow.buffer import Span
from argflow.config.logging import get_logger
from argflow.errors import UnsafeCollapseError
from argflow.reflow.separators import Separator, iter_split_points

if TYPE_CHECKING:
    from argflow.buffer import Marker, TextBuffer
    from argflow.config.logging import ArgflowLogger
    from argflow.config.policy import PlacementPolicy
    from argflow.lexers.base import LexicalScanner, SyntaxState
    from argflow.reflow.indent import Indenter

logger: ArgflowLogger = get_logger(__name__)

_HSPACE: str = " \t"
_WHITESPACE: str = " \t\r\n"


def _active_region(span: Span) -> Span:
    return Span(span.start + 1, span.end - 1)


def _split_points(
    text: str, region: Span, separator: Separator, scanner: LexicalScanner
) -> list[Span]:
    """Top-level split points of ``region``, ignoring leading separators."""
    return [
        p
        for p in iter_split_points(text, region, separator, scanner)
        if text[region.start : p.start].strip()
    ]


def _trailing_point(text: str, points: list[Span], close: int) -> Span | None:
    """Return the last split point if only whitespace follows it up to ``close``."""
    if points and not text[points[-1].end : close].strip(_WHITESPACE):
        return points[-1]
    return None


def _line_comment_follows(buffer: TextBuffer, offset: int, scanner: LexicalScanner) -> bool:
    """Return True if only spaces separate ``offset`` from a line comment ending its line."""
    eol = buffer.line_end(offset)
    state: SyntaxState = scanner.parse_state(buffer.text, eol)
    return (
        state.comment_end == "\n"
        and state.comment_start is not None
        and state.comment_start >= offset
        and not buffer.text[offset : state.comment_start].strip(_HSPACE)
    )


def _break_at(buffer: TextBuffer, offset: int, scanner: LexicalScanner) -> bool:
    """Insert a line break at ``offset`` unless the line already breaks there.

    Horizontal whitespace around the break is removed. Nothing is inserted when
    a line break is already adjacent, or when the rest of the line is a line
    comment.

    Returns:
        bool: True if a line break was inserted.
    """
    if _line_comment_follows(buffer, offset, scanner):
        return False
    pos = buffer.delete_horizontal_space(offset)
    before = buffer.char_at(pos - 1)
    after = buffer.char_at(pos)
    if before == "\n" or after == "\n":
        return False
    buffer.insert(pos, "\n")
    return True


# --- Collapse ---


def _check_collapse_safety(text: str, region: Span, scanner: LexicalScanner) -> None:
    """Refuse to join lines that end inside a line comment.

    Raises:
        UnsafeCollapseError: If a line comment ends before the end of ``region``.
    """
    state: SyntaxState = scanner.parse_state(text, region.start)
    nl = text.find("\n", region.start, region.end)
    while nl >= 0:
        state = scanner.advance(state, text, nl)
        if state.comment_end == "\n" and state.pos == nl:
            start = state.comment_start if state.comment_start is not None else nl
            raise UnsafeCollapseError(
                f"Cannot collapse: line comment at offset {start} would swallow the items after it",
                offset=start,
            )
        nl = text.find("\n", nl + 1, region.end)


def strip_trailing_separator(
    buffer: TextBuffer,
    span: Span,
    separator: Separator,
    scanner: LexicalScanner,
) -> bool:
    """Remove a dangling separator (and the whitespace after it) before the closing bracket.

    Returns:
        bool: True if a separator was removed.
    """
    region = _active_region(span)
    points = _split_points(buffer.text, region, separator, scanner)
    trailing = _trailing_point(buffer.text, points, region.end)
    if trailing is None:
        return False
    logger.debug("Stripping trailing separator at %d", trailing.start)
    buffer.delete(trailing.start, region.end)
    return True


def collapse_to_single_line(
    buffer: TextBuffer,
    span: Span,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
) -> bool:
    """Collapse the list of ``span`` onto one line.

    Line breaks inside string literals are kept. A dangling trailing separator
    is stripped after the join.

    Args:
        buffer (TextBuffer): Buffer to edit; ``span`` must be accessible.
        span (Span): Enclosing Pair Span of the list.
        scanner (LexicalScanner): Scanner providing the lexical rules.
        policy (PlacementPolicy): Placement policy (supplies the separator).

    Returns:
        bool: True if the buffer changed.

    Raises:
        UnsafeCollapseError: If a line comment sits inside the Active Region.
    """
    region = _active_region(span)
    text = buffer.text
    if "\n" not in text[region.start : region.end]:
        logger.debug("Active region [%d, %d) already on one line", region.start, region.end)
        return False

    _check_collapse_safety(text, region, scanner)

    close: Marker = buffer.make_marker(region.end, advances=True)
    try:
        limit = close.offset
        nl = buffer.text.rfind("\n", region.start, limit)
        while nl >= 0:
            state: SyntaxState = scanner.parse_state(buffer.text, nl)
            if state.in_string:
                limit = nl
            else:
                joined = buffer.join_line(nl + 1, openers=scanner.openers, closers=scanner.closers)
                limit = nl if joined is None else joined
            nl = buffer.text.rfind("\n", region.start, limit)

        strip_trailing_separator(
            buffer, Span(span.start, close.offset + 1), Separator.from_policy(policy), scanner
        )
    finally:
        buffer.release_marker(close)
    return True


# --- Expand ---


def _trailing_separator_text(separator: Separator, text: str, points: list[Span]) -> str | None:
    """Text to append as a trailing separator.

    Literal separators use their own text; pattern separators reuse the text of
    the last separator found in the list.
    """
    if not separator.is_pattern:
        return separator.text
    if points:
        last = points[-1]
        return text[last.start : last.end]
    return None


def _last_item_end(buffer: TextBuffer, start: int, close: int, scanner: LexicalScanner) -> int:
    """Offset just past the last item before ``close`` (whitespace and line comments skipped)."""
    text = buffer.text
    pos = close
    while pos > start and text[pos - 1] in _WHITESPACE:
        pos -= 1
    state: SyntaxState = scanner.parse_state(text, pos)
    if state.comment_end == "\n" and state.comment_start is not None:
        pos = state.comment_start
        while pos > start and text[pos - 1] in _WHITESPACE:
            pos -= 1
    return pos


def expand_to_multi_line(
    buffer: TextBuffer,
    span: Span,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
    *,
    indenter: Indenter | None = None,
) -> bool:
    """Expand the list of ``span`` to one item per line.

    Args:
        buffer (TextBuffer): Buffer to edit; ``span`` must be accessible.
        span (Span): Enclosing Pair Span of the list.
        scanner (LexicalScanner): Scanner providing the lexical rules.
        policy (PlacementPolicy): Placement policy.
        indenter (Indenter | None): Engine used to re-indent the new lines when
            ``policy.indent_after_fill`` is set.

    Returns:
        bool: True if the buffer changed.
    """
    before = buffer.text
    region = _active_region(span)
    separator = Separator.from_policy(policy)
    open_offset = span.start
    close: Marker = buffer.make_marker(region.end, advances=True)
    markers: list[Marker] = []
    try:
        body = before[region.start : region.end]
        if not body.strip(_WHITESPACE):
            # Empty list: drop the body whitespace, keep at most one line break
            buffer.delete(region.start, region.end)
            if not (policy.first_argument_same_line and policy.last_argument_same_line):
                buffer.insert(region.start, "\n")
        else:
            points = _split_points(before, region, separator, scanner)
            trailing = _trailing_point(before, points, region.end)
            breaks = [p for p in points if p is not trailing]
            if policy.second_argument_same_line and breaks:
                breaks = breaks[1:]
            markers = [buffer.make_marker(p.end) for p in breaks]

            # Closing bracket first, then separators from last to first
            if policy.trailing_separator and trailing is None:
                sep_text = _trailing_separator_text(separator, before, points)
                if sep_text is not None:
                    item_end = _last_item_end(buffer, region.start, close.offset, scanner)
                    buffer.insert(item_end, sep_text)
            if not policy.last_argument_same_line:
                _break_at(buffer, close.offset, scanner)
            for marker in reversed(markers):
                _break_at(buffer, marker.offset, scanner)
            if not policy.first_argument_same_line:
                _break_at(buffer, region.start, scanner)

        if policy.indent_after_fill and indenter is not None:
            indenter.indent_region(buffer, open_offset, close.offset, scanner)
    finally:
        for marker in markers:
            buffer.release_marker(marker)
        buffer.release_marker(close)

    changed = buffer.text != before
    logger.debug("Expanded list at %d (changed=%s)", open_offset, changed)
    return changed
