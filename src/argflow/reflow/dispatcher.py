# topmark:header:start
#
#   project      : ArgFlow
#   file         : dispatcher.py
#   file_relpath : src/argflow/reflow/dispatcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Entry points of the reflow engine.

* `to_single_line`: collapse the list enclosing the point.
* `to_multi_line`: expand the list enclosing the point.
* `dwim`: pick one of paragraph fill, expand or collapse (see `decide_action`).

Every entry point runs inside ``excursion()`` → ``atomic()`` → ``narrowed()``:
the point and the restriction are restored on every exit path, and a raised
error leaves the buffer byte-for-byte unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from argflow.buffer import Span
from argflow.config.logging import get_logger
from argflow.reflow.engine import collapse_to_single_line, expand_to_multi_line
from argflow.reflow.indent import BracketIndenter
from argflow.scope import ScopeResolver

if TYPE_CHECKING:
    from argflow.buffer import TextBuffer
    from argflow.config.logging import ArgflowLogger
    from argflow.config.policy import PlacementPolicy
    from argflow.languages.base import Language
    from argflow.lexers.base import LexicalScanner
    from argflow.reflow.fill import ParagraphFiller
    from argflow.reflow.indent import Indenter

logger: ArgflowLogger = get_logger(__name__)


class ReflowAction(Enum):
    """Transformation chosen for a cursor position."""

    FILL_PARAGRAPH = "fill-paragraph"
    EXPAND = "expand"
    COLLAPSE = "collapse"
    NOOP = "noop"


def _language_of(scanner: LexicalScanner, language: Language | None) -> Language | None:
    return language if language is not None else scanner.language


def fallback_enabled(
    resolver: ScopeResolver,
    open_offset: int | None,
    policy: PlacementPolicy,
    language: Language | None,
) -> bool:
    """Return True if the comment/string paragraph-fill fallback applies.

    In markup languages the fallback is suppressed inside any bracket other than
    the tag opener, so code-like lists in attribute values are reflowed as lists.
    """
    if not policy.fallback_to_paragraph_fill:
        return False
    if language is not None and language.markup and open_offset is not None:
        return resolver.bracket_char_at(open_offset) == language.tag_open
    return True


def decide_action(
    resolver: ScopeResolver,
    cursor: int,
    policy: PlacementPolicy,
    *,
    language: Language | None = None,
    can_fill: bool = True,
) -> ReflowAction:
    """Evaluate the dispatch table for ``cursor`` (first match wins).

    ===========================================================  ===============
    Condition                                                    Action
    ===========================================================  ===============
    cursor in a comment or string and the fallback is enabled    paragraph fill
    no enclosing bracket                                         paragraph fill
    Active Region on one line                                    expand
    otherwise                                                    collapse
    ===========================================================  ===============

    Paragraph fill becomes `ReflowAction.NOOP` when ``can_fill`` is False.

    Raises:
        UnbalancedBracketsError: If the enclosing bracket has no balanced close.
    """
    language = _language_of(resolver.scanner, language)
    fill = ReflowAction.FILL_PARAGRAPH if can_fill else ReflowAction.NOOP
    open_offset = resolver.locate_enclosing_bracket(cursor)

    if resolver.is_in_comment_or_string(cursor) and fallback_enabled(
        resolver, open_offset, policy, language
    ):
        logger.debug("Cursor %d in comment or string: paragraph fill", cursor)
        return fill
    if open_offset is None:
        logger.debug("No enclosing bracket at %d: paragraph fill", cursor)
        return fill

    span = Span(open_offset, resolver.matching_close(open_offset))
    if resolver.is_single_line(resolver.active_region(span)):
        return ReflowAction.EXPAND
    return ReflowAction.COLLAPSE


def _default_indenter(language: Language | None, policy: PlacementPolicy) -> Indenter:
    if language is None:
        return BracketIndenter(policy.indent_width)
    return BracketIndenter(policy.indent_width, language.indent_style)


def _transform(
    buffer: TextBuffer,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
    action: ReflowAction,
    indenter: Indenter | None,
    language: Language | None = None,
) -> bool:
    language = _language_of(scanner, language)
    resolver = ScopeResolver(buffer, scanner)
    with buffer.excursion(), buffer.atomic():
        span = resolver.bounded_view(buffer.point)
        if span is None:
            logger.info("No enclosing bracket at offset %d; nothing to do", buffer.point)
            return False
        with buffer.narrowed(span.start, span.end):
            if action is ReflowAction.COLLAPSE:
                return collapse_to_single_line(buffer, span, scanner, policy)
            return expand_to_multi_line(
                buffer,
                span,
                scanner,
                policy,
                indenter=indenter or _default_indenter(language, policy),
            )


def to_single_line(buffer: TextBuffer, scanner: LexicalScanner, policy: PlacementPolicy) -> bool:
    """Collapse the list enclosing the point; a no-op without an enclosing bracket.

    Returns:
        bool: True if the buffer changed.

    Raises:
        UnbalancedBracketsError: If the enclosing bracket has no balanced close.
        UnsafeCollapseError: If a line comment sits inside the list.
    """
    return _transform(buffer, scanner, policy, ReflowAction.COLLAPSE, None)


def to_multi_line(
    buffer: TextBuffer,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
    *,
    indenter: Indenter | None = None,
) -> bool:
    """Expand the list enclosing the point; a no-op without an enclosing bracket.

    Returns:
        bool: True if the buffer changed.

    Raises:
        UnbalancedBracketsError: If the enclosing bracket has no balanced close.
    """
    return _transform(buffer, scanner, policy, ReflowAction.EXPAND, indenter)


def dwim(
    buffer: TextBuffer,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
    *,
    filler: ParagraphFiller | None = None,
    indenter: Indenter | None = None,
    language: Language | None = None,
) -> ReflowAction:
    """Do what I mean: fill, expand or collapse depending on the point.

    Args:
        buffer (TextBuffer): Buffer to edit; the point is the cursor.
        scanner (LexicalScanner): Scanner providing the lexical rules.
        policy (PlacementPolicy): Placement policy.
        filler (ParagraphFiller | None): Paragraph filler; without one the
            paragraph-fill branches are no-ops.
        indenter (Indenter | None): Indentation engine for expansions.
        language (Language | None): Language, defaults to the scanner's.

    Returns:
        ReflowAction: The action taken (`ReflowAction.NOOP` if nothing applied).
    """
    resolver = ScopeResolver(buffer, scanner)
    cursor = buffer.point
    action = decide_action(
        resolver, cursor, policy, language=language, can_fill=filler is not None
    )
    logger.debug("dwim at %d: %s", cursor, action.value)

    if action is ReflowAction.FILL_PARAGRAPH:
        assert filler is not None  # static type check
        with buffer.excursion(), buffer.atomic():
            filler.fill_paragraph(buffer, cursor, scanner)
        return action
    if action is ReflowAction.NOOP:
        return action
    _transform(buffer, scanner, policy, action, indenter, language)
    return action
