# topmark:header:start
#
#   project      : ArgFlow
#   file         : scope.py
#   file_relpath : src/argflow/scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scope resolution: find the bracket pair enclosing a cursor.

The resolver combines a `TextBuffer` with a `LexicalScanner`. Lexical state is
always computed over the *whole* buffer text, so a narrowed buffer never changes
what counts as a string, a comment, or a structural bracket.

"No enclosing bracket" is an expected outcome (cursor in top-level prose) and
is reported as ``None``, never as an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from argflow.buffer import Span
from argflow.config.logging import get_logger

if TYPE_CHECKING:
    from argflow.buffer import TextBuffer
    from argflow.lexers.base import LexicalScanner, SyntaxState

logger = get_logger(__name__)


class ScopeResolver:
    """Locate enclosing bracket spans in a buffer.

    Args:
        buffer (TextBuffer): Buffer to inspect.
        scanner (LexicalScanner): Scanner providing the lexical rules.
    """

    def __init__(self, buffer: TextBuffer, scanner: LexicalScanner) -> None:
        self.buffer = buffer
        self.scanner = scanner

    def state_at(self, offset: int) -> SyntaxState:
        """Return the lexical state at ``offset``."""
        return self.scanner.parse_state(self.buffer.text, offset)

    def locate_enclosing_bracket(self, cursor_offset: int) -> int | None:
        """Return the innermost structural opening bracket enclosing ``cursor_offset``."""
        return self.state_at(cursor_offset).innermost_open

    def matching_close(self, open_offset: int) -> int:
        """Return the offset one past the bracket balancing the one at ``open_offset``.

        Raises:
            UnbalancedBracketsError: Propagated from the scanner.
        """
        return self.scanner.matching_close(self.buffer.text, open_offset)

    def bounded_view(self, cursor_offset: int) -> Span | None:
        """Return the Enclosing Pair Span around ``cursor_offset`` (brackets included)."""
        start = self.locate_enclosing_bracket(cursor_offset)
        if start is None:
            logger.debug("No enclosing bracket at offset %d", cursor_offset)
            return None
        span = Span(start, self.matching_close(start))
        logger.debug("Enclosing pair span at %d: [%d, %d)", cursor_offset, span.start, span.end)
        return span

    def active_region(self, span: Span) -> Span:
        """Return the text strictly between the brackets of ``span``."""
        return Span(span.start + 1, span.end - 1)

    def bracket_char_at(self, offset: int) -> str:
        """Return the bracket character at ``offset``."""
        return self.buffer.text[offset]

    def is_single_line(self, span: Span) -> bool:
        """Return True if ``span`` contains no line break."""
        return "\n" not in self.buffer.text[span.start : span.end]

    def is_in_comment_or_string(self, offset: int) -> bool:
        """Return True inside a comment or string (the paragraph-fill fallback test)."""
        return self.state_at(offset).in_string_or_comment

    def is_in_string_or_comment(self, offset: int) -> bool:
        """Return True if a separator at ``offset`` is protected by a string or comment."""
        return self.state_at(offset).in_string_or_comment

    def is_in_comment(self, offset: int) -> bool:
        """Return True inside a comment."""
        return self.state_at(offset).in_comment
