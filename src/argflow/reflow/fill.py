# topmark:header:start
#
#   project      : ArgFlow
#   file         : fill.py
#   file_relpath : src/argflow/reflow/fill.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Paragraph filling, the fallback used outside of bracketed lists.

`ParagraphFiller` is the capability the dispatcher delegates to when the cursor
sits in prose, a comment or a string. `TextwrapFiller` is the default
implementation, built on the standard library `textwrap` module.
"""

from __future__ import annotations

import re
import textwrap
from typing import TYPE_CHECKING, Protocol

from argflow.config.logging import get_logger

if TYPE_CHECKING:
    from argflow.buffer import TextBuffer
    from argflow.config.logging import ArgflowLogger
    from argflow.lexers.base import LexicalScanner, SyntaxState

logger: ArgflowLogger = get_logger(__name__)

_INDENT_RE: re.Pattern[str] = re.compile(r"[ \t]*")
_BLOCK_COMMENT_RE: re.Pattern[str] = re.compile(r"[ \t]*(?:\*+[ \t]*)?")


class ParagraphFiller(Protocol):
    """Capability interface of a paragraph reflow function."""

    def fill_paragraph(self, buffer: TextBuffer, offset: int, scanner: LexicalScanner) -> bool:
        """Refill the paragraph around ``offset``; return True if the buffer changed."""
        ...


class TextwrapFiller:
    """Refill the paragraph around an offset with `textwrap`.

    What counts as a paragraph depends on where the offset sits:

    * in a string or block comment, the paragraph is a run of non-blank lines
      of that literal, and filling never reaches past its delimiters;
    * on a line comment, the paragraph is a run of lines sharing the same
      *fill prefix*: the indentation, the comment introducer (``#``, ``//``,
      ``;;`` ...) and the spaces after it;
    * elsewhere, text is only filled when the scanner marks it as prose (plain
      text, markup content). Code is left alone.

    The prefix of the first line is kept on every output line.

    Args:
        width (int): Maximum line width (the fill column).
    """

    def __init__(self, width: int = 70) -> None:
        self.width = width

    def __repr__(self) -> str:
        return f"TextwrapFiller(width={self.width})"

    @staticmethod
    def _prefix_regex(scanner: LexicalScanner) -> re.Pattern[str]:
        markers = sorted(scanner.line_comments, key=len, reverse=True)
        if not markers:
            return _INDENT_RE
        alternatives = "|".join(f"(?:{re.escape(m)})+" for m in markers)
        return re.compile(rf"[ \t]*(?:(?:{alternatives})[ \t]*)?")

    @staticmethod
    def _prefix_kind(prefix: str) -> str:
        """Prefix without trailing spaces (lines with the same kind share a paragraph)."""
        return prefix.rstrip(" \t")

    def fill_paragraph(self, buffer: TextBuffer, offset: int, scanner: LexicalScanner) -> bool:
        """Refill the paragraph around ``offset``.

        Args:
            buffer (TextBuffer): Buffer to edit (restriction aware).
            offset (int): Any offset inside the paragraph.
            scanner (LexicalScanner): Scanner supplying the comment and string syntax.

        Returns:
            bool: True if the buffer changed.
        """
        text = buffer.text
        state: SyntaxState = scanner.parse_state(text, offset)
        if state.in_string or (state.in_comment and state.comment_end != "\n"):
            bounds = scanner.literal_bounds(text, offset)
            if bounds is None or bounds[0] > buffer.point_max:
                return False
            start = max(bounds[0], buffer.point_min)
            end = max(start, min(bounds[1], buffer.point_max))
            head = text[text.rfind("\n", 0, start) + 1 : start]
            with buffer.narrowed(start, end):
                return self._fill_lines(
                    buffer,
                    max(start, min(offset, end)),
                    _BLOCK_COMMENT_RE if state.in_comment else _INDENT_RE,
                    literal=True,
                    lead=len(head.expandtabs()),
                    base_indent=head[: len(head) - len(head.lstrip(" \t"))],
                )
        return self._fill_lines(
            buffer, offset, self._prefix_regex(scanner), require_comment=not scanner.prose
        )

    def _fill_lines(
        self,
        buffer: TextBuffer,
        offset: int,
        regex: re.Pattern[str],
        *,
        require_comment: bool = False,
        literal: bool = False,
        lead: int = 0,
        base_indent: str = "",
    ) -> bool:
        """Fill the paragraph of the accessible region holding ``offset``.

        Args:
            buffer (TextBuffer): Buffer to edit.
            offset (int): Offset inside the paragraph.
            regex (re.Pattern[str]): Matches the fill prefix of a line.
            require_comment (bool): Only fill lines whose prefix holds a comment
                introducer.
            literal (bool): The accessible region is the inside of a string or
                block comment; any non-blank line belongs to the paragraph.
            lead (int): Width of the text in front of the accessible region on
                its first line.
            base_indent (str): Indentation of the line the literal starts on.

        Returns:
            bool: True if the buffer changed.
        """
        lines = buffer.accessible_text.split("\n")
        base = buffer.point_min

        # Locate the line holding `offset`
        index = buffer.line_number_at(offset) - 1
        index = max(0, min(index, len(lines) - 1))

        def split(line: str) -> tuple[str, str]:
            match = regex.match(line)
            prefix = match.group(0) if match else ""
            return prefix, line[len(prefix) :]

        prefix, body = split(lines[index])
        if not body.strip():
            logger.debug("No paragraph at offset %d", offset)
            return False
        kind = self._prefix_kind(prefix)
        if require_comment and not kind:
            logger.debug("Not filling code at offset %d", offset)
            return False

        def belongs(i: int) -> bool:
            p, b = split(lines[i])
            return bool(b.strip()) and (literal or self._prefix_kind(p) == kind)

        first = index
        while first > 0 and belongs(first - 1):
            first -= 1
        last = index
        while last + 1 < len(lines) and belongs(last + 1):
            last += 1

        initial = split(lines[first])[0]
        subsequent = initial
        if literal and last > first:
            subsequent = split(lines[first + 1])[0]
        elif literal and first == 0 and lead:
            subsequent = base_indent
        skip = lead if first == 0 else 0

        words = " ".join(split(lines[i])[1].strip() for i in range(first, last + 1))
        filled = textwrap.fill(
            words,
            width=self.width,
            initial_indent=" " * skip + initial,
            subsequent_indent=subsequent,
            break_long_words=False,
            break_on_hyphens=False,
        )[skip:]
        if literal and last == len(lines) - 1:
            # Keep the spacing in front of the closing delimiter
            filled += lines[last][len(lines[last].rstrip(" \t")) :]

        start = base + sum(len(line) + 1 for line in lines[:first])
        end = start + len("\n".join(lines[first : last + 1]))
        if buffer.substring(start, end) == filled:
            return False
        logger.debug("Filling paragraph of lines %d-%d", first + 1, last + 1)
        buffer.replace(start, end, filled)
        return True
