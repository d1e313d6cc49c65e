# topmark:header:start
#
#   project      : ArgFlow
#   file         : base.py
#   file_relpath : src/argflow/lexers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lexical scanner base module.

This module defines the `LexicalScanner` base class, which answers the only
questions the reflow engine asks about source text:

* Is an offset inside a string or a comment?
* Which opening bracket most closely encloses an offset?
* Where is the balanced closing bracket of a structural opening bracket?

Scanning is a single forward pass over the buffer text that produces an
immutable `SyntaxState`. Because states are immutable, a caller can stop at any
offset and later *resume* from the returned state (see `LexicalScanner.advance`)
without re-scanning the prefix and without disturbing any other state it holds.

Scanners know nothing about a particular grammar. Subclasses only declare
comment, string and bracket delimiters (class attributes), mirroring how each
comment family differs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, ClassVar

from argflow.config.logging import get_logger
from argflow.errors import UnbalancedBracketsError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from argflow.languages.base import Language

logger = get_logger(__name__)


@dataclass(frozen=True)
class SyntaxState:
    """Lexical state at a position of the scanned text.

    Attributes:
        pos (int): Offset the state describes. The scanner consumes whole tokens, so
            ``pos`` may lie past a requested offset that falls inside a
            multi-character delimiter.
        open_brackets (tuple[int, ...]): Offsets of the unclosed opening brackets,
            outermost first.
        string_end (str | None): Delimiter that closes the current string, or None.
        string_start (int | None): Offset where the current string starts.
        comment_end (str | None): Delimiter that closes the current comment
            (``"\\n"`` for line comments), or None.
        comment_start (int | None): Offset where the current comment starts.
    """

    pos: int = 0
    open_brackets: tuple[int, ...] = ()
    string_end: str | None = None
    string_start: int | None = None
    comment_end: str | None = None
    comment_start: int | None = None

    @property
    def depth(self) -> int:
        """Bracket nesting depth."""
        return len(self.open_brackets)

    @property
    def innermost_open(self) -> int | None:
        """Offset of the innermost unclosed opening bracket, or None at top level."""
        return self.open_brackets[-1] if self.open_brackets else None

    @property
    def in_string(self) -> bool:
        """True inside a string literal."""
        return self.string_end is not None

    @property
    def in_comment(self) -> bool:
        """True inside a comment."""
        return self.comment_end is not None

    @property
    def in_string_or_comment(self) -> bool:
        """True inside a string literal or a comment."""
        return self.in_string or self.in_comment


class LexicalScanner:
    """Base class for language-family scanners.

    Subclasses declare delimiters as class attributes:

    * ``line_comments``: introducers of comments running to the end of the line.
    * ``block_comments``: ``(open, close)`` pairs.
    * ``string_delimiters``: quote sequences; the same sequence closes the string.
      Longer delimiters (``'''``) are tried before shorter ones (``'``).
    * ``raw_string_delimiters``: quote sequences whose content has no escapes.
    * ``escape_char``: escape character inside (non-raw) strings.
    * ``escape_in_code``: whether the escape character also quotes the next
      character outside strings (Lisp character syntax).
    * ``brackets``: mapping of opening to closing bracket characters.
    * ``prose``: whether text outside strings and comments is prose that may be
      refilled (plain text, markup content) rather than code.

    The registry binds a scanner instance to a language at runtime
    (``scanner.language = lang``).
    """

    language: Language | None = None

    line_comments: ClassVar[tuple[str, ...]] = ()
    block_comments: ClassVar[tuple[tuple[str, str], ...]] = ()
    string_delimiters: ClassVar[tuple[str, ...]] = ()
    raw_string_delimiters: ClassVar[tuple[str, ...]] = ()
    escape_char: ClassVar[str] = "\\"
    escape_in_code: ClassVar[bool] = False
    brackets: ClassVar[Mapping[str, str]] = {"(": ")", "[": "]", "{": "}"}
    prose: ClassVar[bool] = False

    def __init__(self) -> None:
        self.language = None
        self._closers: frozenset[str] = frozenset(self.brackets.values())
        self._comment_openers: tuple[tuple[str, str], ...] = tuple(
            sorted(
                [(prefix, "\n") for prefix in self.line_comments] + list(self.block_comments),
                key=lambda pair: len(pair[0]),
                reverse=True,
            )
        )
        self._string_openers: tuple[tuple[str, bool], ...] = tuple(
            sorted(
                [(d, False) for d in self.string_delimiters]
                + [(d, True) for d in self.raw_string_delimiters],
                key=lambda pair: len(pair[0]),
                reverse=True,
            )
        )

    def __repr__(self) -> str:
        name = self.language.name if self.language else None
        return f"{self.__class__.__name__}(language={name!r})"

    # ---- Bracket characters --------------------------------------------------

    @property
    def openers(self) -> str:
        """All opening bracket characters."""
        return "".join(self.brackets.keys())

    @property
    def closers(self) -> str:
        """All closing bracket characters."""
        return "".join(self.brackets.values())

    def closer_for(self, opener: str) -> str:
        """Return the closing bracket for ``opener``.

        Raises:
            ValueError: If ``opener`` is not an opening bracket of this scanner.
        """
        try:
            return self.brackets[opener]
        except KeyError:
            raise ValueError(f"{opener!r} is not an opening bracket") from None

    # ---- Hooks ---------------------------------------------------------------

    def strings_allowed(self, text: str, open_brackets: tuple[int, ...]) -> bool:
        """Return True if a quote starts a string at the current nesting.

        Markup scanners override this so that quotes in prose are not strings.
        """
        return True

    # ---- Scanning ------------------------------------------------------------

    def _match_comment_open(self, text: str, i: int) -> tuple[str, str] | None:
        for opener, closer in self._comment_openers:
            if text.startswith(opener, i):
                return opener, closer
        return None

    def _match_string_open(self, text: str, i: int) -> tuple[str, bool] | None:
        for delim, raw in self._string_openers:
            if text.startswith(delim, i):
                return delim, raw
        return None

    def _is_raw(self, delim: str) -> bool:
        return delim in self.raw_string_delimiters

    def _run(self, state: SyntaxState, text: str, end: int, stop_depth: int | None) -> SyntaxState:
        """Scan ``text`` from ``state.pos`` up to ``end``.

        When ``stop_depth`` is given, stop right after the closing bracket that
        brings the nesting depth back to ``stop_depth``.
        """
        i = state.pos
        stack = list(state.open_brackets)
        string_end = state.string_end
        string_start = state.string_start
        comment_end = state.comment_end
        comment_start = state.comment_start

        while i < end:
            if comment_end is not None:
                if text.startswith(comment_end, i):
                    i += len(comment_end)
                    comment_end = comment_start = None
                else:
                    i += 1
                continue

            if string_end is not None:
                if text[i] == self.escape_char and not self._is_raw(string_end):
                    i += 2
                elif text.startswith(string_end, i):
                    i += len(string_end)
                    string_end = string_start = None
                else:
                    i += 1
                continue

            comment = self._match_comment_open(text, i)
            if comment is not None:
                comment_start, comment_end = i, comment[1]
                i += len(comment[0])
                continue

            if self.strings_allowed(text, tuple(stack)):
                string = self._match_string_open(text, i)
                if string is not None:
                    string_start, string_end = i, string[0]
                    i += len(string[0])
                    continue

            ch = text[i]
            if self.escape_in_code and ch == self.escape_char:
                i += 2
                continue
            if ch in self.brackets:
                stack.append(i)
            elif ch in self._closers:
                if stack:
                    opened = stack.pop()
                    if self.brackets[text[opened]] != ch:
                        logger.debug(
                            "Mismatched bracket %r at %d closes %r at %d",
                            ch,
                            i,
                            text[opened],
                            opened,
                        )
                    if stop_depth is not None and len(stack) == stop_depth:
                        return SyntaxState(pos=i + 1, open_brackets=tuple(stack))
                else:
                    logger.debug("Unmatched closing bracket %r at %d", ch, i)
            i += 1

        return SyntaxState(
            pos=i,
            open_brackets=tuple(stack),
            string_end=string_end,
            string_start=string_start,
            comment_end=comment_end,
            comment_start=comment_start,
        )

    def advance(self, state: SyntaxState, text: str, end: int) -> SyntaxState:
        """Resume scanning from ``state`` up to offset ``end``.

        ``state`` itself is never modified; the returned state describes ``end``
        (or the end of the token straddling it).
        """
        if end <= state.pos:
            return state
        return self._run(state, text, min(end, len(text)), None)

    def parse_state(self, text: str, offset: int) -> SyntaxState:
        """Return the lexical state at ``offset``, scanning from the start of ``text``."""
        return self.advance(SyntaxState(), text, offset)

    def innermost_open(self, text: str, offset: int) -> int | None:
        """Return the innermost structural opening bracket enclosing ``offset``."""
        return self.parse_state(text, offset).innermost_open

    def matching_close(self, text: str, open_offset: int) -> int:
        """Return the offset one past the bracket closing the one at ``open_offset``.

        Args:
            text (str): Text to scan.
            open_offset (int): Offset of a structural (code) opening bracket.

        Returns:
            int: Offset one past the matching closing bracket.

        Raises:
            ValueError: If ``open_offset`` is not a structural opening bracket.
            UnbalancedBracketsError: If the bracket is never closed, or is closed by
                a bracket of another kind.
        """
        state = self.parse_state(text, open_offset)
        if state.pos != open_offset or state.in_string_or_comment:
            raise ValueError(f"Offset {open_offset} is not in code")
        opener = text[open_offset : open_offset + 1]
        closer = self.closer_for(opener)

        depth = state.depth
        start = replace(state, pos=open_offset + 1, open_brackets=(*state.open_brackets, open_offset))
        result = self._run(start, text, len(text), depth)
        if result.depth != depth:
            raise UnbalancedBracketsError(
                f"Unbalanced {opener!r} at offset {open_offset}: no closing {closer!r}",
                offset=open_offset,
            )
        found = text[result.pos - 1]
        if found != closer:
            raise UnbalancedBracketsError(
                f"Mismatched {opener!r} at offset {open_offset}: closed by {found!r} "
                f"at offset {result.pos - 1}",
                offset=result.pos - 1,
            )
        return result.pos

    def is_in_string_or_comment(self, text: str, offset: int) -> bool:
        """Return True if ``offset`` lies inside a string or a comment."""
        return self.parse_state(text, offset).in_string_or_comment

    def is_in_comment(self, text: str, offset: int) -> bool:
        """Return True if ``offset`` lies inside a comment."""
        return self.parse_state(text, offset).in_comment

    def literal_bounds(self, text: str, offset: int) -> tuple[int, int] | None:
        """Return the content of the string or comment holding ``offset``.

        Returns:
            tuple[int, int] | None: ``(start, end)`` of the literal without its
                delimiters (``end`` is the end of ``text`` when the literal is
                never closed), or None when ``offset`` is in code.
        """
        state = self.parse_state(text, offset)
        if state.string_end is not None and state.string_start is not None:
            begin, closer = state.string_start, state.string_end
            start = begin + len(closer)
        elif state.comment_end is not None and state.comment_start is not None:
            begin, closer = state.comment_start, state.comment_end
            opener = self._match_comment_open(text, begin)
            start = begin + (len(opener[0]) if opener else 0)
        else:
            return None

        def same_literal(s: SyntaxState) -> bool:
            return (s.string_start if s.string_end is not None else s.comment_start) == begin

        end_state = state
        while same_literal(end_state) and end_state.pos < len(text):
            end_state = self.advance(end_state, text, end_state.pos + 1)
        if same_literal(end_state):
            return start, len(text)
        return start, max(start, end_state.pos - len(closer))
