# topmark:header:start
#
#   project      : ArgFlow
#   file         : indent.py
#   file_relpath : src/argflow/reflow/indent.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Re-indentation of lines created by an expansion.

The engine only needs one capability: "re-indent these lines". It is expressed
as the `Indenter` protocol so callers can plug in their own engine;
`BracketIndenter` is the default, driven purely by bracket depth.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from argflow.config.logging import get_logger
from argflow.errors import UnbalancedBracketsError
from argflow.languages.base import IndentStyle

if TYPE_CHECKING:
    from argflow.buffer import TextBuffer
    from argflow.config.logging import ArgflowLogger
    from argflow.lexers.base import LexicalScanner

logger: ArgflowLogger = get_logger(__name__)

_HSPACE: str = " \t"


class Indenter(Protocol):
    """Capability interface of an indentation engine."""

    def indent_region(
        self,
        buffer: TextBuffer,
        start: int,
        end: int,
        scanner: LexicalScanner,
    ) -> None:
        """Re-indent every line whose start lies in ``(start, end]``."""
        ...


class BracketIndenter:
    """Indent continuation lines from the enclosing bracket.

    Rules, for each line:

    * a line starting with a closing bracket gets the indentation of the line
      holding the matching opening bracket;
    * with ``IndentStyle.LISP``, a line aligns with the second element of the
      enclosing form when that element sits on the opening line, and one column
      past the opening bracket otherwise;
    * with ``IndentStyle.BLOCK``, a line aligns with the content following the
      opening bracket on its line (visual alignment) or, when the bracket ends
      its line, one step deeper than the opening line.

    New indentation starts with the opening line's own indentation, so tabs
    stay tabs. A step is a tab when that indentation uses tabs, and ``width``
    spaces otherwise. Alignment past the opening line's indentation is made of
    spaces. Columns are measured with tabs expanded to ``tab_width``.

    Lines starting inside a string or a comment are left alone.

    Args:
        width (int): Indentation step for block style.
        style (IndentStyle): Alignment style.
        tab_width (int): Column width of a tab.
    """

    def __init__(
        self, width: int = 4, style: IndentStyle = IndentStyle.BLOCK, tab_width: int = 8
    ) -> None:
        self.width = width
        self.style = style
        self.tab_width = tab_width

    def __repr__(self) -> str:
        return f"BracketIndenter(width={self.width}, style={self.style.value!r})"

    @staticmethod
    def _line_start(text: str, offset: int) -> int:
        return text.rfind("\n", 0, offset) + 1

    @staticmethod
    def _skip_hspace(text: str, offset: int) -> int:
        while offset < len(text) and text[offset] in _HSPACE:
            offset += 1
        return offset

    def _columns(self, s: str) -> int:
        """Display width of ``s`` starting at column 0."""
        return len(s.expandtabs(self.tab_width))

    def _indentation(self, text: str, offset: int) -> str:
        start = self._line_start(text, offset)
        return text[start : self._skip_hspace(text, start)]

    def _align(self, text: str, opener_line: int, target: int) -> str:
        """Indentation that puts a line's first character under offset ``target``."""
        base = self._indentation(text, opener_line)
        gap = self._columns(text[opener_line:target]) - self._columns(base)
        return base + " " * max(gap, 0)

    def _step(self, base: str) -> str:
        return base + ("\t" if "\t" in base else " " * self.width)

    def _skip_token(self, text: str, offset: int, scanner: LexicalScanner) -> int:
        """Return the offset past the element starting at ``offset``."""
        if text[offset] in scanner.brackets:
            try:
                return scanner.matching_close(text, offset)
            except (ValueError, UnbalancedBracketsError):
                return len(text)
        while offset < len(text) and not text[offset].isspace() and text[offset] not in "()[]{}":
            offset += 1
        return offset

    def target_indentation(self, text: str, line_start: int, scanner: LexicalScanner) -> str | None:
        """Return the indentation for the line starting at ``line_start``.

        Returns:
            str | None: Indentation string, or None when the line must be left alone.
        """
        state = scanner.parse_state(text, line_start)
        if state.in_string_or_comment or state.pos != line_start:
            return None
        opener = state.innermost_open
        if opener is None:
            return None

        first = self._skip_hspace(text, line_start)
        opener_line = self._line_start(text, opener)
        if first < len(text) and text[first] in scanner.closers:
            return self._indentation(text, opener)

        eol = text.find("\n", opener)
        eol = len(text) if eol < 0 else eol

        if self.style is IndentStyle.LISP:
            head = self._skip_hspace(text, opener + 1)
            if head < eol:
                second = self._skip_hspace(text, self._skip_token(text, head, scanner))
                if second < eol and not scanner.is_in_comment(text, second + 1):
                    return self._align(text, opener_line, second)
            return self._align(text, opener_line, opener + 1)

        content = self._skip_hspace(text, opener + 1)
        if content < eol and not scanner.is_in_comment(text, content + 1):
            return self._align(text, opener_line, content)
        return self._step(self._indentation(text, opener))

    def target_column(self, text: str, line_start: int, scanner: LexicalScanner) -> int | None:
        """Return the indentation column for the line starting at ``line_start``.

        Returns:
            int | None: Target column, or None when the line must be left alone.
        """
        indent = self.target_indentation(text, line_start, scanner)
        return None if indent is None else self._columns(indent)

    def indent_region(
        self,
        buffer: TextBuffer,
        start: int,
        end: int,
        scanner: LexicalScanner,
    ) -> None:
        """Re-indent every line whose start lies in ``(start, end]``.

        Args:
            buffer (TextBuffer): Buffer to edit; ``(start, end]`` must be accessible.
            start (int): Exclusive lower bound for line starts.
            end (int): Inclusive upper bound for line starts.
            scanner (LexicalScanner): Scanner providing the lexical rules.
        """
        end_marker = buffer.make_marker(end, advances=True)
        try:
            nl = buffer.text.find("\n", start, end_marker.offset)
            while nl >= 0:
                line_start = nl + 1
                text = buffer.text
                first = self._skip_hspace(text, line_start)
                indent = self.target_indentation(text, line_start, scanner)
                if indent is not None:
                    if first >= len(text) or text[first] == "\n":
                        indent = ""
                    if text[line_start:first] != indent:
                        logger.trace("Indent line at %d with %r", line_start, indent)
                        buffer.replace(line_start, first, indent)
                    first = line_start + len(indent)
                nl = buffer.text.find("\n", first, end_marker.offset)
        finally:
            buffer.release_marker(end_marker)
