# topmark:header:start
#
#   project      : ArgFlow
#   file         : buffer.py
#   file_relpath : src/argflow/buffer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory text buffer with a point, markers and narrowing.

`TextBuffer` is the host-environment stand-in the reflow engine edits. It
mirrors the small subset of editor primitives the engine relies on:

* a **point** (cursor offset) that always lies in the accessible region;
* **markers** that follow insertions and deletions;
* a **restriction** (narrowing) limiting queries and edits to ``[point_min, point_max)``.

Scoped state is managed with context managers only:

* `TextBuffer.narrowed` restricts the accessible region and restores the previous
  restriction on every exit path.
* `TextBuffer.excursion` saves the point as a marker and restores it on every
  exit path.
* `TextBuffer.atomic` snapshots the buffer and rolls back all edits when an
  exception propagates.

Offsets are plain ``int`` indices into `TextBuffer.text` and are never affected
by narrowing (narrowing only limits which offsets are accessible).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from argflow.config.logging import get_logger
from argflow.errors import BufferRestrictionError

logger = get_logger(__name__)

_HSPACE: str = " \t"


@dataclass(eq=False)
class Marker:
    """A buffer position that follows edits.

    Markers compare by identity: two markers at the same offset are distinct.

    Attributes:
        offset (int): Current offset in the buffer.
        advances (bool): If True, text inserted exactly at the marker is placed
            *before* it (the marker advances). Otherwise the marker stays put.
    """

    offset: int
    advances: bool = False


@dataclass(frozen=True)
class Span:
    """Half-open span ``[start, end)`` over a buffer."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    @property
    def length(self) -> int:
        """Number of characters covered by the span."""
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """Return True if ``offset`` lies in ``[start, end)``."""
        return self.start <= offset < self.end


class TextBuffer:
    """Mutable text with point, markers and a restriction.

    Args:
        text (str): Initial buffer content.
        point (int): Initial cursor offset (clamped into the buffer).
    """

    def __init__(self, text: str = "", point: int = 0) -> None:
        self._text: str = text
        self._markers: list[Marker] = []
        self._begin: Marker = self._make_marker(0)
        self._end: Marker = self._make_marker(len(text), advances=True)
        self._point: Marker = self._make_marker(max(0, min(point, len(text))))

    def __repr__(self) -> str:
        return (
            f"TextBuffer(len={len(self._text)}, point={self.point}, "
            f"restriction=({self.point_min}, {self.point_max}))"
        )

    # ---- Markers -------------------------------------------------------------

    def _make_marker(self, offset: int, *, advances: bool = False) -> Marker:
        marker = Marker(offset=offset, advances=advances)
        self._markers.append(marker)
        return marker

    def make_marker(self, offset: int, *, advances: bool = False) -> Marker:
        """Create a marker at ``offset`` that follows subsequent edits.

        Release it with `release_marker` once it is no longer needed.
        """
        return self._make_marker(offset, advances=advances)

    def release_marker(self, marker: Marker) -> None:
        """Stop tracking ``marker``."""
        if any(marker is m for m in (self._begin, self._end, self._point)):
            raise ValueError("Cannot release an internal buffer marker")
        self._markers = [m for m in self._markers if m is not marker]

    # ---- Accessors -----------------------------------------------------------

    @property
    def text(self) -> str:
        """Full buffer content, regardless of the restriction."""
        return self._text

    @property
    def point_min(self) -> int:
        """First accessible offset."""
        return self._begin.offset

    @property
    def point_max(self) -> int:
        """One past the last accessible offset."""
        return self._end.offset

    @property
    def point(self) -> int:
        """Cursor offset; always within ``[point_min, point_max]``."""
        return self._point.offset

    @point.setter
    def point(self, offset: int) -> None:
        self._point.offset = max(self.point_min, min(offset, self.point_max))

    @property
    def accessible_text(self) -> str:
        """Text of the accessible region."""
        return self._text[self.point_min : self.point_max]

    def char_at(self, offset: int) -> str | None:
        """Return the character at ``offset`` or None outside the accessible region."""
        if self.point_min <= offset < self.point_max:
            return self._text[offset]
        return None

    def substring(self, start: int, end: int) -> str:
        """Return the text in ``[start, end)``; the range must be accessible."""
        self._check_range(start, end)
        return self._text[start:end]

    # ---- Lines ---------------------------------------------------------------

    def line_start(self, offset: int) -> int:
        """Offset of the beginning of the line holding ``offset`` (restriction aware)."""
        return max(self._text.rfind("\n", self.point_min, offset) + 1, self.point_min)

    def line_end(self, offset: int) -> int:
        """Offset of the line break ending the line holding ``offset`` (or `point_max`)."""
        idx = self._text.find("\n", offset, self.point_max)
        return self.point_max if idx < 0 else idx

    def line_number_at(self, offset: int) -> int:
        """1-based line number of ``offset`` counted from `point_min`."""
        return self._text.count("\n", self.point_min, offset) + 1

    def column_at(self, offset: int) -> int:
        """0-based column of ``offset``."""
        return offset - self.line_start(offset)

    def offset_at(self, line: int, column: int = 0) -> int:
        """Translate a 1-based line and 0-based column into an offset.

        The column is clamped to the line length.

        Raises:
            ValueError: If ``line`` is not a line of the accessible region.
        """
        if line < 1:
            raise ValueError(f"Line numbers start at 1, got {line}")
        start = self.point_min
        for _ in range(line - 1):
            idx = self._text.find("\n", start, self.point_max)
            if idx < 0:
                raise ValueError(f"Line {line} is past the end of the buffer")
            start = idx + 1
        return min(start + max(column, 0), self.line_end(start))

    def indentation_at(self, offset: int) -> str:
        """Return the leading horizontal whitespace of the line holding ``offset``."""
        start = self.line_start(offset)
        end = start
        while end < self.point_max and self._text[end] in _HSPACE:
            end += 1
        return self._text[start:end]

    # ---- Editing -------------------------------------------------------------

    def _check_range(self, start: int, end: int) -> None:
        if not (self.point_min <= start <= end <= self.point_max):
            raise BufferRestrictionError(
                f"Range [{start}, {end}) outside accessible region "
                f"[{self.point_min}, {self.point_max})"
            )

    def insert(self, offset: int, s: str) -> None:
        """Insert ``s`` at ``offset`` and shift markers after it."""
        self._check_range(offset, offset)
        if not s:
            return
        self._text = self._text[:offset] + s + self._text[offset:]
        n = len(s)
        for m in self._markers:
            if m.offset > offset or (m.offset == offset and m.advances):
                m.offset += n

    def delete(self, start: int, end: int) -> str:
        """Delete ``[start, end)``, collapse markers inside it, and return the removed text."""
        self._check_range(start, end)
        removed = self._text[start:end]
        if not removed:
            return removed
        self._text = self._text[:start] + self._text[end:]
        n = end - start
        for m in self._markers:
            if m.offset >= end:
                m.offset -= n
            elif m.offset > start:
                m.offset = start
        return removed

    def replace(self, start: int, end: int, s: str) -> None:
        """Replace ``[start, end)`` with ``s``."""
        self.delete(start, end)
        self.insert(start, s)

    def delete_horizontal_space(self, offset: int) -> int:
        """Delete spaces and tabs around ``offset``; return the resulting offset."""
        start = offset
        while start > self.point_min and self._text[start - 1] in _HSPACE:
            start -= 1
        end = offset
        while end < self.point_max and self._text[end] in _HSPACE:
            end += 1
        self.delete(start, end)
        return start

    def join_line(
        self,
        offset: int,
        *,
        openers: str = "([{",
        closers: str = ")]}",
    ) -> int | None:
        """Join the line holding ``offset`` to the previous line.

        The line break and the whitespace around it are removed and replaced by
        a single space, except right after an opening bracket and right before
        a closing bracket (where no space is left).

        Args:
            offset (int): Any offset on the line to join upward.
            openers (str): Characters after which no space is inserted.
            closers (str): Characters before which no space is inserted.

        Returns:
            int | None: Offset of the join point, or None when the line is the
                first accessible line.
        """
        bol = self.line_start(offset)
        if bol <= self.point_min:
            return None
        self.delete(bol - 1, bol)
        pos = self.delete_horizontal_space(bol - 1)
        before = self._text[pos - 1] if pos > self.point_min else "\n"
        after = self._text[pos] if pos < self.point_max else "\n"
        if before == "\n" or after == "\n" or before in openers or after in closers:
            return pos
        self.insert(pos, " ")
        return pos + 1

    # ---- Scoped state --------------------------------------------------------

    @contextmanager
    def narrowed(self, start: int, end: int) -> Iterator[TextBuffer]:
        """Restrict the accessible region to ``[start, end)`` for the ``with`` block.

        The restriction follows edits made inside the block. The previous
        restriction is restored on every exit path.
        """
        self._check_range(start, end)
        outer_begin = self._make_marker(self._begin.offset)
        outer_end = self._make_marker(self._end.offset, advances=True)
        self._begin.offset = start
        self._end.offset = end
        self.point = self.point
        logger.trace("Narrowed to [%d, %d)", start, end)
        try:
            yield self
        finally:
            self._begin.offset = outer_begin.offset
            self._end.offset = outer_end.offset
            self.release_marker(outer_begin)
            self.release_marker(outer_end)
            logger.trace("Widened to [%d, %d)", self.point_min, self.point_max)

    @contextmanager
    def excursion(self) -> Iterator[TextBuffer]:
        """Save the point for the ``with`` block and restore it on every exit path."""
        saved = self._make_marker(self.point)
        try:
            yield self
        finally:
            self._point.offset = saved.offset
            self.release_marker(saved)

    @contextmanager
    def atomic(self) -> Iterator[TextBuffer]:
        """Roll back every edit made in the ``with`` block if an exception escapes."""
        text = self._text
        offsets = [(m, m.offset) for m in self._markers]
        try:
            yield self
        except BaseException:
            self._text = text
            for m, off in offsets:
                m.offset = off
            logger.debug("Rolled back buffer edits after an error")
            raise
