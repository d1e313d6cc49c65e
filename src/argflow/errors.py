# topmark:header:start
#
#   project      : ArgFlow
#   file         : errors.py
#   file_relpath : src/argflow/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the ArgFlow core.

"No enclosing bracket" is **not** an error: the scope resolver returns ``None``
and the dispatcher falls back to paragraph filling. The exceptions below signal
input the core refuses to edit; the buffer is always left untouched when they
propagate out of a reflow entry point.
"""

from __future__ import annotations


class ArgflowError(Exception):
    """Base class for all ArgFlow core errors."""


class UnbalancedBracketsError(ArgflowError):
    """Raised when an opening bracket has no balanced closing counterpart.

    Attributes:
        offset (int): Offset of the offending bracket (or of the scan end).
    """

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class UnsafeCollapseError(ArgflowError):
    """Raised when joining lines would swallow list items into a line comment.

    Attributes:
        offset (int): Offset where the offending line comment starts.
    """

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class BufferRestrictionError(ArgflowError):
    """Raised when an edit or query targets text outside the accessible region."""


class ConfigFileError(ArgflowError):
    """Raised when an explicitly requested configuration file cannot be used.

    Attributes:
        path (str): The offending configuration file.
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
