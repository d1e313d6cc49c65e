# topmark:header:start
#
#   project      : ArgFlow
#   file         : base.py
#   file_relpath : src/argflow/languages/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Language definitions used to pick a lexical scanner for a buffer.

A `Language` only describes *how to recognize* a source language by name and
which reflow conventions apply to it (markup handling, indentation style). The
lexical rules themselves live in the scanner bound to the language by
[`argflow.lexers.registry.register_language`][].
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from argflow.config.logging import ArgflowLogger, get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger: ArgflowLogger = get_logger(__name__)


class IndentStyle(Enum):
    """How continuation lines of an expanded list are indented.

    Attributes:
        BLOCK: Indent one level deeper than the line holding the opening bracket,
            or align with content following the bracket on the same line.
        LISP: Align with the second element of the form when it sits on the
            opening line (``(foo a`` / ``     b)``).
    """

    BLOCK = "block"
    LISP = "lisp"


@dataclass
class Language:
    """Source language recognized by ArgFlow.

    Attributes:
        name (str): Unique identifier (e.g., ``"python"``).
        extensions (list[str]): File suffixes including the dot (e.g., ``".py"``).
        filenames (list[str]): Exact basenames (e.g., ``"Makefile"``).
        patterns (list[str]): Regular expressions matched against the basename.
        description (str): Human-readable description.
        markup (bool): True for tag-based languages (HTML, XML) where the tag opener
            changes the comment/string fallback rules.
        tag_open (str): Tag-opening bracket for markup languages.
        indent_style (IndentStyle): Continuation-line indentation style.
    """

    name: str
    extensions: list[str]
    filenames: list[str]
    patterns: list[str]
    description: str
    markup: bool = False
    tag_open: str = "<"
    indent_style: IndentStyle = IndentStyle.BLOCK

    _compiled_patterns: list[re.Pattern[str]] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def matches(self, path: Path) -> bool:
        """Return True if ``path`` belongs to this language (extension, filename, pattern).

        Args:
            path (Path): The path to the file to check.

        Returns:
            bool: True if the file matches this language, False otherwise.
        """
        if self.extensions and path.suffix in self.extensions:
            return True

        if path.name in self.filenames:
            return True

        if self.patterns:
            if self._compiled_patterns is None:
                try:
                    self._compiled_patterns = [re.compile(p) for p in self.patterns]
                except re.error:
                    logger.warning("Invalid name pattern in language '%s'", self.name)
                    self._compiled_patterns = []
            return any(regex.fullmatch(path.name) for regex in self._compiled_patterns)

        return False
