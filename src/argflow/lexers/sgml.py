# topmark:header:start
#
#   project      : ArgFlow
#   file         : sgml.py
#   file_relpath : src/argflow/lexers/sgml.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanner for tag-based markup (HTML, XML).

Tags are treated as brackets (``<`` ... ``>``) so that attribute lists can be
reflowed like argument lists. Quotes only delimit strings inside a tag; in text
content they are ordinary characters (``don't`` must not open a string).
"""

from __future__ import annotations

from typing import ClassVar

from argflow.lexers.base import LexicalScanner
from argflow.lexers.registry import register_language


@register_language("html")
@register_language("xml")
class SgmlScanner(LexicalScanner):
    """Scanner for `<!-- -->` comments and tag-scoped attribute strings."""

    tag_open: ClassVar[str] = "<"
    prose = True

    block_comments = (("<!--", "-->"),)
    string_delimiters = ('"', "'")
    escape_char = ""
    brackets = {"<": ">", "(": ")", "[": "]", "{": "}"}

    def strings_allowed(self, text: str, open_brackets: tuple[int, ...]) -> bool:
        """Quotes start strings only when the innermost open bracket is a tag."""
        return bool(open_brackets) and text[open_brackets[-1]] == self.tag_open
