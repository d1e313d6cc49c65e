# topmark:header:start
#
#   project      : ArgFlow
#   file         : lisp.py
#   file_relpath : src/argflow/lexers/lisp.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanner for Lisp dialects.

`;` starts a line comment, `#| ... |#` is a block comment, only `"` delimits
strings (`'` is the quote operator), and a backslash quotes the next character
even in code (character literals such as `?\\(` or `\\(`).
"""

from __future__ import annotations

from argflow.lexers.base import LexicalScanner
from argflow.lexers.registry import register_language


@register_language("lisp")
class LispScanner(LexicalScanner):
    """Scanner for Lisp forms."""

    line_comments = (";",)
    block_comments = (("#|", "|#"),)
    string_delimiters = ('"',)
    escape_in_code = True
