# topmark:header:start
#
#   project      : ArgFlow
#   file         : pound.py
#   file_relpath : src/argflow/lexers/pound.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanner for pound-prefixed comment languages.

Covers languages using `#` line comments and single/double quoted strings, such
as Python, Ruby, shell scripts, TOML and YAML.
"""

from __future__ import annotations

from argflow.lexers.base import LexicalScanner
from argflow.lexers.registry import register_language


@register_language("ruby")
@register_language("shell")
@register_language("toml")
@register_language("yaml")
class PoundScanner(LexicalScanner):
    """Scanner for `#` line comments with `'` and `"` strings."""

    line_comments = ("#",)
    string_delimiters = ('"', "'")


@register_language("python")
class PythonScanner(PoundScanner):
    """Pound scanner that also understands triple-quoted strings."""

    string_delimiters = ('"""', "'''", '"', "'")
