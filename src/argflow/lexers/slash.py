# topmark:header:start
#
#   project      : ArgFlow
#   file         : slash.py
#   file_relpath : src/argflow/lexers/slash.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanners for slash-style comment languages.

Covers the C family and its descendants: `//` line comments, `/* ... */` block
comments, and language-specific quoting rules.
"""

from __future__ import annotations

from argflow.lexers.base import LexicalScanner
from argflow.lexers.registry import register_language


@register_language("c")
@register_language("cpp")
@register_language("java")
@register_language("jsonc")
class SlashScanner(LexicalScanner):
    """Scanner for `//` and `/* */` comments with `'` and `"` literals."""

    line_comments = ("//",)
    block_comments = (("/*", "*/"),)
    string_delimiters = ('"', "'")


@register_language("javascript")
@register_language("typescript")
class ScriptScanner(SlashScanner):
    """Slash scanner with template literals (backquotes)."""

    string_delimiters = ('"', "'", "`")


@register_language("go")
class GoScanner(SlashScanner):
    """Slash scanner with raw (backquoted, escape-free) strings."""

    string_delimiters = ('"', "'")
    raw_string_delimiters = ("`",)


@register_language("rust")
class RustScanner(SlashScanner):
    """Slash scanner without `'` strings (`'` introduces lifetimes in Rust)."""

    string_delimiters = ('"',)


@register_language("css")
class StyleScanner(LexicalScanner):
    """Scanner for stylesheets: `/* */` comments only (`//` is part of URLs in CSS)."""

    block_comments = (("/*", "*/"),)
    string_delimiters = ('"', "'")
