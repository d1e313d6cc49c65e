# topmark:header:start
#
#   project      : ArgFlow
#   file         : plain.py
#   file_relpath : src/argflow/lexers/plain.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanners for formats without comments."""

from __future__ import annotations

from argflow.lexers.base import LexicalScanner
from argflow.lexers.registry import register_language


@register_language("json")
class JsonScanner(LexicalScanner):
    """JSON: double-quoted strings, no comments."""

    string_delimiters = ('"',)


@register_language("plain")
class PlainScanner(LexicalScanner):
    """Plain text: brackets only, no strings or comments."""

    prose = True
