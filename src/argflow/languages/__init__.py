# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/languages/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Language recognition for ArgFlow."""

from __future__ import annotations

from argflow.languages.base import IndentStyle, Language
from argflow.languages.instances import get_language_registry, resolve_language

__all__ = [
    "IndentStyle",
    "Language",
    "get_language_registry",
    "resolve_language",
]
