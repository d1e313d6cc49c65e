# topmark:header:start
#
#   project      : ArgFlow
#   file         : keys.py
#   file_relpath : src/argflow/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML section and key names used by the ArgFlow configuration.

Option keys use the kebab-case names of the configuration surface
(``first-argument-same-line`` ...).
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section and key constants."""

    # Sections
    SECTION_REFLOW: Final[str] = "reflow"
    SECTION_LANGUAGES: Final[str] = "languages"

    # Top-level keys
    KEY_ROOT: Final[str] = "root"

    # [reflow] and [languages.<name>] keys
    KEY_FALLBACK_TO_PARAGRAPH_FILL: Final[str] = "fallback-to-paragraph-fill"
    KEY_FIRST_ARGUMENT_SAME_LINE: Final[str] = "first-argument-same-line"
    KEY_SECOND_ARGUMENT_SAME_LINE: Final[str] = "second-argument-same-line"
    KEY_LAST_ARGUMENT_SAME_LINE: Final[str] = "last-argument-same-line"
    KEY_ARGUMENT_SEPARATOR: Final[str] = "argument-separator"
    KEY_SEPARATOR_IS_PATTERN: Final[str] = "separator-is-pattern"
    KEY_TRAILING_SEPARATOR: Final[str] = "trailing-separator"
    KEY_INDENT_AFTER_FILL: Final[str] = "indent-after-fill"
    KEY_INDENT_WIDTH: Final[str] = "indent-width"
    KEY_FILL_COLUMN: Final[str] = "fill-column"

    BOOL_KEYS: Final[tuple[str, ...]] = (
        KEY_FALLBACK_TO_PARAGRAPH_FILL,
        KEY_FIRST_ARGUMENT_SAME_LINE,
        KEY_SECOND_ARGUMENT_SAME_LINE,
        KEY_LAST_ARGUMENT_SAME_LINE,
        KEY_SEPARATOR_IS_PATTERN,
        KEY_TRAILING_SEPARATOR,
        KEY_INDENT_AFTER_FILL,
    )
    INT_KEYS: Final[tuple[str, ...]] = (KEY_INDENT_WIDTH, KEY_FILL_COLUMN)
    STRING_KEYS: Final[tuple[str, ...]] = (KEY_ARGUMENT_SEPARATOR,)
