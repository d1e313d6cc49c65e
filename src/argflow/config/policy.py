# topmark:header:start
#
#   project      : ArgFlow
#   file         : policy.py
#   file_relpath : src/argflow/config/policy.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Placement policy model for ArgFlow (global and per-language).

This module defines the **policy layer** that controls how a list is laid out
when it is expanded or collapsed, both globally and with per-language overrides.

Design:
    * ``MutablePlacementPolicy`` uses tri-state options (``X | None``) to represent
      explicit values vs. *unset*. This enables non-destructive merges when
      composing multiple sources (defaults → user → project → CLI).
    * ``PlacementPolicy`` is the fully-resolved, immutable runtime view, so the
      reflow engine never branches on ``None``.
    * ``MutablePlacementPolicy.resolve(base)`` fills unset fields from ``base``
      and returns a frozen ``PlacementPolicy``; use it at ``Config.freeze()`` time.

TOML mapping:

    [reflow]
    argument-separator = ","
    trailing-separator = false

    [languages.lisp]
    argument-separator = " "
    first-argument-same-line = true
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Final

from argflow.config.io import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
)
from argflow.config.keys import Toml

if TYPE_CHECKING:
    from collections.abc import Mapping

    from argflow.config.model import Config

# Attribute name -> TOML key
POLICY_KEYS: Final[dict[str, str]] = {
    "fallback_to_paragraph_fill": Toml.KEY_FALLBACK_TO_PARAGRAPH_FILL,
    "first_argument_same_line": Toml.KEY_FIRST_ARGUMENT_SAME_LINE,
    "second_argument_same_line": Toml.KEY_SECOND_ARGUMENT_SAME_LINE,
    "last_argument_same_line": Toml.KEY_LAST_ARGUMENT_SAME_LINE,
    "argument_separator": Toml.KEY_ARGUMENT_SEPARATOR,
    "separator_is_pattern": Toml.KEY_SEPARATOR_IS_PATTERN,
    "trailing_separator": Toml.KEY_TRAILING_SEPARATOR,
    "indent_after_fill": Toml.KEY_INDENT_AFTER_FILL,
    "indent_width": Toml.KEY_INDENT_WIDTH,
    "fill_column": Toml.KEY_FILL_COLUMN,
}


@dataclass(frozen=True, slots=True)
class PlacementPolicy:
    """Immutable, runtime placement policy used by the reflow engine.

    Attributes:
        fallback_to_paragraph_fill (bool): Fill the paragraph instead of the list
            when the cursor is inside a comment or string.
        first_argument_same_line (bool): Keep the first item on the line of the
            opening bracket when expanding.
        second_argument_same_line (bool): Keep the first two items on the line of
            the opening bracket when expanding.
        last_argument_same_line (bool): Keep the closing bracket on the line of
            the last item when expanding.
        argument_separator (str): Item separator (literal text, or a regular
            expression when ``separator_is_pattern`` is True).
        separator_is_pattern (bool): Interpret ``argument_separator`` as a regex.
        trailing_separator (bool): Add a separator after the last item when expanding.
        indent_after_fill (bool): Re-indent the list after expanding.
        indent_width (int): Indentation step used by the default indenter.
        fill_column (int): Line width used by the paragraph-fill fallback.
    """

    fallback_to_paragraph_fill: bool = True
    first_argument_same_line: bool = False
    second_argument_same_line: bool = False
    last_argument_same_line: bool = False
    argument_separator: str = ","
    separator_is_pattern: bool = False
    trailing_separator: bool = False
    indent_after_fill: bool = True
    indent_width: int = 4
    fill_column: int = 70

    def thaw(self) -> MutablePlacementPolicy:
        """Return a mutable builder initialized from this frozen policy."""
        return MutablePlacementPolicy(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_toml_table(self) -> dict[str, Any]:
        """Serialize all keys to a TOML-friendly dict."""
        return {key: getattr(self, attr) for attr, key in POLICY_KEYS.items()}


@dataclass
class MutablePlacementPolicy:
    """Mutable builder for `PlacementPolicy`, suitable for config loading/merging.

    This class is merged in a **last-wins** manner when reading multiple config
    files. Every attribute mirrors `PlacementPolicy`; `None` means "inherit".
    """

    fallback_to_paragraph_fill: bool | None = None
    first_argument_same_line: bool | None = None
    second_argument_same_line: bool | None = None
    last_argument_same_line: bool | None = None
    argument_separator: str | None = None
    separator_is_pattern: bool | None = None
    trailing_separator: bool | None = None
    indent_after_fill: bool | None = None
    indent_width: int | None = None
    fill_column: int | None = None

    def merge_with(self, other: MutablePlacementPolicy) -> MutablePlacementPolicy:
        """Return a new policy by applying ``other`` over ``self`` (last-wins).

        ``None`` fields in ``other`` do not override explicit values in ``self``.
        """
        merged: dict[str, Any] = {}
        for f in fields(self):
            override: Any = getattr(other, f.name)
            merged[f.name] = override if override is not None else getattr(self, f.name)
        return MutablePlacementPolicy(**merged)

    def resolve(self, base: PlacementPolicy) -> PlacementPolicy:
        """Resolve tri-state fields against a base frozen policy.

        Args:
            base (PlacementPolicy): Policy that provides values for unset fields.

        Returns:
            PlacementPolicy: A fully-resolved immutable policy.
        """
        resolved: dict[str, Any] = {}
        for f in fields(self):
            value: Any = getattr(self, f.name)
            resolved[f.name] = getattr(base, f.name) if value is None else value
        return PlacementPolicy(**resolved)

    def freeze(self) -> PlacementPolicy:
        """Freeze to a concrete `PlacementPolicy` using the built-in defaults for unset fields."""
        return self.resolve(PlacementPolicy())

    def is_empty(self) -> bool:
        """Return True if no field is explicitly set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    @classmethod
    def from_toml_table(cls, tbl: Mapping[str, Any] | None) -> MutablePlacementPolicy:
        """Create a policy from a TOML table mapping.

        Unspecified or invalid keys become ``None`` (inherit from base at freeze time).
        An empty ``argument-separator`` is rejected.
        """
        if not tbl:
            return cls()
        separator: str | None = get_string_value_or_none(tbl, Toml.KEY_ARGUMENT_SEPARATOR)
        return cls(
            fallback_to_paragraph_fill=get_bool_value_or_none(
                tbl, Toml.KEY_FALLBACK_TO_PARAGRAPH_FILL
            ),
            first_argument_same_line=get_bool_value_or_none(tbl, Toml.KEY_FIRST_ARGUMENT_SAME_LINE),
            second_argument_same_line=get_bool_value_or_none(
                tbl, Toml.KEY_SECOND_ARGUMENT_SAME_LINE
            ),
            last_argument_same_line=get_bool_value_or_none(tbl, Toml.KEY_LAST_ARGUMENT_SAME_LINE),
            argument_separator=separator or None,
            separator_is_pattern=get_bool_value_or_none(tbl, Toml.KEY_SEPARATOR_IS_PATTERN),
            trailing_separator=get_bool_value_or_none(tbl, Toml.KEY_TRAILING_SEPARATOR),
            indent_after_fill=get_bool_value_or_none(tbl, Toml.KEY_INDENT_AFTER_FILL),
            indent_width=get_int_value_or_none(tbl, Toml.KEY_INDENT_WIDTH),
            fill_column=get_int_value_or_none(tbl, Toml.KEY_FILL_COLUMN, minimum=1),
        )

    def to_toml_table(self) -> dict[str, Any]:
        """Serialize only explicitly set keys to a TOML-friendly dict."""
        out: dict[str, Any] = {}
        for attr, key in POLICY_KEYS.items():
            value: Any = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out


def effective_policy(cfg: Config, language: str | None) -> PlacementPolicy:
    """Return the effective placement policy for a language.

    Per-language overrides take precedence over the global policy. If
    ``language`` is ``None`` or has no override, return the global policy.

    Args:
        cfg (Config): Frozen runtime configuration.
        language (str | None): Language identifier (e.g., ``"python"``).

    Returns:
        PlacementPolicy: The policy to reflow with.
    """
    if language:
        p: PlacementPolicy | None = cfg.policy_by_language.get(language)
        if p is not None:
            return p
    return cfg.policy
