# topmark:header:start
#
#   project      : ArgFlow
#   file         : io.py
#   file_relpath : src/argflow/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for the ArgFlow configuration.

This module reads the packaged default configuration and on-disk TOML files
(`argflow.toml` / `pyproject.toml`), extracts typed values from parsed tables,
and renders tables back to TOML text. Parsing is done with `tomlkit` and
returned as plain `dict` structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from importlib.resources import files
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from argflow.config.logging import get_logger
from argflow.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE

if TYPE_CHECKING:
    from pathlib import Path

    from argflow.config.logging import ArgflowLogger

logger: ArgflowLogger = get_logger(__name__)

TomlTable = dict[str, Any]


# --- Loading ---


def parse_toml_text(text: str) -> TomlTable:
    """Parse TOML text into a plain dict.

    Raises:
        TomlkitParseError: If ``text`` is not valid TOML.
    """
    doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``argflow.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        return parse_toml_text(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}
    except (TypeError, ValueError) as e:
        logger.error("Unknown error while reading TOML from %s: %s", path, e)
        return {}


def load_default_config_toml_text() -> str:
    """Return the annotated packaged default configuration as text."""
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    return resource.read_text(encoding="utf8")


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a dict.

    Returns:
        TomlTable: Parsed defaults, or an empty dict if the resource is unreadable
            (runtime defaults in `PlacementPolicy` then apply).
    """
    try:
        return parse_toml_text(load_default_config_toml_text())
    except OSError as e:
        logger.warning("Cannot read packaged default config %s: %s", DEFAULT_TOML_CONFIG_NAME, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Packaged default config %s is invalid: %s", DEFAULT_TOML_CONFIG_NAME, e)
        return {}


# --- Getters ---


def get_table_value(table: Mapping[str, Any], key: str) -> TomlTable:
    """Return a sub-table, or an empty dict if missing or not a table."""
    value: Any = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.warning("Expected a table for '%s', got %s; ignoring", key, type(value).__name__)
    return {}


def get_bool_value_or_none(table: Mapping[str, Any], key: str) -> bool | None:
    """Extract an optional boolean; ``None`` if missing or not a bool."""
    if key not in table:
        return None
    value: Any = table[key]
    if isinstance(value, bool):
        return value
    logger.warning("Expected a boolean for '%s', got %r; ignoring", key, value)
    return None


def get_int_value_or_none(table: Mapping[str, Any], key: str, *, minimum: int = 0) -> int | None:
    """Extract an optional integer no smaller than ``minimum``."""
    if key not in table:
        return None
    value: Any = table[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
        return value
    logger.warning("Expected an integer >= %d for '%s', got %r; ignoring", minimum, key, value)
    return None


def get_string_value_or_none(table: Mapping[str, Any], key: str) -> str | None:
    """Extract an optional string.

    Numbers and booleans are coerced with ``str(...)``; other values yield ``None``.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    logger.warning("Cannot coerce %r for '%s' to string; ignoring", value, key)
    return None


# --- Rendering ---


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` values from mappings and lists."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none_for_toml(v) for k, v in m.items() if v is not None}
    if isinstance(value, list):
        seq: list[object] = cast("list[object]", value)
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


def to_toml(toml_dict: Mapping[str, Any]) -> str:
    """Serialize a TOML mapping to a string.

    Args:
        toml_dict (Mapping[str, Any]): TOML mapping to render.

    Returns:
        str: The rendered TOML document.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
