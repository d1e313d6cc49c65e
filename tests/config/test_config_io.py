# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_config_io.py
#   file_relpath : tests/config/test_config_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML loading, typed getters and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from tomlkit.exceptions import ParseError

from argflow.config.io import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_default_config_toml_text,
    load_defaults_dict,
    load_toml_dict,
    parse_toml_text,
    to_toml,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_parse_toml_text_returns_plain_dicts() -> None:
    data = parse_toml_text('[reflow]\nargument-separator = ";"\n[languages.go]\nindent-width = 2\n')
    assert data == {"reflow": {"argument-separator": ";"}, "languages": {"go": {"indent-width": 2}}}
    assert type(data["reflow"]) is dict


def test_parse_toml_text_raises_on_invalid_input() -> None:
    with pytest.raises(ParseError):
        parse_toml_text("[reflow\n")


def test_load_toml_dict_is_lenient(tmp_path: Path) -> None:
    """Missing or broken files load as empty tables."""
    assert load_toml_dict(tmp_path / "missing.toml") == {}
    broken = tmp_path / "broken.toml"
    broken.write_text("= nope", encoding="utf-8")
    assert load_toml_dict(broken) == {}


def test_packaged_defaults() -> None:
    """The default config is annotated text and parses to the reflow tables."""
    text = load_default_config_toml_text()
    assert text.lstrip().startswith("#")
    data = load_defaults_dict()
    assert data["reflow"]["argument-separator"] == ","
    assert data["languages"]["lisp"]["argument-separator"] == " "


def test_get_table_value() -> None:
    assert get_table_value({"a": {"b": 1}}, "a") == {"b": 1}
    assert get_table_value({"a": 3}, "a") == {}
    assert get_table_value({}, "a") == {}


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), ("true", None), (1, None)],
)
def test_get_bool_value_or_none(value: object, expected: bool | None) -> None:
    assert get_bool_value_or_none({"k": value}, "k") is expected
    assert get_bool_value_or_none({}, "k") is None


@pytest.mark.parametrize(
    ("value", "minimum", "expected"),
    [(4, 0, 4), (0, 0, 0), (0, 1, None), (-2, 0, None), (True, 0, None), ("4", 0, None)],
)
def test_get_int_value_or_none(value: object, minimum: int, expected: int | None) -> None:
    assert get_int_value_or_none({"k": value}, "k", minimum=minimum) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(",", ","), (3, "3"), (1.5, "1.5"), (["x"], None)],
)
def test_get_string_value_or_none(value: object, expected: str | None) -> None:
    assert get_string_value_or_none({"k": value}, "k") == expected


def test_to_toml_drops_none_values() -> None:
    text = to_toml({"reflow": {"indent-width": 2, "fill-column": None}})
    assert parse_toml_text(text) == {"reflow": {"indent-width": 2}}
