# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_config_command.py
#   file_relpath : tests/cli/test_config_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the `config` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from argflow.cli.exit_codes import ExitCode
from argflow.config.io import load_default_config_toml_text, parse_toml_text
from tests.cli.conftest import assert_exit_code, assert_SUCCESS, run_cli_in

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.cli


def test_config_defaults_prints_annotated_file(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["config", "--defaults"])
    assert_SUCCESS(result)
    assert result.output == load_default_config_toml_text()


def test_config_no_config_shows_builtin_values(tmp_path: Path) -> None:
    (tmp_path / "argflow.toml").write_text("[reflow]\nindent-width = 2\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["config", "--no-config"])
    assert_SUCCESS(result)
    data = parse_toml_text(result.output)
    assert data["reflow"]["indent-width"] == 4
    assert data["languages"]["lisp"]["argument-separator"] == " "


def test_config_merges_discovered_files(tmp_path: Path) -> None:
    (tmp_path / "argflow.toml").write_text(
        "root = true\n[reflow]\nindent-width = 2\n[languages.go]\ntrailing-separator = true\n",
        encoding="utf-8",
    )
    result = run_cli_in(tmp_path, ["config"])
    assert_SUCCESS(result)
    data = parse_toml_text(result.output)
    assert data["reflow"]["indent-width"] == 2
    assert data["languages"]["go"] == {"trailing-separator": True}


def test_config_sources_and_cli_overrides(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["config", "--no-config", "--sources", "--trailing-separator"])
    assert_SUCCESS(result)
    assert result.output.startswith("# ArgFlow ")
    assert "#   <defaults>" in result.output
    assert "#   <CLI overrides>" in result.output
    assert parse_toml_text(result.output)["reflow"]["trailing-separator"] is True


def test_config_explicit_file_errors(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["config", "--config", "missing.toml"])
    assert_exit_code(result, ExitCode.CONFIG_ERROR)


def test_config_rejects_invalid_language_pattern(tmp_path: Path) -> None:
    (tmp_path / "bad.toml").write_text(
        '[languages.go]\nargument-separator = "("\nseparator-is-pattern = true\n',
        encoding="utf-8",
    )
    result = run_cli_in(tmp_path, ["config", "--no-config", "--config", "bad.toml"])
    assert_exit_code(result, ExitCode.CONFIG_ERROR)
    assert "[languages.go]" in result.output
