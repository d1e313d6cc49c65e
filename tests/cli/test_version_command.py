# topmark:header:start
#
#   project      : ArgFlow
#   file         : test_version_command.py
#   file_relpath : tests/cli/test_version_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the `version` command and the bare group invocation."""

from __future__ import annotations

import pytest

from argflow.constants import ARGFLOW_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli

pytestmark = pytest.mark.cli


def test_version_prints_the_package_version() -> None:
    result = run_cli(["version"])
    assert_SUCCESS(result)
    assert result.output == f"{ARGFLOW_VERSION}\n"


def test_no_subcommand_prints_hint_and_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert result.output.startswith("Hint:")
    assert "Commands:" in result.output
    for name in ("dwim", "collapse", "expand", "languages", "config", "version"):
        assert name in result.output


def test_help_option() -> None:
    result = run_cli(["expand", "-h"])
    assert_SUCCESS(result)
    assert "--offset" in result.output
    assert "--trailing-separator / --no-trailing-separator" in result.output
