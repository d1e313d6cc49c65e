# topmark:header:start
#
#   project      : ArgFlow
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ArgFlow test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `argflow.config.MutableConfig` (mutable), then
      `freeze()` into a `argflow.config.Config` for **public API** calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from argflow.buffer import TextBuffer
from argflow.config import MutableConfig
from argflow.config.logging import TRACE_LEVEL, setup_logging
from argflow.config.policy import PlacementPolicy
from argflow.lexers import register_all_scanners

if TYPE_CHECKING:
    from pathlib import Path

    from argflow.config import Config

CURSOR: str = "|"


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer settings out of the test runs.

    * ``ARGFLOW_LOG_LEVEL`` is removed so the environment never forces a log level.
    * ``XDG_CONFIG_HOME`` points at an empty directory so a user config file on
      the developer machine is never merged.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate the environment.
    """
    monkeypatch.delenv("ARGFLOW_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    xdg = tmp_path / "xdg-config"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the log level to TRACE so scanner and engine diagnostics run in every test.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    setup_logging(level=TRACE_LEVEL)
    register_all_scanners()


def buffer_at(marked: str, *, cursor: str = CURSOR) -> TextBuffer:
    """Return a `TextBuffer` whose point sits where ``cursor`` appears in ``marked``.

    Args:
        marked (str): Text holding exactly one cursor character.
        cursor (str): The cursor character.

    Returns:
        TextBuffer: Buffer without the cursor character, point at its position.
    """
    assert marked.count(cursor) == 1, "exactly one cursor expected"
    offset = marked.index(cursor)
    return TextBuffer(marked.replace(cursor, ""), offset)


def split_cursor(marked: str, *, cursor: str = CURSOR) -> tuple[str, int]:
    """Return ``(text, offset)`` for a text holding one cursor character."""
    assert marked.count(cursor) == 1, "exactly one cursor expected"
    return marked.replace(cursor, ""), marked.index(cursor)


def make_policy(**overrides: Any) -> PlacementPolicy:
    """Return a `PlacementPolicy` with the built-in defaults and ``overrides``."""
    return PlacementPolicy(**overrides)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from the packaged defaults and overrides.

    Args:
        **overrides (Any): `PlacementPolicy` attribute overrides applied like CLI flags.

    Returns:
        Config: The frozen configuration.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    if overrides:
        draft.apply_cli_args(overrides)
    return draft.freeze()
