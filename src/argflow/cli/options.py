# topmark:header:start
#
#   project      : ArgFlow
#   file         : options.py
#   file_relpath : src/argflow/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the ArgFlow CLI.

This module centralizes reusable options (verbosity, color, configuration,
cursor position, placement overrides) and their resolution logic, so commands
and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Callable, ParamSpec, TypeVar

import click

from argflow.cli.errors import ArgflowUsageError
from argflow.config.logging import get_logger
from argflow.languages import get_language_registry

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
        2. **Environment**: ``FORCE_COLOR`` (set and not ``"0"``) → True;
           ``NO_COLOR`` (set to any value) → False.
        3. **Auto**: ``stdout.isatty()``.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Returns:
        int: ``0`` by default, the ``-v`` count when verbose, ``-1`` when quiet.

    Raises:
        ArgflowUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ArgflowUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Both options count occurrences and are mutually exclusive.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress informational output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply common configuration options (``--config``, ``--no-config``)."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore user and project config files (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(file_okay=True, dir_okay=False),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def language_option(f: Callable[P, R]) -> Callable[P, R]:
    """Apply the ``--language`` option (choices: registered languages)."""
    return click.option(
        "--language",
        "-l",
        "language",
        type=click.Choice(sorted(get_language_registry())),
        default=None,
        help="Language of the input (default: detected from the file name).",
    )(f)


def cursor_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply the cursor position options (``--offset`` or ``--line``/``--column``)."""
    f = click.option(
        "--offset",
        type=click.IntRange(min=0),
        default=None,
        help="Cursor as a 0-based character offset.",
    )(f)
    f = click.option(
        "--line",
        type=click.IntRange(min=1),
        default=None,
        help="Cursor line (1-based).",
    )(f)
    f = click.option(
        "--column",
        type=click.IntRange(min=0),
        default=None,
        help="Cursor column (0-based, used with --line; default 0).",
    )(f)
    return f


def placement_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply placement policy overrides.

    Every boolean override is a ``--x/--no-x`` pair defaulting to None (use config).
    """
    flags: list[tuple[str, str, str]] = [
        (
            "fallback-to-paragraph-fill",
            "fallback_to_paragraph_fill",
            "Fill the paragraph when the cursor is in a comment or string.",
        ),
        (
            "first-argument-same-line",
            "first_argument_same_line",
            "Keep the first item on the opening bracket line.",
        ),
        (
            "second-argument-same-line",
            "second_argument_same_line",
            "Keep the first two items on the opening bracket line.",
        ),
        (
            "last-argument-same-line",
            "last_argument_same_line",
            "Keep the closing bracket on the last item line.",
        ),
        ("trailing-separator", "trailing_separator", "Add a separator after the last item."),
        ("indent", "indent_after_fill", "Re-indent the list after expanding."),
        (
            "separator-is-pattern",
            "separator_is_pattern",
            "Treat --separator as a regular expression.",
        ),
    ]
    for name, dest, help_text in reversed(flags):
        f = click.option(f"--{name}/--no-{name}", dest, default=None, help=help_text)(f)
    f = click.option(
        "--fill-column",
        "fill_column",
        type=click.IntRange(min=1),
        default=None,
        help="Line width for paragraph filling.",
    )(f)
    f = click.option(
        "--indent-width",
        "indent_width",
        type=click.IntRange(min=0),
        default=None,
        help="Indentation step for expanded lists.",
    )(f)
    f = click.option(
        "--separator",
        "argument_separator",
        default=None,
        metavar="TEXT",
        help="Item separator (default ',').",
    )(f)
    return f


def collect_placement_overrides(params: dict[str, Any]) -> dict[str, Any]:
    """Return the placement overrides present in Click ``params`` (``None`` dropped)."""
    keys = (
        "fallback_to_paragraph_fill",
        "first_argument_same_line",
        "second_argument_same_line",
        "last_argument_same_line",
        "trailing_separator",
        "indent_after_fill",
        "separator_is_pattern",
        "fill_column",
        "indent_width",
        "argument_separator",
    )
    overrides = {k: params[k] for k in keys if params.get(k) is not None}
    if overrides.get("argument_separator") == "":
        raise ArgflowUsageError("--separator must not be empty.")
    return overrides
