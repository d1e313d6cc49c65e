# topmark:header:start
#
#   project      : ArgFlow
#   file         : main.py
#   file_relpath : src/argflow/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow Click CLI.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the console and verbosity from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from argflow.cli.commands.config_dump import config_command
from argflow.cli.commands.languages import languages_command
from argflow.cli.commands.reflow import collapse_command, dwim_command, expand_command
from argflow.cli.commands.version import version_command
from argflow.cli.console import ClickConsole
from argflow.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from argflow.config.logging import get_logger, resolve_env_log_level, setup_logging
from argflow.lexers import register_all_scanners

if TYPE_CHECKING:
    from argflow.cli.console import ConsoleLike

logger = get_logger(__name__)

register_all_scanners()


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured from the environment only
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    mode = ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO.value)
    enable_color = resolve_color_mode(cli_mode=mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ArgFlow: toggle bracketed lists between one line and one item per line.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the ArgFlow CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'argflow dwim PATH --line L --column C' to reflow a list.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(dwim_command)

cli.add_command(collapse_command)

cli.add_command(expand_command)

cli.add_command(languages_command)

cli.add_command(config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
