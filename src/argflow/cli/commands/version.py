# topmark:header:start
#
#   project      : ArgFlow
#   file         : version.py
#   file_relpath : src/argflow/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow `version` command.

Prints the current ArgFlow version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from argflow.constants import ARGFLOW_VERSION

if TYPE_CHECKING:
    from argflow.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of ArgFlow.",
)
def version_command() -> None:
    """Show the current version of ArgFlow."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    console.print(ARGFLOW_VERSION)
