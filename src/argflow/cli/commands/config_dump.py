# topmark:header:start
#
#   project      : ArgFlow
#   file         : config_dump.py
#   file_relpath : src/argflow/cli/commands/config_dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow `config` command.

Prints the effective configuration as TOML after merging defaults, discovered
config files, explicit ``--config`` files and placement overrides. With
``--defaults`` it prints the annotated packaged default configuration instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from argflow.cli.config_resolver import resolve_config_from_click
from argflow.cli.options import collect_placement_overrides, common_config_options, placement_options
from argflow.config.io import load_default_config_toml_text, to_toml
from argflow.constants import ARGFLOW_VERSION

if TYPE_CHECKING:
    from argflow.cli.console import ConsoleLike


@click.command(
    name="config",
    help="Show the effective configuration as TOML.",
)
@common_config_options
@placement_options
@click.option(
    "--defaults",
    "show_defaults",
    is_flag=True,
    help="Show the annotated built-in defaults instead.",
)
@click.option(
    "--sources",
    "show_sources",
    is_flag=True,
    help="List the configuration sources as TOML comments.",
)
def config_command(**params: Any) -> None:
    """Print the effective configuration."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if params["show_defaults"]:
        console.print(load_default_config_toml_text(), nl=False)
        return

    cfg = resolve_config_from_click(
        anchor=Path.cwd(),
        config_paths=params["config_paths"],
        no_config=params["no_config"],
        overrides=collect_placement_overrides(params),
    )
    if params["show_sources"]:
        console.print(f"# ArgFlow {ARGFLOW_VERSION} configuration sources:")
        for source in cfg.config_files:
            console.print(f"#   {source}")
        console.print()
    console.print(to_toml(cfg.to_toml_dict()), nl=False)
