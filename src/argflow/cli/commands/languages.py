# topmark:header:start
#
#   project      : ArgFlow
#   file         : languages.py
#   file_relpath : src/argflow/cli/commands/languages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow `languages` command.

Lists the languages ArgFlow recognizes, with the file names they match and the
scanner that handles them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from argflow.languages import get_language_registry
from argflow.lexers import get_scanner

if TYPE_CHECKING:
    from argflow.cli.console import ConsoleLike


@click.command(
    name="languages",
    help="List all supported languages.",
)
@click.option("--long", "long_format", is_flag=True, help="Show file patterns and scanners.")
def languages_command(*, long_format: bool = False) -> None:
    """List the registered languages."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    registry = get_language_registry()
    width = max(len(name) for name in registry)
    for name in sorted(registry):
        lang = registry[name]
        marker = " (markup)" if lang.markup else ""
        console.print(f"{console.styled(name.ljust(width), bold=True)}  {lang.description}{marker}")
        if long_format:
            matches = ", ".join([*lang.extensions, *lang.filenames, *lang.patterns]) or "-"
            console.print(f"{'':{width}}  files:   {matches}")
            console.print(f"{'':{width}}  scanner: {type(get_scanner(name)).__name__}")
            console.print(f"{'':{width}}  indent:  {lang.indent_style.value}")
