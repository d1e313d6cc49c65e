# topmark:header:start
#
#   project      : ArgFlow
#   file         : reflow.py
#   file_relpath : src/argflow/cli/commands/reflow.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow `dwim`, `collapse` and `expand` commands.

All three commands share their options and differ only in the action they run:

    argflow expand src/app.py --line 12 --column 8 --apply
    argflow collapse - --offset 42 --language python --stdout < snippet.py

Output modes:
    * default (dry run): report what would change; exit 2 when it would change.
    * ``--diff``: print a unified diff (still a dry run unless ``--apply``).
    * ``--stdout``: print the resulting text; exit 0.
    * ``--apply``: write the file in place; exit 0.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from argflow.api import reflow_text
from argflow.buffer import TextBuffer
from argflow.cli.config_resolver import resolve_config_from_click
from argflow.cli.errors import (
    ArgflowFileNotFoundError,
    ArgflowIOError,
    ArgflowMalformedInputError,
    ArgflowUnexpectedError,
    ArgflowUsageError,
)
from argflow.cli.exit_codes import ExitCode
from argflow.cli.options import (
    collect_placement_overrides,
    common_config_options,
    cursor_options,
    language_option,
    placement_options,
)
from argflow.config.logging import get_logger
from argflow.constants import FALLBACK_LANGUAGE
from argflow.errors import ArgflowError, UnbalancedBracketsError, UnsafeCollapseError
from argflow.languages import resolve_language
from argflow.reflow.dispatcher import ReflowAction
from argflow.utils.diff import render_patch, unified_diff

if TYPE_CHECKING:
    from argflow.api import ActionName, ReflowResult
    from argflow.cli.console import ConsoleLike

logger = get_logger(__name__)

STDIN_PATH = "-"


def read_input(path_arg: str) -> tuple[str, str]:
    """Read the input text and return ``(text, newline)``.

    Line endings are normalized to ``"\\n"``; ``newline`` is the original style.

    Raises:
        ArgflowFileNotFoundError: If the path does not exist.
        ArgflowIOError: If the file cannot be read.
        ArgflowMalformedInputError: If the file is not valid UTF-8.
    """
    try:
        if path_arg == STDIN_PATH:
            raw = click.get_text_stream("stdin").read()
        else:
            raw = Path(path_arg).read_bytes().decode("utf-8")
    except FileNotFoundError as exc:
        raise ArgflowFileNotFoundError(f"File not found: {path_arg}") from exc
    except UnicodeDecodeError as exc:
        raise ArgflowMalformedInputError(f"{path_arg} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ArgflowIOError(f"Cannot read {path_arg}: {exc}") from exc
    newline = "\r\n" if "\r\n" in raw else "\n"
    return raw.replace("\r\n", "\n"), newline


def resolve_cursor(text: str, offset: int | None, line: int | None, column: int | None) -> int:
    """Translate the cursor options into an offset.

    Raises:
        ArgflowUsageError: If the options are missing, conflicting or out of range.
    """
    if offset is not None and (line is not None or column is not None):
        raise ArgflowUsageError("Use either --offset or --line/--column, not both.")
    if offset is not None:
        if offset > len(text):
            raise ArgflowUsageError(f"--offset {offset} is past the end of the input.")
        return offset
    if line is None:
        if column is not None:
            raise ArgflowUsageError("--column requires --line.")
        raise ArgflowUsageError("A cursor position is required: --offset or --line/--column.")
    try:
        return TextBuffer(text).offset_at(line, column or 0)
    except ValueError as exc:
        raise ArgflowUsageError(str(exc)) from exc


def _describe(result: ReflowResult) -> str:
    return {
        ReflowAction.EXPAND: "expand list",
        ReflowAction.COLLAPSE: "collapse list",
        ReflowAction.FILL_PARAGRAPH: "fill paragraph",
        ReflowAction.NOOP: "no change",
    }[result.action]


def run_reflow_command(action: ActionName, params: dict[str, Any]) -> None:
    """Shared implementation of the reflow commands.

    Args:
        action (ActionName): Action to run.
        params (dict[str, Any]): Click parameters of the command.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = ctx.obj.get("verbosity_level", 0)

    path_arg: str = params["path"]
    apply: bool = params["apply"]
    to_stdout: bool = params["to_stdout"]
    show_diff: bool = params["show_diff"]
    stdin_mode = path_arg == STDIN_PATH

    if apply and stdin_mode:
        raise ArgflowUsageError("--apply cannot be used when reading from STDIN ('-').")
    if apply and to_stdout:
        raise ArgflowUsageError("--apply and --stdout are mutually exclusive.")

    text, newline = read_input(path_arg)
    cursor = resolve_cursor(text, params["offset"], params["line"], params["column"])

    language: str | None = params["language"]
    if language is None and not stdin_mode:
        detected = resolve_language(Path(path_arg))
        language = detected.name if detected else None
    language = language or FALLBACK_LANGUAGE

    anchor = Path.cwd() if stdin_mode else Path(path_arg).resolve().parent
    cfg = resolve_config_from_click(
        anchor=anchor,
        config_paths=params["config_paths"],
        no_config=params["no_config"],
        overrides=collect_placement_overrides(params),
    )

    try:
        result = reflow_text(text, cursor, action=action, language=language, config=cfg)
    except (UnbalancedBracketsError, UnsafeCollapseError) as exc:
        raise ArgflowMalformedInputError(f"{path_arg}: {exc}") from exc
    except ArgflowError as exc:  # pragma: no cover
        logger.exception("Unexpected error reflowing %s", path_arg)
        raise ArgflowUnexpectedError(f"{path_arg}: unexpected error: {exc}") from exc

    name = "<stdin>" if stdin_mode else path_arg
    logger.info("%s: %s (changed=%s)", name, result.action.value, result.changed)

    if show_diff and result.changed:
        patch = unified_diff(text, result.text, name)
        console.print(render_patch(patch) if console.enable_color else "".join(patch), nl=False)

    if to_stdout:
        console.print(result.text.replace("\n", newline), nl=False)
        ctx.exit(ExitCode.SUCCESS)

    if apply:
        if result.changed:
            try:
                Path(path_arg).write_text(result.text, encoding="utf-8", newline=newline)
            except OSError as exc:
                raise ArgflowIOError(f"Cannot write {path_arg}: {exc}") from exc
            if verbosity >= 0:
                console.print(f"{name}: {_describe(result)} (written)")
        elif verbosity > 0:
            console.print(f"{name}: unchanged")
        ctx.exit(ExitCode.SUCCESS)

    if result.changed:
        if verbosity >= 0 and not show_diff:
            console.print(f"{name}: would {_describe(result)}")
        ctx.exit(ExitCode.WOULD_CHANGE)
    if verbosity > 0:
        console.print(f"{name}: unchanged")
    ctx.exit(ExitCode.SUCCESS)


def _reflow_command(name: str, action: ActionName, help_text: str) -> click.Command:
    @click.command(name=name, help=help_text)
    @click.argument("path", type=str, metavar="PATH")
    @cursor_options
    @language_option
    @common_config_options
    @placement_options
    @click.option("--apply", "apply", is_flag=True, help="Write the result back to PATH.")
    @click.option("--diff", "show_diff", is_flag=True, help="Show a unified diff.")
    @click.option("--stdout", "to_stdout", is_flag=True, help="Print the resulting text.")
    def command(**params: Any) -> None:
        run_reflow_command(action, params)

    return command


dwim_command = _reflow_command(
    "dwim",
    "dwim",
    "Fill, expand or collapse depending on the cursor (PATH '-' reads STDIN).",
)
collapse_command = _reflow_command(
    "collapse",
    "collapse",
    "Collapse the list enclosing the cursor onto one line (PATH '-' reads STDIN).",
)
expand_command = _reflow_command(
    "expand",
    "expand",
    "Expand the list enclosing the cursor to one item per line (PATH '-' reads STDIN).",
)
