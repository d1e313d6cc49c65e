# topmark:header:start
#
#   project      : ArgFlow
#   file         : diff.py
#   file_relpath : src/argflow/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering.

Used by the CLI ``--diff`` output and by debug logging of reflow results.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from argflow.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


def unified_diff(before: str, after: str, name: str) -> list[str]:
    """Return the unified diff lines (with line endings) between two texts.

    Args:
        before (str): Original text.
        after (str): Reflowed text.
        name (str): Name shown in the diff headers.

    Returns:
        list[str]: Diff lines; empty when the texts are equal.
    """
    lines: list[str] = list(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{name} (current)",
            tofile=f"{name} (reflowed)",
            n=3,
        )
    )
    # A last line without a newline would glue onto the next diff line
    return [line if line.endswith("\n") else line + "\n" for line in lines]


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): Diff as a sequence of lines or a single string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The colorized diff.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else [
        line.rstrip("\n") for line in patch
    ]

    def process_line(line: str) -> str:
        if not line:
            return line
        match line[0]:
            case "-":
                return chalk.bold.red(line)
            case "+":
                return chalk.bold.green(line)
            case "@":
                return chalk.cyan(line)
            case _:
                return line

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
