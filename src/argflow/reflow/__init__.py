# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/reflow/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reflow engine: collapse, expand and the context-sensitive dispatcher."""

from __future__ import annotations

from argflow.reflow.dispatcher import (
    ReflowAction,
    decide_action,
    dwim,
    to_multi_line,
    to_single_line,
)
from argflow.reflow.engine import collapse_to_single_line, expand_to_multi_line
from argflow.reflow.fill import ParagraphFiller, TextwrapFiller
from argflow.reflow.indent import BracketIndenter, Indenter
from argflow.reflow.separators import Separator, iter_split_points

__all__ = [
    "BracketIndenter",
    "Indenter",
    "ParagraphFiller",
    "ReflowAction",
    "Separator",
    "TextwrapFiller",
    "collapse_to_single_line",
    "decide_action",
    "dwim",
    "expand_to_multi_line",
    "iter_split_points",
    "to_multi_line",
    "to_single_line",
]
