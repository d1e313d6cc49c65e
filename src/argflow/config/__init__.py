# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ArgFlow.

Layered TOML configuration (packaged defaults, user file, project files,
explicit files and CLI overrides) resolved into an immutable `Config`.
"""

from __future__ import annotations

from argflow.config.model import Config, MutableConfig
from argflow.config.policy import MutablePlacementPolicy, PlacementPolicy, effective_policy

__all__ = [
    "Config",
    "MutableConfig",
    "MutablePlacementPolicy",
    "PlacementPolicy",
    "effective_policy",
]
