# topmark:header:start
#
#   project      : ArgFlow
#   file         : constants.py
#   file_relpath : src/argflow/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ArgFlow Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    ARGFLOW_VERSION: str = get_version("argflow")
except PackageNotFoundError:  # pragma: no cover - source checkout without install
    ARGFLOW_VERSION = "0.0.0"

# Name of the bundled default config inside the package `argflow.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "argflow.config"
DEFAULT_TOML_CONFIG_NAME: str = "argflow-default.toml"

# Project-local and user config file names
LOCAL_CONFIG_NAME: str = "argflow.toml"
PYPROJECT_TOOL_SECTION: str = "argflow"

# Language used when a path cannot be resolved to a registered language
FALLBACK_LANGUAGE: str = "plain"

VALUE_NOT_SET: str = "<not set>"
