# topmark:header:start
#
#   project      : ArgFlow
#   file         : config_resolver.py
#   file_relpath : src/argflow/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Utilities for resolving the ArgFlow configuration from Click parameters.

Resolution order (lowest → highest precedence):
  1. **Packaged defaults** (bundled `argflow-default.toml`).
  2. **User config** (``$XDG_CONFIG_HOME/argflow/argflow.toml``).
  3. **Discovered project configs** (root → anchor), unless ``--no-config`` is set;
     ``pyproject.toml`` (``[tool.argflow]``) before ``argflow.toml`` in each
     directory, stopping at a file that sets ``root = true``.
  4. **Explicit config files** passed via ``--config``, merged in order.
  5. **CLI overrides** (placement flags), applied last.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from argflow.cli.errors import ArgflowConfigError
from argflow.config import MutableConfig
from argflow.config.logging import get_logger
from argflow.errors import ConfigFileError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from argflow.config import Config
    from argflow.config.logging import ArgflowLogger

logger: ArgflowLogger = get_logger(__name__)


def _check_separators(cfg: Config) -> None:
    """Reject pattern separators that are not valid regular expressions."""
    policies = [("[reflow]", cfg.policy)] + [
        (f"[languages.{name}]", p) for name, p in cfg.policy_by_language.items()
    ]
    for where, policy in policies:
        if policy.separator_is_pattern:
            try:
                re.compile(policy.argument_separator)
            except re.error as exc:
                raise ArgflowConfigError(
                    f"Invalid separator pattern {policy.argument_separator!r} in {where}: {exc}"
                ) from exc


def resolve_config_from_click(
    *,
    anchor: Path | None,
    config_paths: Iterable[str],
    no_config: bool,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Build a frozen `Config` from Click parameters.

    Args:
        anchor (Path | None): Directory where upward discovery starts (CWD if None).
        config_paths (Iterable[str]): Values of ``--config``.
        no_config (bool): Value of ``--no-config``.
        overrides (Mapping[str, Any] | None): Placement overrides from CLI flags.

    Returns:
        Config: The resolved configuration.

    Raises:
        ArgflowConfigError: If an explicit config file is unusable or a separator
            pattern does not compile.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            anchor=anchor,
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigFileError as exc:
        raise ArgflowConfigError(str(exc)) from exc

    if overrides:
        draft.apply_cli_args(overrides)
    cfg = draft.freeze()
    _check_separators(cfg)
    logger.debug("Resolved config from: %s", ", ".join(cfg.config_files))
    return cfg
