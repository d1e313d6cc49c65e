# topmark:header:start
#
#   project      : ArgFlow
#   file         : model.py
#   file_relpath : src/argflow/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for ArgFlow.

`MutableConfig` is the builder used while discovering and merging configuration
layers; `Config` is the immutable snapshot used at runtime.

Merge order (lowest → highest precedence):
    1) Packaged defaults (``argflow-default.toml``)
    2) User config (``$XDG_CONFIG_HOME/argflow/argflow.toml``)
    3) Project configs discovered upward, **root-most → nearest**; within a
       directory ``pyproject.toml`` (``[tool.argflow]``) is merged before
       ``argflow.toml``
    4) Extra config files passed explicitly (``--config``), in the given order
    5) CLI / API overrides (`MutableConfig.apply_cli_args`)
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tomlkit.exceptions import ParseError as TomlkitParseError

from argflow.config.io import (
    TomlTable,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    parse_toml_text,
)
from argflow.config.keys import Toml
from argflow.config.logging import ArgflowLogger, get_logger
from argflow.config.policy import POLICY_KEYS, MutablePlacementPolicy, PlacementPolicy
from argflow.constants import LOCAL_CONFIG_NAME, PYPROJECT_TOOL_SECTION
from argflow.errors import ConfigFileError

# Generic mapping accepted by config loaders (works for CLI options and API dicts).
ArgsLike = Mapping[str, Any]

logger: ArgflowLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"
DEFAULTS_STR = "<defaults>"


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        policy (PlacementPolicy): Global, resolved placement policy.
        policy_by_language (Mapping[str, PlacementPolicy]): Per-language resolved
            overrides, keyed by language name.
        config_files (tuple[str, ...]): Configuration sources, in merge order.

    All entries in ``policy_by_language`` are resolved against the global
    ``policy`` during `MutableConfig.freeze`; at runtime the engine selects the
    right policy through `argflow.config.policy.effective_policy`.
    """

    policy: PlacementPolicy
    policy_by_language: Mapping[str, PlacementPolicy]
    config_files: tuple[str, ...]

    def to_toml_dict(self) -> TomlTable:
        """Convert this configuration into a TOML-serializable dict.

        Per-language tables list only the keys that differ from the global policy.
        """
        glob: dict[str, Any] = self.policy.to_toml_table()
        languages: TomlTable = {}
        for name in sorted(self.policy_by_language):
            table: dict[str, Any] = self.policy_by_language[name].to_toml_table()
            diff: dict[str, Any] = {k: v for k, v in table.items() if glob.get(k) != v}
            if diff:
                languages[name] = diff
        out: TomlTable = {Toml.SECTION_REFLOW: glob}
        if languages:
            out[Toml.SECTION_LANGUAGES] = languages
        return out

    def thaw(self) -> MutableConfig:
        """Return a mutable builder initialized from this snapshot."""
        return MutableConfig(
            policy=self.policy.thaw(),
            policy_by_language={k: v.thaw() for k, v in self.policy_by_language.items()},
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    Attributes:
        policy (MutablePlacementPolicy): Global tri-state policy.
        policy_by_language (dict[str, MutablePlacementPolicy]): Per-language overrides.
        config_files (list[str]): Configuration sources, in merge order.
    """

    policy: MutablePlacementPolicy = field(default_factory=MutablePlacementPolicy)
    policy_by_language: dict[str, MutablePlacementPolicy] = field(default_factory=dict)
    config_files: list[str] = field(default_factory=list)

    def freeze(self) -> Config:
        """Resolve all tri-state fields and return an immutable `Config`."""
        glob: PlacementPolicy = self.policy.freeze()
        by_language: dict[str, PlacementPolicy] = {
            name: p.resolve(glob) for name, p in self.policy_by_language.items()
        }
        return Config(
            policy=glob,
            policy_by_language=by_language,
            config_files=tuple(self.config_files),
        )

    # ------------------------------- Loading -------------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Build a draft from the packaged default configuration."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = [DEFAULTS_STR]
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableConfig:
        """Create a draft from a parsed ``argflow.toml``-shaped dict.

        Args:
            data (TomlTable): Table holding ``[reflow]`` and ``[languages.*]``.

        Returns:
            MutableConfig: The resulting draft.
        """
        reflow_tbl: TomlTable = get_table_value(data, Toml.SECTION_REFLOW)
        languages_tbl: TomlTable = get_table_value(data, Toml.SECTION_LANGUAGES)

        by_language: dict[str, MutablePlacementPolicy] = {}
        for name in languages_tbl:
            by_language[name] = MutablePlacementPolicy.from_toml_table(
                get_table_value(languages_tbl, name)
            )

        unknown: set[str] = set(data) - {
            Toml.SECTION_REFLOW,
            Toml.SECTION_LANGUAGES,
            Toml.KEY_ROOT,
        }
        for key in sorted(unknown):
            logger.warning("Ignoring unknown configuration key '%s'", key)

        return cls(
            policy=MutablePlacementPolicy.from_toml_table(reflow_tbl),
            policy_by_language=by_language,
        )

    @staticmethod
    def _extract_section(path: Path, data: TomlTable) -> TomlTable | None:
        """Return the ArgFlow table of ``data``; ``None`` if a pyproject file has none."""
        if path.name != "pyproject.toml":
            return data
        tool: TomlTable = get_table_value(data, "tool")
        if PYPROJECT_TOOL_SECTION not in tool:
            return None
        return get_table_value(tool, PYPROJECT_TOOL_SECTION)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``argflow.toml`` and ``pyproject.toml`` (``[tool.argflow]``).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or None if a pyproject file has no
                ``[tool.argflow]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        section: TomlTable | None = cls._extract_section(path, load_toml_dict(path))
        if section is None:
            logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
            return None
        draft: MutableConfig = cls.from_toml_dict(section)
        draft.config_files = [str(path)]
        return draft

    @classmethod
    def from_explicit_file(cls, path: Path) -> MutableConfig:
        """Load a configuration file the user asked for by name.

        Unlike `from_toml_file`, failures are not tolerated.

        Raises:
            ConfigFileError: If the file cannot be read or parsed, or a
                ``pyproject.toml`` has no ``[tool.argflow]`` section.
        """
        try:
            data: TomlTable = parse_toml_text(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigFileError(f"Cannot read config file {path}: {e}", path=str(path)) from e
        except TomlkitParseError as e:
            raise ConfigFileError(f"Invalid TOML in {path}: {e}", path=str(path)) from e
        section: TomlTable | None = cls._extract_section(path, data)
        if section is None:
            raise ConfigFileError(
                f"[tool.{PYPROJECT_TOOL_SECTION}] section missing in {path}", path=str(path)
            )
        draft: MutableConfig = cls.from_toml_dict(section)
        draft.config_files = [str(path)]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most → nearest**; within a directory
        ``pyproject.toml`` comes before ``argflow.toml`` so the latter wins a
        later merge. A file setting ``root = true`` stops the upward walk after
        its directory. A ``pyproject.toml`` without ``[tool.argflow]`` is skipped.

        Args:
            start (Path): Directory (or file) where discovery starts.

        Returns:
            list[Path]: Discovered config files in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in ("pyproject.toml", LOCAL_CONFIG_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                section: TomlTable | None = cls._extract_section(p, load_toml_dict(p))
                if section is None:
                    continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if section.get(Toml.KEY_ROOT) is True:
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return ``$XDG_CONFIG_HOME/argflow/argflow.toml`` if it exists."""
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        path: Path = base / "argflow" / LOCAL_CONFIG_NAME
        return path if path.is_file() else None

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            anchor (Path | None): Start of upward discovery (CWD if None). If it
                is a file, its parent directory is used.
            extra_config_files (Iterable[Path] | None): Explicit files merged
                **after** discovery, in the given order.
            no_config (bool): If True, skip user and project discovery.

        Returns:
            MutableConfig: A draft ready to be frozen or further edited.

        Raises:
            ConfigFileError: If an explicit config file cannot be used.
        """
        draft: MutableConfig = cls.from_defaults()

        start: Path = anchor if anchor is not None else Path.cwd()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            for cfg_path in cls.discover_local_config_files(start):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            draft = draft.merge_with(cls.from_explicit_file(Path(extra)))

        logger.debug("Merged configuration sources: %s", draft.config_files)
        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values from ``other`` override this draft.

        Policies are merged field by field (tri-state), per-language tables key by key.
        """
        merged_by_language: dict[str, MutablePlacementPolicy] = {}
        for key in set(self.policy_by_language) | set(other.policy_by_language):
            base: MutablePlacementPolicy | None = self.policy_by_language.get(key)
            override: MutablePlacementPolicy | None = other.policy_by_language.get(key)
            if base is None:
                if override is not None:
                    merged_by_language[key] = override
            elif override is None:
                merged_by_language[key] = base
            else:
                merged_by_language[key] = base.merge_with(override)

        return MutableConfig(
            policy=self.policy.merge_with(other.policy),
            policy_by_language=merged_by_language,
            config_files=self.config_files + other.config_files,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from an arguments mapping (CLI or API).

        Keys are `PlacementPolicy` attribute names; ``None`` values are ignored.
        Overrides take precedence over the global **and** the per-language
        policies.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This draft, updated in place.
        """
        overrides: dict[str, Any] = {
            attr: args[attr] for attr in POLICY_KEYS if args.get(attr) is not None
        }
        if not overrides:
            return self
        logger.debug("Applying CLI overrides: %s", overrides)
        cli_policy = MutablePlacementPolicy(**overrides)
        self.policy = self.policy.merge_with(cli_policy)
        self.policy_by_language = {
            name: p.merge_with(cli_policy) for name, p in self.policy_by_language.items()
        }
        self.config_files.append(CLI_OVERRIDE_STR)
        return self
