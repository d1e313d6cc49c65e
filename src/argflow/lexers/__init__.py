# topmark:header:start
#
#   project      : ArgFlow
#   file         : __init__.py
#   file_relpath : src/argflow/lexers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Auto-import all scanner modules in the current package."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from argflow.config.logging import get_logger
from argflow.constants import FALLBACK_LANGUAGE
from argflow.languages.instances import resolve_language
from argflow.lexers.base import LexicalScanner, SyntaxState
from argflow.lexers.registry import get_scanner_registry

logger = get_logger(__name__)

_SKIP_MODULES: frozenset[str] = frozenset({"base", "registry"})


def register_all_scanners() -> None:
    """Import all scanner modules in the current package (idempotent)."""
    package_dir = Path(__file__).parent
    for module_info in pkgutil.iter_modules([str(package_dir)]):
        if not module_info.ispkg and module_info.name not in _SKIP_MODULES:
            # Importing the module runs its @register_language decorators once
            importlib.import_module(f"{__name__}.{module_info.name}")


def get_scanner(name: str) -> LexicalScanner:
    """Return the scanner registered for language ``name``.

    Raises:
        KeyError: If no scanner is registered for ``name``.
    """
    register_all_scanners()
    registry = get_scanner_registry()
    if name not in registry:
        raise KeyError(f"No scanner registered for language '{name}'")
    return registry[name]


def get_scanner_for_path(path: Path) -> LexicalScanner:
    """Return the scanner for ``path``, falling back to the plain-text scanner."""
    language = resolve_language(path)
    if language is None:
        logger.info("Using '%s' scanner for %s", FALLBACK_LANGUAGE, path)
        return get_scanner(FALLBACK_LANGUAGE)
    return get_scanner(language.name)


__all__ = [
    "LexicalScanner",
    "SyntaxState",
    "get_scanner",
    "get_scanner_for_path",
    "register_all_scanners",
]
