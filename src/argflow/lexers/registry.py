# topmark:header:start
#
#   project      : ArgFlow
#   file         : registry.py
#   file_relpath : src/argflow/lexers/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of lexical scanners for ArgFlow languages.

This module provides a decorator to register `LexicalScanner` implementations
for specific languages, using the centralized language registry.

Each scanner instance is associated with a `Language` by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from argflow.config.logging import get_logger
from argflow.languages.instances import get_language_registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from argflow.lexers.base import LexicalScanner

logger = get_logger(__name__)


_registry: dict[str, LexicalScanner] = {}


def register_language(
    name: str,
) -> Callable[[type[LexicalScanner]], type[LexicalScanner]]:
    """Class decorator to register a LexicalScanner for a specific language.

    Args:
        name (str): Name of the language as defined in the language registry.

    Returns:
        Callable[[type[LexicalScanner]], type[LexicalScanner]]: A decorator that
            registers the class as the scanner for ``name``.

    Raises:
        ValueError: If the language name is unknown.
    """
    language_registry = get_language_registry()
    if name not in language_registry:
        raise ValueError(f"Unknown language: {name}")

    language = language_registry[name]

    def decorator(cls: type[LexicalScanner]) -> type[LexicalScanner]:
        """Instantiate ``cls`` and bind the instance to the language.

        Each language gets its own instance so ``scanner.language`` is correct even
        when several languages share a scanner class.

        Raises:
            ValueError: If the language already has a registered scanner.
        """
        logger.debug("Registering scanner %s for language: %s", cls.__name__, language.name)
        if language.name in _registry:
            raise ValueError(f"Language '{language.name}' already has a registered scanner.")
        instance = cls()
        instance.language = language
        _registry[language.name] = instance
        return cls

    return decorator


def get_scanner_registry() -> dict[str, LexicalScanner]:
    """Return the registry of language names to LexicalScanner instances."""
    return _registry
