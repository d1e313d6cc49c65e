# topmark:header:start
#
#   project      : ArgFlow
#   file         : instances.py
#   file_relpath : src/argflow/languages/instances.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Language registry.

Builds the runtime registry of [`argflow.languages.base.Language`][] objects
from the built-in list. The registry is constructed lazily on first access and
cached thereafter; callers should treat the returned mapping as immutable.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from argflow.config.logging import ArgflowLogger, get_logger
from argflow.languages.builtins import LANGUAGES

if TYPE_CHECKING:
    from pathlib import Path

    from argflow.languages.base import Language

logger: ArgflowLogger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_language_registry() -> dict[str, Language]:
    """Return the mapping of language names to `Language` definitions.

    Raises:
        ValueError: If two built-in languages share a name.
    """
    registry: dict[str, Language] = {}
    for lang in LANGUAGES:
        if lang.name in registry:
            raise ValueError(f"Duplicate language name: {lang.name}")
        registry[lang.name] = lang
    logger.debug("Registered %d languages", len(registry))
    return registry


def resolve_language(path: Path) -> Language | None:
    """Return the first language matching ``path`` or None.

    Args:
        path (Path): File path (only the name is inspected).

    Returns:
        Language | None: The matching language, or None if no language matches.
    """
    for lang in get_language_registry().values():
        if lang.matches(path):
            logger.debug("Language '%s' detected for file: %s", lang.name, path)
            return lang
    logger.info("File '%s' cannot be resolved to a registered language", path)
    return None
