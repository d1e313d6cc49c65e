# topmark:header:start
#
#   project      : ArgFlow
#   file         : api.py
#   file_relpath : src/argflow/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public ArgFlow API (stable surface).

Text and file level wrappers around the reflow engine, for integrations that
do not want to drive a `TextBuffer` themselves.

Configuration contract:
    Functions accept either a plain **mapping** mirroring the TOML shape, or a
    frozen `argflow.config.Config`:

    ```python
    from argflow import api

    result = api.reflow_text(
        "foo(a, b, c)",
        5,
        config={"reflow": {"trailing-separator": True}},
    )
    ```

    A mapping is merged over the packaged defaults. With ``config=None``,
    `reflow_text` uses the defaults and `reflow_file` discovers configuration
    files upward from the file, exactly like the CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from argflow.buffer import TextBuffer
from argflow.config.logging import get_logger
from argflow.config.model import Config, MutableConfig
from argflow.config.policy import effective_policy
from argflow.constants import FALLBACK_LANGUAGE
from argflow.lexers import get_scanner, get_scanner_for_path
from argflow.reflow.dispatcher import ReflowAction, dwim, to_multi_line, to_single_line
from argflow.reflow.fill import TextwrapFiller
from argflow.reflow.indent import BracketIndenter

if TYPE_CHECKING:
    from pathlib import Path

    from argflow.config.logging import ArgflowLogger
    from argflow.config.policy import PlacementPolicy
    from argflow.lexers.base import LexicalScanner
    from argflow.reflow.fill import ParagraphFiller
    from argflow.reflow.indent import Indenter

logger: ArgflowLogger = get_logger(__name__)

ActionName = Literal["dwim", "collapse", "expand"]


@dataclass(frozen=True)
class ReflowResult:
    """Outcome of a reflow.

    Attributes:
        text (str): Resulting text.
        changed (bool): True if ``text`` differs from the input.
        action (ReflowAction): Action that was applied.
        point (int): Cursor offset in ``text`` after the reflow.
    """

    text: str
    changed: bool
    action: ReflowAction
    point: int


def resolve_config(config: Mapping[str, Any] | Config | None) -> Config:
    """Normalize the ``config`` argument of the public functions to a frozen `Config`."""
    if isinstance(config, Config):
        return config
    draft: MutableConfig = MutableConfig.from_defaults()
    if config:
        draft = draft.merge_with(MutableConfig.from_toml_dict(dict(config)))
    return draft.freeze()


def run_action(
    buffer: TextBuffer,
    scanner: LexicalScanner,
    policy: PlacementPolicy,
    action: ActionName,
    *,
    filler: ParagraphFiller | None = None,
    indenter: Indenter | None = None,
) -> ReflowAction:
    """Run ``action`` on ``buffer`` at its point and return the action applied."""
    if indenter is None:
        indenter = (
            BracketIndenter(policy.indent_width, scanner.language.indent_style)
            if scanner.language
            else BracketIndenter(policy.indent_width)
        )
    if action == "collapse":
        changed = to_single_line(buffer, scanner, policy)
        return ReflowAction.COLLAPSE if changed else ReflowAction.NOOP
    if action == "expand":
        changed = to_multi_line(buffer, scanner, policy, indenter=indenter)
        return ReflowAction.EXPAND if changed else ReflowAction.NOOP
    if action == "dwim":
        if filler is None:
            filler = TextwrapFiller(policy.fill_column)
        return dwim(buffer, scanner, policy, filler=filler, indenter=indenter)
    raise ValueError(f"Unknown reflow action: {action!r}")


def _reflow(
    text: str,
    offset: int,
    scanner: LexicalScanner,
    cfg: Config,
    action: ActionName,
    filler: ParagraphFiller | None,
    indenter: Indenter | None,
) -> ReflowResult:
    if not 0 <= offset <= len(text):
        raise ValueError(f"Offset {offset} outside text of length {len(text)}")
    language = scanner.language.name if scanner.language else None
    policy = effective_policy(cfg, language)
    buffer = TextBuffer(text, offset)
    applied = run_action(buffer, scanner, policy, action, filler=filler, indenter=indenter)
    return ReflowResult(
        text=buffer.text,
        changed=buffer.text != text,
        action=applied,
        point=buffer.point,
    )


def reflow_text(
    text: str,
    offset: int,
    *,
    action: ActionName = "dwim",
    language: str | None = None,
    config: Mapping[str, Any] | Config | None = None,
    filler: ParagraphFiller | None = None,
    indenter: Indenter | None = None,
) -> ReflowResult:
    """Reflow the list enclosing ``offset`` in ``text``.

    Args:
        text (str): Source text.
        offset (int): Cursor offset.
        action (ActionName): ``"dwim"``, ``"collapse"`` or ``"expand"``.
        language (str | None): Language name (``"plain"`` if None).
        config (Mapping[str, Any] | Config | None): Configuration (see module docs).
        filler (ParagraphFiller | None): Paragraph filler for ``dwim``
            (a `TextwrapFiller` at the configured fill column if None).
        indenter (Indenter | None): Indentation engine
            (a `BracketIndenter` for the language if None).

    Returns:
        ReflowResult: The reflowed text and what was done.

    Raises:
        KeyError: If ``language`` is not registered.
        ValueError: If ``offset`` is outside ``text``.
        UnbalancedBracketsError: If the enclosing bracket is not balanced.
        UnsafeCollapseError: If collapsing would comment out list items.
    """
    scanner = get_scanner(language or FALLBACK_LANGUAGE)
    return _reflow(text, offset, scanner, resolve_config(config), action, filler, indenter)


def _detect_newline(raw: str) -> str:
    return "\r\n" if "\r\n" in raw else "\n"


def reflow_file(
    path: Path,
    offset: int,
    *,
    action: ActionName = "dwim",
    language: str | None = None,
    config: Mapping[str, Any] | Config | None = None,
    apply: bool = False,
) -> ReflowResult:
    """Reflow the list enclosing ``offset`` in the file at ``path``.

    Line endings are normalized to ``"\\n"`` while reflowing (``offset`` counts
    them as one character) and restored on write.

    Args:
        path (Path): File to reflow.
        offset (int): Cursor offset in the newline-normalized text.
        action (ActionName): ``"dwim"``, ``"collapse"`` or ``"expand"``.
        language (str | None): Language name; resolved from ``path`` if None.
        config (Mapping[str, Any] | Config | None): Configuration; discovered
            upward from ``path`` if None.
        apply (bool): Write the result back to ``path`` when it changed.

    Returns:
        ReflowResult: The reflowed text and what was done.

    Raises:
        OSError: If the file cannot be read or written.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    raw = path.read_bytes().decode("utf-8")
    newline = _detect_newline(raw)
    text = raw.replace("\r\n", "\n")

    scanner = get_scanner(language) if language else get_scanner_for_path(path)
    if config is None:
        cfg = MutableConfig.load_merged(anchor=path.parent).freeze()
    else:
        cfg = resolve_config(config)

    result = _reflow(text, offset, scanner, cfg, action, None, None)
    if apply and result.changed:
        logger.info("Writing reflowed %s", path)
        path.write_text(result.text, encoding="utf-8", newline=newline)
    return result
