# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Logging helpers: tagged debug tracing plus user-facing console messages."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable
from typing import Final

from rich.console import Console
from rich.text import Text

DEBUG_ENV: Final[str] = "LINTPIPE_DEBUG"
LOGGER_ROOT: Final[str] = "lintpipe"
ALL_TAGS: Final[str] = "all"

_CONSOLES: dict[tuple[bool, bool], Console] = {}
_ENABLED_TAGS: set[str] = set()


def _env_tags() -> set[str]:
    raw = os.environ.get(DEBUG_ENV, "")
    return {tag.strip() for tag in raw.split(",") if tag.strip()}


def _tag_enabled(tag: str) -> bool:
    tags = _ENABLED_TAGS | _env_tags()
    return ALL_TAGS in tags or tag in tags


def _ensure_verbose_handler(logger: logging.Logger) -> None:
    """Stream ``logger`` debug records to stderr once per logger."""

    if getattr(logger, "_lintpipe_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_lintpipe_verbose_configured", True)


def debug_logger(tag: str) -> logging.Logger:
    """Return the tagged debug logger ``lintpipe.<tag>``.

    Debug output is emitted only when ``tag`` is enabled through
    :data:`DEBUG_ENV` or :func:`enable_debug`; otherwise the logger keeps the
    standard logging hierarchy defaults.

    Args:
        tag: Short component identifier such as ``"autogen_exclude"``.

    Returns:
        logging.Logger: Logger scoped to the component tag.
    """

    logger = logging.getLogger(f"{LOGGER_ROOT}.{tag}")
    if _tag_enabled(tag):
        _ensure_verbose_handler(logger)
    return logger


def enable_debug(tags: Iterable[str]) -> None:
    """Enable debug tracing for ``tags`` for the rest of the process."""

    for tag in tags:
        cleaned = tag.strip()
        if not cleaned:
            continue
        _ENABLED_TAGS.add(cleaned)
        if cleaned == ALL_TAGS:
            continue
        _ensure_verbose_handler(logging.getLogger(f"{LOGGER_ROOT}.{cleaned}"))


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a cached Rich console configured for ``color`` and ``emoji``."""

    key = (color, emoji)
    console = _CONSOLES.get(key)
    if console is None:
        console = Console(no_color=not color, emoji=emoji, highlight=False, soft_wrap=True)
        _CONSOLES[key] = console
    return console


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str | None, use_emoji: bool, use_color: bool | None = None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "DEBUG_ENV",
    "debug_logger",
    "detect_tty",
    "emoji",
    "enable_debug",
    "fail",
    "get_console",
    "info",
    "ok",
    "warn",
]
