# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``classify`` command: report whether Go files look generated."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...analysis.generated import is_generated_file
from ...cache.source_cache import SourceCache
from ...logging import enable_debug, fail

EXIT_FAILED = 1


def classify_command(
    files: Annotated[list[Path], typer.Argument(help="Go files to classify.")],
    root: Annotated[
        Path,
        typer.Option("--root", file_okay=False, help="Directory relative paths are resolved against."),
    ] = Path("."),
    debug: Annotated[
        list[str] | None,
        typer.Option("--debug", help="Enable debug tracing for a component tag (repeatable)."),
    ] = None,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
) -> None:
    """Print ``generated`` or ``not generated`` for every file."""

    enable_debug(debug or [])
    cache = SourceCache(root)
    failed = False
    for file_path in files:
        parsed = cache.get_or_parse(file_path)
        if parsed.error is not None:
            fail(f"{parsed.name}: can't parse file: {parsed.error}", use_emoji=not no_emoji)
            failed = True
            continue
        verdict = "generated" if is_generated_file(parsed) else "not generated"
        typer.echo(f"{parsed.name}: {verdict}")
    if failed:
        raise typer.Exit(code=EXIT_FAILED)


def register(app: typer.Typer) -> None:
    """Register the ``classify`` command with ``app``."""

    app.command(name="classify")(classify_command)


__all__ = ["classify_command", "register"]
