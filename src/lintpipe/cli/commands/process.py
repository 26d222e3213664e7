# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``process`` command: run the issue pipeline over a JSON issue dump."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Annotated, Final

import typer

from ...cache.source_cache import SourceCache
from ...config import Config, ConfigError, load_config
from ...logging import enable_debug, fail, info, ok, warn
from ...models import Issue, IssueLoadError, dump_issues, load_issues
from ...processors.pipeline import build_pipeline

EXIT_FAILED: Final[int] = 1
EXIT_USAGE: Final[int] = 2


class OutputFormat(str, Enum):
    """Rendering formats for surviving issues."""

    TEXT = "text"
    JSON = "json"


def _apply_overrides(
    config: Config,
    *,
    exclude_generated: bool | None,
    output_format: OutputFormat | None,
    debug: Sequence[str],
    no_color: bool,
    no_emoji: bool,
) -> Config:
    processing = config.processing
    if exclude_generated is not None:
        processing = processing.model_copy(update={"exclude_generated": exclude_generated})
    output_updates: dict[str, object] = {"debug": [*config.output.debug, *debug]}
    if output_format is not None:
        output_updates["format"] = output_format.value
    if no_color:
        output_updates["color"] = False
    if no_emoji:
        output_updates["emoji"] = False
    output = config.output.model_copy(update=output_updates)
    return config.model_copy(update={"processing": processing, "output": output})


def _render_text(issues: Sequence[Issue], *, use_emoji: bool, use_color: bool) -> None:
    for issue in issues:
        typer.echo(f"{issue.location()}: {issue.message} ({issue.from_linter})")
    if issues:
        info(f"{len(issues)} issue(s) reported", use_emoji=use_emoji, use_color=use_color)
    else:
        ok("No issues found", use_emoji=use_emoji, use_color=use_color)


def process_command(
    issues_path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="JSON file holding the issues to process."),
    ],
    root: Annotated[
        Path,
        typer.Option("--root", file_okay=False, help="Project root used to resolve issue paths and configuration."),
    ] = Path("."),
    exclude_generated: Annotated[
        bool | None,
        typer.Option(
            "--exclude-generated/--keep-generated",
            help="Drop issues reported against generated files (default from configuration).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", case_sensitive=False, help="Render surviving issues as text or JSON."),
    ] = None,
    debug: Annotated[
        list[str] | None,
        typer.Option("--debug", help="Enable debug tracing for a component tag (repeatable, 'all' for every tag)."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
) -> None:
    """Filter the issues in ISSUES_PATH and print the ones to report."""

    try:
        config = load_config(root)
    except ConfigError as exc:
        fail(str(exc), use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=EXIT_USAGE) from exc

    config = _apply_overrides(
        config,
        exclude_generated=exclude_generated,
        output_format=output_format,
        debug=debug or [],
        no_color=no_color,
        no_emoji=no_emoji,
    )
    output = config.output
    enable_debug(output.debug)

    try:
        issues = load_issues(issues_path)
    except IssueLoadError as exc:
        fail(str(exc), use_emoji=output.emoji, use_color=output.color)
        raise typer.Exit(code=EXIT_USAGE) from exc

    pipeline = build_pipeline(config.processing, source_cache=SourceCache(root))
    report = pipeline.execute(issues)
    if report.failed:
        for failure in report.finish_failures:
            warn(f"Stage also failed to finish: {failure}", use_emoji=output.emoji, use_color=output.color)
        fail(f"Issue processing failed: {report.error}", use_emoji=output.emoji, use_color=output.color)
        raise typer.Exit(code=EXIT_FAILED)

    if output.format == OutputFormat.JSON.value:
        typer.echo(dump_issues(report.issues))
        return
    _render_text(report.issues, use_emoji=output.emoji, use_color=output.color)


def register(app: typer.Typer) -> None:
    """Register the ``process`` command with ``app``."""

    app.command(name="process")(process_command)


__all__ = ["OutputFormat", "process_command", "register"]
