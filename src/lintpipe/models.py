# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintpipe package."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

ISSUES_KEY: Final[str] = "issues"


class IssueLoadError(ValueError):
    """Raised when an issue payload cannot be decoded."""


class Issue(BaseModel):
    """One finding reported by an analyzer.

    Issues are immutable while they travel through the processor pipeline;
    stages keep, drop or replace them but never edit them in place.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str = ""
    line: int = 0
    column: int | None = None
    message: str
    from_linter: str
    rule_id: str | None = None
    severity: str | None = None
    source_lines: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("file_path", mode="before")
    @classmethod
    def _coerce_file_path(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, Path):
            return value.as_posix()
        return value

    def location(self) -> str:
        """Return a ``path:line[:column]`` string for display."""
        parts = [self.file_path or "<unknown>", str(self.line)]
        if self.column is not None:
            parts.append(str(self.column))
        return ":".join(parts)


class RunReport(BaseModel):
    """Outcome of one pipeline run.

    ``error`` is set when the run failed; ``issues`` is then empty and must not
    be presented as a clean result. ``finish_failures`` lists stages that also
    failed to finish but were not the reported error.
    """

    model_config = ConfigDict(frozen=True)

    issues: tuple[Issue, ...] = Field(default_factory=tuple)
    error: str | None = None
    finish_failures: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def failed(self) -> bool:
        """Return ``True`` when the run aborted with an error."""
        return self.error is not None


_ISSUE_LIST: Final[TypeAdapter[list[Issue]]] = TypeAdapter(list[Issue])


def parse_issues(payload: Any) -> list[Issue]:
    """Validate ``payload`` into issues.

    Args:
        payload: Either a list of issue mappings or a mapping with an
            ``"issues"`` list.

    Returns:
        list[Issue]: Validated issues in payload order.

    Raises:
        IssueLoadError: If the payload shape or any issue is invalid.
    """

    if isinstance(payload, Mapping):
        payload = payload.get(ISSUES_KEY)
        if payload is None:
            return []
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise IssueLoadError("issue payload must be a list or an object with an 'issues' list")
    try:
        return _ISSUE_LIST.validate_python(list(payload))
    except ValidationError as exc:
        raise IssueLoadError(f"invalid issue payload: {exc}") from exc


def load_issues(path: Path) -> list[Issue]:
    """Read issues from the JSON document at ``path``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise IssueLoadError(f"can't read issues from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise IssueLoadError(f"invalid JSON in {path}: {exc}") from exc
    return parse_issues(payload)


def dump_issues(issues: Sequence[Issue]) -> str:
    """Serialise ``issues`` into an indented JSON list."""

    return json.dumps([issue.model_dump(mode="json") for issue in issues], indent=2)


__all__ = [
    "Issue",
    "IssueLoadError",
    "RunReport",
    "dump_issues",
    "load_issues",
    "parse_issues",
]
