# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Errors and helpers shared by issue processors."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..models import Issue

IssuePredicate = Callable[[Issue], bool]


class ProcessingError(RuntimeError):
    """Raised by a processor when the issue set cannot be processed."""


class MissingFilePathError(ProcessingError):
    """Raised when an issue does not reference any file."""

    def __init__(self, issue: Issue) -> None:
        super().__init__("no file path for issue")
        self.issue = issue


class SourceParseError(ProcessingError):
    """Raised when a file referenced by an issue cannot be parsed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"can't parse file {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


def filter_issues(issues: Sequence[Issue], predicate: IssuePredicate) -> list[Issue]:
    """Return the issues accepted by ``predicate`` in their original order.

    An exception raised by ``predicate`` aborts the whole filter.
    """

    kept: list[Issue] = []
    for issue in issues:
        if predicate(issue):
            kept.append(issue)
    return kept


__all__ = [
    "IssuePredicate",
    "MissingFilePathError",
    "ProcessingError",
    "SourceParseError",
    "filter_issues",
]
