# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Processor dropping issues reported against generated files."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from ..analysis.generated import is_generated_file
from ..cache.source_cache import SourceCache
from ..logging import debug_logger
from ..models import Issue
from .base import MissingFilePathError, SourceParseError, filter_issues

AUTOGENERATED_EXCLUDE: Final[str] = "autogenerated_exclude"


@dataclass(frozen=True, slots=True)
class FileSummary:
    """Facts about one file computed once per processor instance."""

    is_generated: bool


class AutogeneratedExclude:
    """Drop issues whose file carries a generated-code header.

    The generated status of each file is resolved once and memoised; the
    memo is owned by the instance and is not synchronised, so an instance
    must not be shared between threads.

    Args:
        source_cache: Cache shared with the other consumers of the run.
        logger: Debug logger; defaults to the ``autogen_exclude`` tagged logger.
    """

    def __init__(self, source_cache: SourceCache, *, logger: logging.Logger | None = None) -> None:
        self._source_cache = source_cache
        self._logger = logger or debug_logger(AUTOGENERATED_EXCLUDE)
        self._summaries: dict[str, FileSummary] = {}

    @property
    def name(self) -> str:
        return AUTOGENERATED_EXCLUDE

    def process(self, issues: Sequence[Issue]) -> list[Issue]:
        return filter_issues(issues, self._should_pass_issue)

    def _should_pass_issue(self, issue: Issue) -> bool:
        # don't report issues for autogenerated files
        return not self.file_summary(issue).is_generated

    def file_summary(self, issue: Issue) -> FileSummary:
        """Return the memoised summary for the file ``issue`` refers to.

        Raises:
            MissingFilePathError: If ``issue`` has no file path.
            SourceParseError: If the file cannot be read or parsed.
        """

        if not issue.file_path:
            raise MissingFilePathError(issue)

        key = self._source_cache.normalize(issue.file_path)
        summary = self._summaries.get(key)
        if summary is not None:
            return summary

        parsed = self._source_cache.get_or_parse(key)
        if parsed.error is not None:
            raise SourceParseError(issue.file_path, parsed.error)

        summary = FileSummary(is_generated=is_generated_file(parsed, logger=self._logger))
        self._summaries[key] = summary
        self._logger.debug("file %r is generated: %s", key, summary.is_generated)
        return summary

    def finish(self) -> None:
        return None


__all__ = ["AUTOGENERATED_EXCLUDE", "AutogeneratedExclude", "FileSummary"]
