# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Issue processors and the pipeline that chains them."""

from __future__ import annotations

from .autogenerated_exclude import AUTOGENERATED_EXCLUDE, AutogeneratedExclude, FileSummary
from .base import (
    IssuePredicate,
    MissingFilePathError,
    ProcessingError,
    SourceParseError,
    filter_issues,
)
from .pipeline import PipelineError, ProcessorPipeline, build_pipeline

__all__ = (
    "AUTOGENERATED_EXCLUDE",
    "AutogeneratedExclude",
    "FileSummary",
    "IssuePredicate",
    "MissingFilePathError",
    "PipelineError",
    "ProcessingError",
    "ProcessorPipeline",
    "SourceParseError",
    "build_pipeline",
    "filter_issues",
)
