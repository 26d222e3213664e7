# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Caches shared by processors during a single run."""

from __future__ import annotations

from .source_cache import ParsedFile, SourceCache, SourceReader, find_syntax_error, read_source

__all__ = ["ParsedFile", "SourceCache", "SourceReader", "find_syntax_error", "read_source"]
