# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether a Go source file was produced by a code generator.

The rules are laxer than https://golang.org/s/generatedcode so that more
real-world generator headers are recognised. Only header comments count: a
comment group is considered when it starts in column 1 before the first
import (or before the end of the file's declarations when it imports
nothing). Groups injected by cgo are skipped because they also say
"DO NOT EDIT".
"""

from __future__ import annotations

import logging
from typing import Final

from ..cache.source_cache import ParsedFile
from ..logging import debug_logger

GEN_CODE_GENERATED: Final[str] = "code generated"
GEN_DO_NOT_EDIT: Final[str] = "do not edit"
GEN_AUTOGENERATED_FILE: Final[str] = "autogenerated file"  # easyjson
GENERATED_MARKERS: Final[tuple[str, ...]] = (GEN_CODE_GENERATED, GEN_DO_NOT_EDIT, GEN_AUTOGENERATED_FILE)

# "Created by cgo - DO NOT EDIT" up to Go 1.10, "Code generated by cmd/cgo" afterwards.
CGO_MARKERS: Final[tuple[str, ...]] = ("Created by cgo", "Code generated by cmd/cgo")

_HEADER_COLUMN: Final[int] = 1


def _logger_or_default(logger: logging.Logger | None) -> logging.Logger:
    return logger if logger is not None else debug_logger("autogen_exclude")


def is_cgo_generated(text: str) -> bool:
    """Return ``True`` when ``text`` is the comment cgo adds to wrapped files."""
    return any(marker in text for marker in CGO_MARKERS)


def is_generated_by_comment(doc: str, *, logger: logging.Logger | None = None) -> bool:
    """Return ``True`` when ``doc`` contains any generated-code marker.

    Matching is case-insensitive and unanchored.
    """

    log = _logger_or_default(logger)
    lowered = doc.lower()
    for marker in GENERATED_MARKERS:
        if marker in lowered:
            log.debug("doc contains marker %r: file is generated", marker)
            return True

    log.debug("doc of len %d doesn't contain any of markers: %s", len(doc), list(GENERATED_MARKERS))
    return False


def collect_header_doc(parsed: ParsedFile, *, logger: logging.Logger | None = None) -> str:
    """Join the texts of the header comment groups of ``parsed``.

    ``ast.File.Doc`` alone is not enough: mockgen, for example, leaves a blank
    line between its header and the package clause.

    Args:
        parsed: Successfully parsed file.
        logger: Debug logger receiving one line per accepted or rejected group.

    Returns:
        str: Newline-joined texts of eligible groups, empty when none qualify.
    """

    log = _logger_or_default(logger)
    cutoff = parsed.import_cutoff()
    cutoff_line, cutoff_column = parsed.position(cutoff)
    log.debug(
        "file %r: search comments until pos %d (%d:%d)",
        parsed.name,
        cutoff,
        cutoff_line,
        cutoff_column,
    )

    texts: list[str] = []
    for group in parsed.comment_groups():
        text = group.text()
        allowed = group.start < cutoff and group.column == _HEADER_COLUMN and not is_cgo_generated(text)
        log.debug(
            "file %r: pos=%d, %d:%d: comment %r: it's %s",
            parsed.name,
            group.start,
            group.line,
            group.column,
            text,
            "allowed" if allowed else "NOT allowed",
        )
        if allowed:
            texts.append(text)

    log.debug("file %r: got %d allowed comments", parsed.name, len(texts))
    return "\n".join(texts)


def is_generated_file(parsed: ParsedFile, *, logger: logging.Logger | None = None) -> bool:
    """Classify ``parsed`` as generated or hand-written."""

    doc = collect_header_doc(parsed, logger=logger)
    if not doc:
        return False
    return is_generated_by_comment(doc, logger=logger)


__all__ = [
    "CGO_MARKERS",
    "GENERATED_MARKERS",
    "collect_header_doc",
    "is_cgo_generated",
    "is_generated_by_comment",
    "is_generated_file",
]
