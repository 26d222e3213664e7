# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tree-sitter grammar helpers."""

from __future__ import annotations

from .grammars import GO_GRAMMAR, build_parser, ensure_language

__all__ = ["GO_GRAMMAR", "build_parser", "ensure_language"]
