# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols shared across lintpipe components."""

from __future__ import annotations

from .processors import Processor

__all__ = ["Processor"]
