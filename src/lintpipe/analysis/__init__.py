# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source analysis helpers: comment extraction and generated-file detection."""
