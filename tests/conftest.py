# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from lintpipe.models import Issue

GENERATED_SOURCE = """// Code generated by protoc-gen-go. DO NOT EDIT.

package gen

import "fmt"

func Hello() { fmt.Println("hi") }
"""

HAND_WRITTEN_SOURCE = """package hand

import "fmt"

// Hello prints a greeting. Do not edit lightly.
func Hello() { fmt.Println("hi") }
"""

BROKEN_SOURCE = """package bad

func Broken( {
"""


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing Go sources below ``tmp_path``."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project(write_go: Callable[[str, str], Path], tmp_path: Path) -> Path:
    """Create a project with one generated, one hand-written and one broken file."""

    write_go("gen.go", GENERATED_SOURCE)
    write_go("hand.go", HAND_WRITTEN_SOURCE)
    write_go("bad.go", BROKEN_SOURCE)
    return tmp_path


def _make_issue(file_path: str, line: int = 1, message: str = "something is off", linter: str = "govet") -> Issue:
    return Issue(file_path=file_path, line=line, column=1, message=message, from_linter=linter)


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Return a factory building issues with sensible defaults."""

    return _make_issue
