# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for generated-file classification."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lintpipe.analysis.generated import (
    collect_header_doc,
    is_cgo_generated,
    is_generated_by_comment,
    is_generated_file,
)
from lintpipe.cache.source_cache import ParsedFile, SourceCache


def _parse(tmp_path: Path, source: str, name: str = "file.go") -> ParsedFile:
    (tmp_path / name).write_text(source, encoding="utf-8")
    parsed = SourceCache(tmp_path).get_or_parse(name)
    assert parsed.ok, parsed.error
    return parsed


@pytest.mark.parametrize(
    "doc",
    [
        "Code generated by protoc-gen-go. DO NOT EDIT.",
        "Code Generated By MockGen. DO NOT EDIT.",
        "AUTOGENERATED FILE: easyjson marshaler/unmarshalers.",
        "This file is maintained by a tool, do not edit",
        "prefix-code generated-suffix",
    ],
)
def test_markers_match_case_insensitively_anywhere(doc: str) -> None:
    assert is_generated_by_comment(doc) is True


@pytest.mark.parametrize("doc", ["", "hand-written, please edit", "generated code lives elsewhere"])
def test_docs_without_markers_are_not_generated(doc: str) -> None:
    assert is_generated_by_comment(doc) is False


def test_cgo_markers_are_case_sensitive() -> None:
    assert is_cgo_generated("Created by cgo - DO NOT EDIT")
    assert is_cgo_generated("Code generated by cmd/cgo; DO NOT EDIT.")
    assert not is_cgo_generated("created by CGO")


def test_header_before_package_marks_file_generated(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        '// Code generated by protoc-gen-go. DO NOT EDIT.\n\npackage gen\n\nimport "fmt"\n\nfunc F() { fmt.Println() }\n',
    )
    assert is_generated_file(parsed) is True


def test_mixed_case_mockgen_header(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "// Code Generated By MockGen. DO NOT EDIT.\npackage mocks\n")
    assert is_generated_file(parsed) is True


def test_hand_written_header(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "// hand-written, please edit\npackage p\n")
    assert is_generated_file(parsed) is False


def test_header_separated_from_package_by_blank_line(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        "// Code generated by MockGen. DO NOT EDIT.\n// Source: foo.go\n\n"
        "// Package mocks is a generated GoMock package.\npackage mocks\n",
    )
    assert collect_header_doc(parsed) == (
        "Code generated by MockGen. DO NOT EDIT.\nSource: foo.go\n\nPackage mocks is a generated GoMock package.\n"
    )
    assert is_generated_file(parsed) is True


def test_indented_marker_comment_is_ignored(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        'package p\n\n\t// Code generated by hand. DO NOT EDIT.\n\nimport "fmt"\n\nfunc F() { fmt.Println() }\n',
    )
    assert collect_header_doc(parsed) == ""
    assert is_generated_file(parsed) is False


def test_marker_after_first_import_is_ignored(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        'package p\n\nimport "fmt"\n\n// Code generated by nobody. DO NOT EDIT.\nfunc F() { fmt.Println() }\n',
    )
    assert is_generated_file(parsed) is False


def test_marker_between_grouped_imports_is_ignored(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        'package p\n\nimport (\n// DO NOT EDIT\n\t"fmt"\n)\n\nfunc F() { fmt.Println() }\n',
    )
    assert is_generated_file(parsed) is True

    later = _parse(
        tmp_path,
        'package p\n\nimport (\n\t"fmt"\n// DO NOT EDIT\n\t"os"\n)\n\nfunc F() { fmt.Println(os.Args) }\n',
        name="later.go",
    )
    assert is_generated_file(later) is False


def test_marker_after_last_declaration_without_imports_is_ignored(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "package p\n\nfunc F() {}\n\n// Code generated by nobody. DO NOT EDIT.\n")
    assert is_generated_file(parsed) is False


def test_trailing_package_comment_is_ignored(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "package p // Code generated. DO NOT EDIT.\n\nvar X = 1\n")
    assert is_generated_file(parsed) is False


def test_cgo_boilerplate_alone_is_not_generated(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "// Created by cgo - DO NOT EDIT\n\npackage wrap\n", name="cgo_wrap.go")
    assert collect_header_doc(parsed) == ""
    assert is_generated_file(parsed) is False


def test_cgo_boilerplate_does_not_hide_real_header(tmp_path: Path) -> None:
    parsed = _parse(
        tmp_path,
        "// Code generated by cmd/cgo; DO NOT EDIT.\n\n// Code generated by stringer. DO NOT EDIT.\n\npackage p\n",
    )
    assert collect_header_doc(parsed) == "Code generated by stringer. DO NOT EDIT.\n"
    assert is_generated_file(parsed) is True


def test_directives_do_not_contribute_text(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "//go:generate stringer -type=Kind do not edit\npackage p\n")
    assert is_generated_file(parsed) is False


def test_block_comment_header(tmp_path: Path) -> None:
    parsed = _parse(tmp_path, "/*\nAutogenerated file by easyjson.\n*/\n\npackage p\n")
    assert is_generated_file(parsed) is True


def test_decisions_are_logged_to_injected_logger(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    parsed = _parse(tmp_path, 'package p\n\n  // DO NOT EDIT\nimport "fmt"\n\nvar _ = fmt.Sprint\n')
    logger = logging.getLogger("tests.generated")
    with caplog.at_level(logging.DEBUG, logger="tests.generated"):
        assert is_generated_file(parsed, logger=logger) is False
    assert any("NOT allowed" in record.getMessage() for record in caplog.records)
    assert any("got 0 allowed comments" in record.getMessage() for record in caplog.records)
