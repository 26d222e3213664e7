# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for Go comment grouping and text rendering."""

from __future__ import annotations

from pathlib import Path

from lintpipe.analysis.comments import render_comment_text
from lintpipe.cache.source_cache import SourceCache


def _groups(tmp_path: Path, source: str):
    (tmp_path / "c.go").write_text(source, encoding="utf-8")
    parsed = SourceCache(tmp_path).get_or_parse("c.go")
    assert parsed.ok, parsed.error
    return parsed.comment_groups()


def test_render_strips_markers_and_one_leading_space() -> None:
    assert render_comment_text(["//  two spaces", "//none"]) == " two spaces\nnone\n"


def test_render_drops_leading_blank_lines_and_collapses_runs() -> None:
    assert render_comment_text(["//", "// a", "//", "//", "// b", "//"]) == "a\n\nb\n"


def test_render_block_comment_and_trailing_whitespace() -> None:
    assert render_comment_text(["/*\n  first   \n\n\n second\t\n*/"]) == "  first\n\n second\n"


def test_render_skips_directives() -> None:
    raw = ["//go:generate go run gen.go", "//line foo.go:10", "//export Foo", "// kept"]
    assert render_comment_text(raw) == "kept\n"


def test_render_keeps_text_that_only_resembles_directives() -> None:
    assert render_comment_text(["//TODO: later", "//Note:x"]) == "TODO: later\nNote:x\n"


def test_render_empty_input() -> None:
    assert render_comment_text([]) == ""
    assert render_comment_text(["//"]) == ""


def test_render_removes_carriage_returns() -> None:
    assert render_comment_text(["// windows\r"]) == "windows\n"


def test_adjacent_line_comments_form_one_group(tmp_path: Path) -> None:
    groups = _groups(tmp_path, "// a\n//b\n\n// c\npackage p\n")
    assert [group.text() for group in groups] == ["a\nb\n", "c\n"]
    assert [(group.line, group.column) for group in groups] == [(1, 1), (4, 1)]


def test_group_start_is_first_comment(tmp_path: Path) -> None:
    groups = _groups(tmp_path, "// header\n\t// indented continuation\npackage p\n")
    assert len(groups) == 1
    assert groups[0].column == 1
    assert groups[0].start == 0
    assert groups[0].text() == "header\nindented continuation\n"


def test_trailing_comment_opens_line_group(tmp_path: Path) -> None:
    groups = _groups(tmp_path, "package p // trailing\n// next\n\nvar X = 1\n")
    assert [group.text() for group in groups] == ["trailing\n", "next\n"]
    assert [group.column for group in groups] == [11, 1]


def test_code_between_comments_splits_groups(tmp_path: Path) -> None:
    groups = _groups(tmp_path, "// one\npackage p\n// two\nvar X = 1\n")
    assert [group.text() for group in groups] == ["one\n", "two\n"]


def test_comments_inside_functions_are_collected(tmp_path: Path) -> None:
    groups = _groups(tmp_path, "package p\n\nfunc F() {\n\t// inner\n\t_ = 1\n}\n")
    assert [(group.text(), group.line, group.column) for group in groups] == [("inner\n", 4, 2)]
