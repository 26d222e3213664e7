# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for issue models and JSON loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from lintpipe.models import Issue, IssueLoadError, RunReport, dump_issues, load_issues, parse_issues


def test_issue_is_immutable() -> None:
    issue = Issue(file_path="a.go", line=1, message="m", from_linter="govet")
    with pytest.raises(ValidationError):
        issue.line = 2  # type: ignore[misc]


def test_missing_path_becomes_empty_string() -> None:
    issue = Issue(file_path=None, line=1, message="m", from_linter="govet")  # type: ignore[arg-type]
    assert issue.file_path == ""
    assert issue.location() == "<unknown>:1"


def test_location_includes_column() -> None:
    issue = Issue(file_path=Path("pkg/a.go"), line=3, column=9, message="m", from_linter="govet")  # type: ignore[arg-type]
    assert issue.location() == "pkg/a.go:3:9"


def test_parse_accepts_list_and_wrapped_payloads() -> None:
    entry = {"file_path": "a.go", "line": 2, "message": "m", "from_linter": "errcheck"}
    assert parse_issues([entry]) == parse_issues({"issues": [entry]})
    assert parse_issues({"report": {}}) == []


@pytest.mark.parametrize("payload", ["a.go", 42, [{"file_path": "a.go"}]])
def test_parse_rejects_invalid_payloads(payload: object) -> None:
    with pytest.raises(IssueLoadError):
        parse_issues(payload)


def test_load_and_dump_round_trip(tmp_path: Path) -> None:
    issues = [
        Issue(file_path="a.go", line=1, column=2, message="first", from_linter="govet", rule_id="printf"),
        Issue(file_path="b.go", line=5, message="second", from_linter="errcheck"),
    ]
    target = tmp_path / "issues.json"
    target.write_text(dump_issues(issues), encoding="utf-8")

    assert load_issues(target) == issues
    assert json.loads(target.read_text(encoding="utf-8"))[0]["rule_id"] == "printf"


def test_load_reports_bad_json(tmp_path: Path) -> None:
    target = tmp_path / "issues.json"
    target.write_text("{not json", encoding="utf-8")
    with pytest.raises(IssueLoadError, match="invalid JSON"):
        load_issues(target)


def test_run_report_distinguishes_failure_from_empty() -> None:
    assert not RunReport().failed
    assert RunReport(error="boom").failed
