"""Reporter rendering and exit-code tests."""

from __future__ import annotations

import json
from pathlib import Path

import click
import pytest

from repo_hygiene.output import (
    EXIT_OK,
    EXIT_VIOLATIONS,
    render_human,
    render_json,
    report,
    run_check,
)
from repo_hygiene.rules.base import Violation
from repo_hygiene.snapshot import ProjectSnapshot


def test_render_human_prints_ok_for_no_violations() -> None:
    assert click.unstyle(render_human([])) == "OK"


def test_render_human_one_line_per_violation() -> None:
    output = render_human(
        [
            Violation("misplaced_logs", "a.log", "Log file belongs under logs/."),
            Violation("commit_format", "commit:abc", "Commit message is empty."),
        ]
    )
    assert output.splitlines() == [
        "[misplaced_logs] a.log: Log file belongs under logs/.",
        "[commit_format] commit:abc: Commit message is empty.",
    ]


def test_report_returns_zero_and_prints_ok(capsys: pytest.CaptureFixture[str]) -> None:
    assert report([]) == EXIT_OK
    captured = capsys.readouterr()
    assert click.unstyle(captured.out).strip() == "OK"
    assert captured.err == ""


def test_report_returns_one_with_summary_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    message = "Scratch artifact should be deleted or ignored."
    violations = [Violation("stray_artifacts", "a.tmp", message)]
    assert report(violations) == EXIT_VIOLATIONS

    captured = capsys.readouterr()
    assert captured.out.strip() == f"[stray_artifacts] a.tmp: {message}"
    assert "1 violation found." in click.unstyle(captured.err)


def test_render_json_has_stable_schema() -> None:
    snapshot = ProjectSnapshot(
        root=Path("/project"), paths=("a.log",), commit_message="feat: x", commit_ref="abc"
    )
    payload = json.loads(
        render_json([Violation("misplaced_logs", "a.log", "m")], snapshot=snapshot)
    )
    assert payload["ok"] is False
    assert payload["violations"] == [
        {"rule_id": "misplaced_logs", "target": "a.log", "message": "m"}
    ]
    assert payload["meta"]["root"] == str(Path("/project"))
    assert payload["meta"]["commit"] == "abc"
    assert payload["meta"]["files"] == 1
    assert payload["meta"]["generated_at"].endswith("Z")


def test_run_check_evaluates_and_reports(capsys: pytest.CaptureFixture[str]) -> None:
    snapshot = ProjectSnapshot(
        root=Path("/project"),
        paths=("logs/a.log", "docs/b.md", "scripts/c.sh"),
        commit_message="feat: add x",
        commit_ref="abc",
    )
    assert run_check(snapshot, output_format="json") == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    assert payload["violations"] == []
