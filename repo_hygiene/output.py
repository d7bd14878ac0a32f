"""Report rendering and exit-code mapping."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from repo_hygiene import __version__
from repo_hygiene.engine import evaluate
from repo_hygiene.rules.base import Rule, Violation
from repo_hygiene.snapshot import ProjectSnapshot

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_COLLECTION_ERROR = 2


def run_check(
    snapshot: ProjectSnapshot,
    rules: list[Rule] | None = None,
    *,
    output_format: str = "human",
) -> int:
    """Evaluate the snapshot once and report the result."""
    violations = evaluate(snapshot, rules)
    return report(violations, output_format=output_format, snapshot=snapshot)


def report(
    violations: list[Violation],
    *,
    output_format: str = "human",
    snapshot: ProjectSnapshot | None = None,
) -> int:
    """Print violations and return the process exit code.

    Writes to stdout (and a summary line to stderr); never touches files.
    """
    if output_format == "json":
        click.echo(render_json(violations, snapshot=snapshot))
    else:
        click.echo(render_human(violations))
        if violations:
            noun = "violation" if len(violations) == 1 else "violations"
            click.echo(click.style(f"{len(violations)} {noun} found.", fg="red"), err=True)
    return EXIT_VIOLATIONS if violations else EXIT_OK


def render_human(violations: list[Violation]) -> str:
    """Render one line per violation, or OK when there are none."""
    if not violations:
        return click.style("OK", fg="green", bold=True)
    return "\n".join(format_violation(item) for item in violations)


def format_violation(violation: Violation) -> str:
    return f"[{violation.rule_id}] {violation.target}: {violation.message}"


def render_json(violations: list[Violation], *, snapshot: ProjectSnapshot | None = None) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(violations, snapshot=snapshot), sort_keys=True)


def build_json_payload(
    violations: list[Violation],
    *,
    snapshot: ProjectSnapshot | None = None,
) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "version": __version__,
    }
    if snapshot is not None:
        meta["root"] = str(snapshot.root)
        meta["commit"] = snapshot.commit_ref
        meta["files"] = len(snapshot.paths)

    return {
        "ok": not violations,
        "violations": [_serialize_violation(item) for item in violations],
        "meta": meta,
    }


def _serialize_violation(violation: Violation) -> dict[str, Any]:
    return {
        "rule_id": violation.rule_id,
        "target": violation.target,
        "message": violation.message,
    }
