"""Scratch and editor leftovers rule."""

from __future__ import annotations

from pathlib import PurePosixPath

from repo_hygiene.rules.base import Violation
from repo_hygiene.snapshot import ProjectSnapshot

ARTIFACT_SUFFIXES = {".tmp", ".bak", ".orig", ".rej", ".swp", ".swo"}
ARTIFACT_NAMES = {".ds_store", "thumbs.db", "desktop.ini"}


class StrayArtifactsRule:
    """Flags temporary, backup, and editor files left in the tree."""

    rule_id = "stray_artifacts"

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        violations: list[Violation] = []
        for path in snapshot.paths:
            if not _is_artifact(path):
                continue
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    target=path,
                    message="Scratch artifact should be deleted or ignored.",
                )
            )
        return violations


def _is_artifact(path: str) -> bool:
    name = PurePosixPath(path).name.lower()
    if name in ARTIFACT_NAMES or name.endswith("~"):
        return True
    return PurePosixPath(name).suffix in ARTIFACT_SUFFIXES
