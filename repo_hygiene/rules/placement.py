"""File placement rules: each file kind lives under its conventional directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from repo_hygiene.rules.base import Violation
from repo_hygiene.snapshot import ProjectSnapshot

LOG_SUFFIXES = (".log",)
SCRIPT_SUFFIXES = (".sh", ".bash", ".zsh")
DOC_SUFFIXES = (".md", ".rst", ".adoc")


class PlacementRule:
    """Flags files with a given suffix that sit outside the allowed directories."""

    rule_id = ""
    kind = "file"
    suffixes: tuple[str, ...] = ()

    def __init__(
        self,
        allowed_dirs: Iterable[str],
        *,
        allowed_names: Iterable[str] = (),
    ) -> None:
        self.allowed_dirs = tuple(
            PurePosixPath(item.strip("/")).parts for item in allowed_dirs if item.strip("/")
        )
        self.allowed_names = frozenset(name.lower() for name in allowed_names)

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        violations: list[Violation] = []
        for path in snapshot.paths:
            pure = PurePosixPath(path)
            if pure.suffix.lower() not in self.suffixes:
                continue
            if pure.name.lower() in self.allowed_names:
                continue
            if _is_under(pure, self.allowed_dirs):
                continue
            violations.append(
                Violation(
                    rule_id=self.rule_id,
                    target=path,
                    message=f"{self.kind} file belongs under {self._expected()}.",
                )
            )
        return violations

    def _expected(self) -> str:
        if not self.allowed_dirs:
            return "no directory (none configured)"
        return " or ".join(f"{'/'.join(parts)}/" for parts in self.allowed_dirs)


class MisplacedLogsRule(PlacementRule):
    """Flags log files kept outside the logs directory."""

    rule_id = "misplaced_logs"
    kind = "Log"
    suffixes = LOG_SUFFIXES


class MisplacedScriptsRule(PlacementRule):
    """Flags shell scripts kept outside the scripts directory."""

    rule_id = "misplaced_scripts"
    kind = "Shell script"
    suffixes = SCRIPT_SUFFIXES


class MisplacedDocsRule(PlacementRule):
    """Flags documentation files kept outside the docs directory."""

    rule_id = "misplaced_docs"
    kind = "Documentation"
    suffixes = DOC_SUFFIXES


def _is_under(path: PurePosixPath, directories: tuple[tuple[str, ...], ...]) -> bool:
    # Matches the directory at any depth, so both logs/ and service/logs/ count.
    parents = path.parts[:-1]
    for parts in directories:
        width = len(parts)
        for start in range(len(parents) - width + 1):
            if parents[start : start + width] == parts:
                return True
    return False
