"""Base rule protocol and violation model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from repo_hygiene.snapshot import ProjectSnapshot


@dataclass(frozen=True, slots=True)
class Violation:
    """A single deviation reported by a rule."""

    rule_id: str
    target: str
    message: str


class Rule(Protocol):
    """Protocol for side-effect free hygiene rules."""

    rule_id: str

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        """Evaluate a snapshot and return violations."""
