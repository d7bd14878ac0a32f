"""Rule evaluation orchestration."""

from __future__ import annotations

import logging

from repo_hygiene.rules import default_rules
from repo_hygiene.rules.base import Rule, Violation
from repo_hygiene.snapshot import ProjectSnapshot

logger = logging.getLogger("repo_hygiene.engine")


def evaluate(snapshot: ProjectSnapshot, rules: list[Rule] | None = None) -> list[Violation]:
    """Apply every rule to the snapshot and aggregate the violations.

    Rules run independently and never short-circuit each other. Output is
    ordered by rule registration, then by target and message, and a rule
    reporting the same violation twice only contributes it once.
    """
    active_rules = rules if rules is not None else default_rules()
    violations: list[Violation] = []
    for rule in active_rules:
        found = sorted(set(rule.evaluate(snapshot)), key=lambda item: (item.target, item.message))
        logger.debug("Rule %s reported %d violations", rule.rule_id, len(found))
        violations.extend(found)
    return violations
