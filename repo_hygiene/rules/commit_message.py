"""Rules over the most recent commit message."""

from __future__ import annotations

import re
from collections.abc import Iterable

from repo_hygiene.config import DEFAULT_COMMIT_TYPES, DEFAULT_MAX_SUBJECT_LENGTH
from repo_hygiene.rules.base import Violation
from repo_hygiene.snapshot import ProjectSnapshot

SUBJECT_PATTERN = re.compile(r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()]+)\))?!?: (?P<desc>\S.*)$")

_ASSISTANT_NAMES = r"(claude|anthropic|copilot|chatgpt|openai|gpt|gemini|cursor)"
ATTRIBUTION_PATTERNS = (
    re.compile(rf"^\s*co-authored-by:.*\b{_ASSISTANT_NAMES}\b", re.IGNORECASE),
    re.compile(rf"\bgenerated (?:with|by)\b.*\b{_ASSISTANT_NAMES}\b", re.IGNORECASE),
)


class CommitFormatRule:
    """Requires a Conventional Commits subject such as 'feat(api): add x'."""

    rule_id = "commit_format"

    def __init__(self, types: Iterable[str] = DEFAULT_COMMIT_TYPES) -> None:
        self.types = frozenset(item.lower() for item in types)

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        subject = snapshot.commit_subject
        if subject is None:
            return []
        if not subject:
            return [self._violation(snapshot, "Commit message is empty.")]

        match = SUBJECT_PATTERN.match(subject)
        if match is None:
            return [
                self._violation(
                    snapshot,
                    f"Subject '{subject}' does not follow 'type(scope): description'.",
                )
            ]
        commit_type = match.group("type")
        if commit_type.lower() not in self.types or commit_type != commit_type.lower():
            allowed = ", ".join(sorted(self.types))
            return [
                self._violation(
                    snapshot,
                    f"Unknown commit type '{commit_type}'. Expected one of: {allowed}",
                )
            ]
        return []

    def _violation(self, snapshot: ProjectSnapshot, message: str) -> Violation:
        return Violation(rule_id=self.rule_id, target=snapshot.commit_target, message=message)


class CommitSubjectLengthRule:
    """Keeps the commit subject line within a character limit."""

    rule_id = "commit_subject_length"

    def __init__(self, max_length: int = DEFAULT_MAX_SUBJECT_LENGTH) -> None:
        self.max_length = max_length

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        subject = snapshot.commit_subject
        if not subject or len(subject) <= self.max_length:
            return []
        return [
            Violation(
                rule_id=self.rule_id,
                target=snapshot.commit_target,
                message=f"Subject is {len(subject)} characters; limit is {self.max_length}.",
            )
        ]


class CommitAttributionRule:
    """Rejects AI assistant attribution lines in the commit message."""

    rule_id = "commit_attribution"

    def evaluate(self, snapshot: ProjectSnapshot) -> list[Violation]:
        if not snapshot.commit_message:
            return []
        evidence = _first_attribution_line(snapshot.commit_message)
        if evidence is None:
            return []
        return [
            Violation(
                rule_id=self.rule_id,
                target=snapshot.commit_target,
                message=f"AI attribution present: '{evidence}'.",
            )
        ]


def _first_attribution_line(message: str) -> str | None:
    for line in message.splitlines():
        if any(pattern.search(line) for pattern in ATTRIBUTION_PATTERNS):
            return line.strip()
    return None
