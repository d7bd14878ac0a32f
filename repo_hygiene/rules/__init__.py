"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass

from repo_hygiene.config import AppConfig
from repo_hygiene.rules.artifacts import StrayArtifactsRule
from repo_hygiene.rules.base import Rule
from repo_hygiene.rules.commit_message import (
    CommitAttributionRule,
    CommitFormatRule,
    CommitSubjectLengthRule,
)
from repo_hygiene.rules.placement import MisplacedDocsRule, MisplacedLogsRule, MisplacedScriptsRule


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str
    default_enabled: bool


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[], Rule]
    name: str
    description: str
    category: str


def default_rules() -> list[Rule]:
    """Return the full rule set with default parameters."""
    return build_rules()


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    config: AppConfig | None = None,
) -> list[Rule]:
    """Build rule instances in registration order applying enable/disable filters."""
    specs = _ordered_rule_specs(config or AppConfig())
    registry = {spec.rule_id: spec for spec in specs}
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else set(registry)
    disabled_set = set(disabled_rule_ids or [])
    return [
        spec.factory()
        for spec in specs
        if spec.rule_id in enabled_set and spec.rule_id not in disabled_set
    ]


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            category=spec.category,
            default_enabled=True,
        )
        for spec in _ordered_rule_specs(AppConfig())
    ]


def _ordered_rule_specs(config: AppConfig) -> list[_RuleSpec]:
    placement = config.placement
    commit = config.commit
    return [
        _spec(
            MisplacedLogsRule,
            lambda: MisplacedLogsRule(placement.logs),
            category="placement",
        ),
        _spec(
            MisplacedScriptsRule,
            lambda: MisplacedScriptsRule(placement.scripts),
            category="placement",
        ),
        _spec(
            MisplacedDocsRule,
            lambda: MisplacedDocsRule(placement.docs, allowed_names=placement.doc_allowed_names),
            category="placement",
        ),
        _spec(StrayArtifactsRule, StrayArtifactsRule, category="placement"),
        _spec(
            CommitFormatRule,
            lambda: CommitFormatRule(commit.types),
            category="commit",
        ),
        _spec(
            CommitSubjectLengthRule,
            lambda: CommitSubjectLengthRule(commit.max_subject_length),
            category="commit",
        ),
        _spec(CommitAttributionRule, CommitAttributionRule, category="commit"),
    ]


def _spec(rule_cls: type, factory: Callable[[], Rule], *, category: str) -> _RuleSpec:
    return _RuleSpec(
        rule_id=rule_cls.rule_id,
        factory=factory,
        name=rule_cls.__name__,
        description=(rule_cls.__doc__ or "").strip(),
        category=category,
    )
