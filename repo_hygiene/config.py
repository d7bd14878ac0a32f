"""Configuration loading for repo-hygiene."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAMES = (".repo-hygiene.toml", "repo-hygiene.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("repo_hygiene", "repo-hygiene")

DEFAULT_COMMIT_TYPES = (
    "build",
    "chore",
    "ci",
    "docs",
    "feat",
    "fix",
    "perf",
    "refactor",
    "revert",
    "style",
    "test",
)
DEFAULT_MAX_SUBJECT_LENGTH = 72

DEFAULT_DOC_ALLOWED_NAMES = (
    "README.md",
    "CHANGELOG.md",
    "CONTRIBUTING.md",
    "LICENSE.md",
    "CODE_OF_CONDUCT.md",
    "SECURITY.md",
    "CLAUDE.md",
    "AGENTS.md",
)


@dataclass(slots=True)
class PlacementConfig:
    """Directories each file kind is allowed to live in."""

    logs: list[str] = field(default_factory=lambda: ["logs"])
    scripts: list[str] = field(default_factory=lambda: ["scripts"])
    docs: list[str] = field(default_factory=lambda: ["docs"])
    doc_allowed_names: list[str] = field(default_factory=lambda: list(DEFAULT_DOC_ALLOWED_NAMES))


@dataclass(slots=True)
class CommitConfig:
    """Commit message conventions."""

    types: list[str] = field(default_factory=lambda: list(DEFAULT_COMMIT_TYPES))
    max_subject_length: int = DEFAULT_MAX_SUBJECT_LENGTH


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    exclude: list[str] = field(default_factory=list)
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    commit: CommitConfig = field(default_factory=CommitConfig)
    source: str | None = None


def load_app_config(project: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or project-local files with precedence."""
    project = project.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (project / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = project / filename
        if _is_file(resolved):
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = project / PYPROJECT_FILENAME
    if _is_file(pyproject_path):
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            'exclude = ["vendor/**"]',
            "",
            "[rules]",
            "enable = [",
            '  "misplaced_logs",',
            '  "misplaced_scripts",',
            '  "misplaced_docs",',
            '  "stray_artifacts",',
            '  "commit_format",',
            '  "commit_subject_length",',
            '  "commit_attribution",',
            "]",
            "disable = []",
            "",
            "[placement]",
            'logs = ["logs"]',
            'scripts = ["scripts"]',
            'docs = ["docs"]',
            "doc_allowed_names = [",
            *(f'  "{name}",' for name in DEFAULT_DOC_ALLOWED_NAMES),
            "]",
            "",
            "[commit]",
            "types = [" + ", ".join(f'"{item}"' for item in DEFAULT_COMMIT_TYPES) + "]",
            f"max_subject_length = {DEFAULT_MAX_SUBJECT_LENGTH}",
            "",
        ]
    )


def _is_file(path: Path) -> bool:
    # An unreadable project directory is reported by snapshot collection.
    try:
        return path.is_file()
    except OSError:
        return False


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Cannot read config {path}: {exc}") from exc
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    tool_section = _find_pyproject_tool_section(loaded)
    if source_path.name == PYPROJECT_FILENAME:
        return tool_section if tool_section is not None else {}
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    placement_mapping = _as_table(mapping.get("placement"), "placement")
    commit_mapping = _as_table(mapping.get("commit"), "commit")

    return AppConfig(
        format=_as_choice(mapping.get("format", "human"), {"human", "json"}, "format"),
        exclude=_as_str_list(mapping.get("exclude"), "exclude"),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
        rule_disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
        placement=_parse_placement_config(placement_mapping),
        commit=_parse_commit_config(commit_mapping),
        source=source,
    )


def _parse_placement_config(value: dict[str, Any]) -> PlacementConfig:
    defaults = PlacementConfig()
    return PlacementConfig(
        logs=_as_str_list_or_default(value.get("logs"), defaults.logs, "placement.logs"),
        scripts=_as_str_list_or_default(
            value.get("scripts"), defaults.scripts, "placement.scripts"
        ),
        docs=_as_str_list_or_default(value.get("docs"), defaults.docs, "placement.docs"),
        doc_allowed_names=_as_str_list_or_default(
            value.get("doc_allowed_names"),
            defaults.doc_allowed_names,
            "placement.doc_allowed_names",
        ),
    )


def _parse_commit_config(value: dict[str, Any]) -> CommitConfig:
    types = _as_str_list_or_default(value.get("types"), list(DEFAULT_COMMIT_TYPES), "commit.types")
    if not types:
        raise ValueError("commit.types must not be empty")
    max_length = _as_int(
        value.get("max_subject_length", DEFAULT_MAX_SUBJECT_LENGTH),
        "commit.max_subject_length",
    )
    if max_length <= 0:
        raise ValueError("commit.max_subject_length must be > 0")
    return CommitConfig(types=types, max_subject_length=max_length)


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return list(value)


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_str_list_or_default(value: Any, default: list[str], field_name: str) -> list[str]:
    if value is None:
        return list(default)
    return _as_str_list(value, field_name)


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw
