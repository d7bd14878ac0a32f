"""Config loading precedence and validation tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from repo_hygiene.config import AppConfig, default_config_template, load_app_config


def test_load_app_config_defaults_without_files(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config == AppConfig()
    assert config.placement.logs == ["logs"]
    assert config.commit.max_subject_length == 72
    assert config.source is None


def test_load_app_config_prefers_dot_file_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.repo_hygiene]\nformat = "human"\n', encoding="utf-8"
    )
    (tmp_path / ".repo-hygiene.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                'exclude = ["vendor/**"]',
                "",
                "[rules]",
                'disable = ["misplaced_docs"]',
                "",
                "[placement]",
                'scripts = ["scripts", "bin"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.exclude == ["vendor/**"]
    assert config.rule_enable is None
    assert config.rule_disable == ["misplaced_docs"]
    assert config.placement.scripts == ["scripts", "bin"]
    assert config.placement.logs == ["logs"]
    assert config.source == str(tmp_path.resolve() / ".repo-hygiene.toml")


def test_load_app_config_reads_pyproject_hyphenated_key(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "\n".join(
            [
                "[project]",
                'name = "demo"',
                "",
                "[tool.repo-hygiene.commit]",
                "max_subject_length = 50",
            ]
        ),
        encoding="utf-8",
    )
    config = load_app_config(tmp_path)
    assert config.commit.max_subject_length == 50
    assert config.source == str(tmp_path.resolve() / "pyproject.toml")


def test_pyproject_without_tool_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    assert load_app_config(tmp_path).source is None


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config file does not exist"):
        load_app_config(tmp_path, config_path=Path("missing.toml"))


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('format = "xml"\n', "format must be one of"),
        ("[commit]\nmax_subject_length = 0\n", "must be > 0"),
        ('[commit]\nmax_subject_length = "72"\n', "must be an integer"),
        ("[commit]\ntypes = []\n", "commit.types must not be empty"),
        ('[placement]\nlogs = "logs"\n', "placement.logs must be a list of strings"),
        ('rules = "all"\n', "rules must be a table"),
        ("format = \n", "Invalid TOML"),
    ],
)
def test_invalid_config_values_raise(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".repo-hygiene.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_default_template_round_trips_through_loader(tmp_path: Path) -> None:
    path = tmp_path / "repo-hygiene.toml"
    path.write_text(default_config_template(), encoding="utf-8")

    config = load_app_config(tmp_path)
    assert config.rule_enable is not None
    assert len(config.rule_enable) == 7
    assert config.exclude == ["vendor/**"]
    assert config.placement == AppConfig().placement
    assert config.commit == AppConfig().commit
