"""Snapshot collection tests against synthetic git repositories."""

from __future__ import annotations

from pathlib import Path

import pytest

from repo_hygiene.snapshot import CollectionError, collect_snapshot
from tests.helpers_git import (
    build_repo,
    can_bypass_permissions,
    git,
    init_repo,
    unreadable,
    write_file,
)


def test_collect_snapshot_reads_files_and_last_commit(tmp_path: Path) -> None:
    repo = build_repo(tmp_path, ["src/app.py", "docs/guide.md"], "docs: add guide")
    write_file(repo, "logs/run.log", "untracked\n")
    write_file(repo, "node_modules/pkg/index.js", "ignored\n")

    snapshot = collect_snapshot(repo)

    assert snapshot.root == repo.resolve()
    assert snapshot.paths == ("docs/guide.md", "logs/run.log", "src/app.py")
    assert snapshot.commit_subject == "docs: add guide"
    assert snapshot.commit_ref == git(repo, "rev-parse", "HEAD").strip()
    assert not any(path.startswith(".git/") for path in snapshot.paths)


def test_collect_snapshot_keeps_full_commit_body(tmp_path: Path) -> None:
    repo = build_repo(tmp_path, ["a.py"], "feat: add x\n\nCo-Authored-By: Claude <c@example.com>")
    snapshot = collect_snapshot(repo)
    assert snapshot.commit_message is not None
    assert "Co-Authored-By: Claude" in snapshot.commit_message


def test_collect_snapshot_applies_exclude_patterns(tmp_path: Path) -> None:
    repo = build_repo(
        tmp_path,
        ["vendor/lib/a.log", "src/gen/out.tmp", "src/keep.py", "third_party/x.sh"],
        "chore: seed",
    )
    snapshot = collect_snapshot(repo, exclude=["vendor", "*.tmp", "third_party/**"])
    assert snapshot.paths == ("src/keep.py",)


def test_collect_snapshot_is_stable_across_runs(tmp_path: Path) -> None:
    repo = build_repo(tmp_path, ["b.py", "a/z.py", "a/b.py"], "feat: seed")
    assert collect_snapshot(repo) == collect_snapshot(repo)


def test_repository_without_commits_has_no_commit_message(tmp_path: Path) -> None:
    repo = init_repo(tmp_path)
    write_file(repo, "a.log", "x\n")

    snapshot = collect_snapshot(repo)
    assert snapshot.paths == ("a.log",)
    assert snapshot.commit_message is None
    assert snapshot.commit_ref is None


def test_missing_directory_raises_collection_error(tmp_path: Path) -> None:
    with pytest.raises(CollectionError, match="does not exist"):
        collect_snapshot(tmp_path / "missing")


def test_file_path_raises_collection_error(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(CollectionError, match="not a directory"):
        collect_snapshot(target)


def test_directory_outside_git_raises_collection_error(tmp_path: Path) -> None:
    project = tmp_path / "plain"
    project.mkdir()
    (project / "a.py").write_text("x\n", encoding="utf-8")
    with pytest.raises(CollectionError, match="cannot read commit metadata"):
        collect_snapshot(project)


@pytest.mark.skipif(can_bypass_permissions(), reason="permission bits are not enforced")
def test_unreadable_subdirectory_raises_collection_error(tmp_path: Path) -> None:
    repo = build_repo(tmp_path, ["sub/a.py", "b.py"], "feat: seed")
    with unreadable(repo / "sub"):
        with pytest.raises(CollectionError, match="cannot read directory .*sub"):
            collect_snapshot(repo)
