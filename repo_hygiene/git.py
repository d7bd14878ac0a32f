"""Git subprocess helpers."""

from __future__ import annotations

from pathlib import Path
from subprocess import CalledProcessError, run


class GitError(RuntimeError):
    """Raised when git command execution fails."""


def ensure_work_tree(repo: Path) -> None:
    """Raise GitError unless ``repo`` sits inside a git work tree."""
    output = _run_git(repo, ["rev-parse", "--is-inside-work-tree"]).strip()
    if output != "true":
        raise GitError(f"{repo} is not inside a git work tree")


def get_head_revision(repo: Path) -> str | None:
    """Return HEAD revision if present."""
    try:
        return _run_git(repo, ["rev-parse", "--verify", "HEAD"]).strip()
    except GitError:
        return None


def get_commit_message(repo: Path, revision: str = "HEAD") -> str:
    """Return the full message (subject and body) of a commit."""
    return _run_git(repo, ["log", "-1", "--format=%B", revision])


def _run_git(repo: Path, args: list[str]) -> str:
    try:
        completed = run(
            ["git", *args],
            cwd=repo,
            check=True,
            capture_output=True,
            text=True,
        )
    except CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitError(stderr or f"git {' '.join(args)} failed") from exc
    except OSError as exc:
        raise GitError(f"git {' '.join(args)} could not run: {exc}") from exc

    return completed.stdout
