"""Read-only capture of a project's file layout and latest commit."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from repo_hygiene.git import GitError, ensure_work_tree, get_commit_message, get_head_revision

logger = logging.getLogger("repo_hygiene.snapshot")

DEFAULT_EXCLUDED_DIRS = (
    ".git",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".tox",
    "build",
    "dist",
)


class CollectionError(RuntimeError):
    """Raised when directory entries or commit metadata cannot be read."""


@dataclass(frozen=True, slots=True)
class ProjectSnapshot:
    """Immutable view of project files and the most recent commit message.

    ``paths`` are POSIX paths relative to ``root``, deduplicated and sorted.
    ``commit_message`` and ``commit_ref`` are ``None`` only for a repository
    that has no commits yet.
    """

    root: Path
    paths: tuple[str, ...]
    commit_message: str | None = None
    commit_ref: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(sorted(set(self.paths))))

    @property
    def extensions(self) -> frozenset[str]:
        """Lower-cased suffixes present in the snapshot (``.log``, ``.md``...)."""
        return frozenset(
            suffix
            for suffix in (PurePosixPath(path).suffix.lower() for path in self.paths)
            if suffix
        )

    @property
    def commit_subject(self) -> str | None:
        if self.commit_message is None:
            return None
        for line in self.commit_message.splitlines():
            if line.strip():
                return line.rstrip()
        return ""

    @property
    def commit_target(self) -> str:
        """Violation target naming the captured commit."""
        if not self.commit_ref:
            return "commit"
        return f"commit:{self.commit_ref[:12]}"


def collect_snapshot(root: Path, *, exclude: Iterable[str] = ()) -> ProjectSnapshot:
    """Walk ``root`` and read the latest commit message.

    ``exclude`` holds extra glob patterns matched against relative paths and
    directory names on top of ``DEFAULT_EXCLUDED_DIRS``. Any read failure
    raises ``CollectionError``; a partial snapshot is never returned.
    """
    root = root.resolve()
    if not root.exists():
        raise CollectionError(f"project directory does not exist: {root}")
    if not root.is_dir():
        raise CollectionError(f"project path is not a directory: {root}")

    patterns = tuple(exclude)
    paths = _collect_paths(root, patterns)
    commit_ref, commit_message = _collect_commit(root)
    logger.debug(
        "Collected %d files from %s (commit %s)", len(paths), root, commit_ref or "<none>"
    )
    return ProjectSnapshot(
        root=root,
        paths=tuple(paths),
        commit_message=commit_message,
        commit_ref=commit_ref,
    )


def _collect_paths(root: Path, patterns: tuple[str, ...]) -> list[str]:
    def _raise(exc: OSError) -> None:
        raise CollectionError(f"cannot read directory {exc.filename}: {exc.strerror}") from exc

    collected: list[str] = []
    for current, dirnames, filenames in os.walk(root, onerror=_raise):
        rel_dir = PurePosixPath(Path(current).relative_to(root).as_posix())
        kept: list[str] = []
        for name in sorted(dirnames):
            rel_path = (rel_dir / name).as_posix()
            if _is_excluded_dir(name, rel_path, patterns):
                logger.debug("Skipping excluded directory %s", rel_path)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            rel_path = (rel_dir / name).as_posix()
            if any(fnmatch.fnmatch(rel_path, pattern) for pattern in patterns):
                continue
            collected.append(rel_path)
    return collected


def _is_excluded_dir(name: str, rel_path: str, patterns: tuple[str, ...]) -> bool:
    if name in DEFAULT_EXCLUDED_DIRS:
        return True
    return any(
        fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern)
        for pattern in patterns
    )


def _collect_commit(root: Path) -> tuple[str | None, str | None]:
    try:
        ensure_work_tree(root)
        head = get_head_revision(root)
        if head is None:
            logger.debug("Repository at %s has no commits yet", root)
            return (None, None)
        return (head, get_commit_message(root, head))
    except GitError as exc:
        raise CollectionError(f"cannot read commit metadata: {exc}") from exc
