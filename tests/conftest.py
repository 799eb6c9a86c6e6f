"""Shared test fixtures: temp git repos and snapshot factories."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest

from gitpolicy.git.models import RepositoryState


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


def commit_as(repo: Path, name: str, email: str, filename: str = "file.txt") -> None:
    """Create a commit authored by *name* / *email*."""
    path = repo / filename
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{name}\n")
    git(repo, "add", filename)
    git(repo, "commit", "-m", f"change by {name}", "--author", f"{name} <{email}>")


@pytest.fixture
def make_state() -> Callable[..., RepositoryState]:
    """Factory for RepositoryState snapshots with sensible defaults."""

    def _make(
        contributor_count=1,
        current_branch: str = "main",
        default_branch: str = "main",
        has_uncommitted_changes: bool = False,
    ) -> RepositoryState:
        return RepositoryState(
            current_branch=current_branch,
            default_branch=default_branch,
            contributor_count=contributor_count,
            has_uncommitted_changes=has_uncommitted_changes,
        )

    return _make


@pytest.fixture
def empty_git_repo(tmp_path: Path, monkeypatch) -> Path:
    """A git repository on an unborn ``main`` branch with no commits."""
    for var in ("GITPOLICY_DEFAULT_BRANCH", "GITPOLICY_FORMAT", "GITPOLICY_GIT_TIMEOUT",
                "GITPOLICY_IGNORE_AUTHORS", "CI"):
        monkeypatch.delenv(var, raising=False)
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    return tmp_path


@pytest.fixture
def tmp_git_repo(empty_git_repo: Path) -> Path:
    """A single-author git repository with one commit on ``main``."""
    readme = empty_git_repo / "README.md"
    readme.write_text("# Test\n")
    git(empty_git_repo, "add", ".")
    git(empty_git_repo, "commit", "-m", "init")
    return empty_git_repo


@pytest.fixture
def team_git_repo(tmp_git_repo: Path) -> Path:
    """A repository with three distinct authors, on ``main``."""
    commit_as(tmp_git_repo, "Alice", "alice@example.com")
    commit_as(tmp_git_repo, "Bob", "bob@example.com")
    return tmp_git_repo


@pytest.fixture
def commit() -> Callable[..., None]:
    """Expose ``commit_as`` to tests."""
    return commit_as
