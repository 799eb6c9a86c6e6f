"""Git subprocess wrapper: branches, authorship history, working-tree status."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

DEFAULT_TIMEOUT = 10


class MetadataUnavailableError(Exception):
    """Raised when git is unavailable or a metadata query fails."""


def _run_git(
    args: list[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
    *,
    allow_failure: bool = False,
) -> str:
    """Run a git command and return stdout.

    Raises MetadataUnavailableError when git is missing, times out, or
    exits non-zero. With *allow_failure* a non-zero exit yields "" instead.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise MetadataUnavailableError("git is not installed or not on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise MetadataUnavailableError(
            f"git command timed out after {timeout}s: git {' '.join(args)}"
        ) from exc

    if result.returncode != 0:
        if allow_failure:
            return ""
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise MetadataUnavailableError(f"git error: git {' '.join(args)}: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None, timeout: int = DEFAULT_TIMEOUT) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, timeout=timeout)
    return Path(out.strip())


def get_current_branch(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Return the checked-out branch name. Detached HEAD is an error."""
    out = _run_git(["symbolic-ref", "--short", "HEAD"], cwd=repo_root, timeout=timeout)
    branch = out.strip()
    if not branch:
        raise MetadataUnavailableError("could not determine the current branch")
    return branch


def branch_exists(repo_root: Path, branch: str, timeout: int = DEFAULT_TIMEOUT) -> bool:
    out = _run_git(
        ["rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
        cwd=repo_root,
        timeout=timeout,
        allow_failure=True,
    )
    return bool(out.strip())


def get_remote_default_branch(
    repo_root: Path, remote: str = "origin", timeout: int = DEFAULT_TIMEOUT
) -> Optional[str]:
    """Return the branch ``refs/remotes/<remote>/HEAD`` points at, if any."""
    out = _run_git(
        ["symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD"],
        cwd=repo_root,
        timeout=timeout,
        allow_failure=True,
    ).strip()
    if not out:
        return None
    prefix = f"{remote}/"
    return out[len(prefix):] if out.startswith(prefix) else out


def get_configured_default_branch(
    repo_root: Path, timeout: int = DEFAULT_TIMEOUT
) -> Optional[str]:
    """Return ``init.defaultBranch`` if set."""
    out = _run_git(
        ["config", "--get", "init.defaultBranch"],
        cwd=repo_root,
        timeout=timeout,
        allow_failure=True,
    ).strip()
    return out or None


def has_history(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> bool:
    """True if any ref reaches a commit, even when HEAD itself is unborn."""
    out = _run_git(
        ["rev-list", "--all", "--max-count=1"],
        cwd=repo_root,
        timeout=timeout,
    )
    return bool(out.strip())


def get_commit_authors(
    repo_root: Path, timeout: int = DEFAULT_TIMEOUT
) -> List[Tuple[str, str]]:
    """Return (name, email) for every commit reachable from any ref.

    A repository without any commits yields an empty list.
    """
    if not has_history(repo_root, timeout=timeout):
        return []
    out = _run_git(
        ["log", "--all", "--format=%aN%x1f%aE"],
        cwd=repo_root,
        timeout=timeout,
    )
    authors: List[Tuple[str, str]] = []
    for line in out.splitlines():
        if not line.strip():
            continue
        name, _, email = line.partition("\x1f")
        authors.append((name.strip(), email.strip()))
    return authors


def has_uncommitted_changes(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> bool:
    """True if the working tree or index differs from HEAD (untracked included)."""
    out = _run_git(["status", "--porcelain"], cwd=repo_root, timeout=timeout)
    return bool(out.strip())


def get_hooks_dir(repo_root: Path, timeout: int = DEFAULT_TIMEOUT) -> Path:
    """Return the hooks directory, honouring ``core.hooksPath`` and worktrees."""
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root, timeout=timeout)
    path = Path(out.strip())
    return path if path.is_absolute() else repo_root / path
