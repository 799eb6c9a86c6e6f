"""Build a RepositoryState by querying git."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from gitpolicy.config.schema import GitPolicyConfig
from gitpolicy.git.adapter import (
    MetadataUnavailableError,
    branch_exists,
    get_commit_authors,
    get_configured_default_branch,
    get_current_branch,
    get_remote_default_branch,
    has_history,
    has_uncommitted_changes,
)
from gitpolicy.git.models import RepositoryState

_FALLBACK_DEFAULTS = ("main", "master")


def count_contributors(
    authors: Iterable[Tuple[str, str]],
    ignore: Optional[List[str]] = None,
) -> int:
    """Count distinct authors, keyed by lower-cased email (name if no email).

    Authors whose ``Name <email>`` matches any *ignore* glob are skipped.
    """
    ignore = ignore or []
    seen: set[str] = set()
    for name, email in authors:
        ident = f"{name} <{email}>"
        if any(fnmatch(ident.lower(), pat.lower()) for pat in ignore):
            continue
        key = email.lower() or name.lower()
        if key:
            seen.add(key)
    return len(seen)


def resolve_default_branch(
    repo_root: Path,
    current_branch: str,
    config: GitPolicyConfig,
) -> str:
    """Resolve the canonical branch for *repo_root*.

    Order: configured override, remote HEAD, ``init.defaultBranch`` (if it
    exists locally), local main, local master. A repository with no commits
    yet uses the branch being built; otherwise an unresolved default is
    MetadataUnavailableError.
    """
    timeout = config.git.timeout
    if config.policy.default_branch:
        return config.policy.default_branch

    remote_head = get_remote_default_branch(repo_root, config.policy.remote, timeout=timeout)
    if remote_head:
        return remote_head

    configured = get_configured_default_branch(repo_root, timeout=timeout)
    if configured and branch_exists(repo_root, configured, timeout=timeout):
        return configured

    for candidate in _FALLBACK_DEFAULTS:
        if branch_exists(repo_root, candidate, timeout=timeout):
            return candidate

    if not has_history(repo_root, timeout=timeout):
        return current_branch

    raise MetadataUnavailableError(
        "could not determine the default branch; set policy.default_branch "
        "in .gitpolicy.toml or pass --default-branch"
    )


def collect_state(repo_root: Path, config: Optional[GitPolicyConfig] = None) -> RepositoryState:
    """Query git and return an immutable snapshot. Raises MetadataUnavailableError."""
    config = config or GitPolicyConfig()
    timeout = config.git.timeout

    current = get_current_branch(repo_root, timeout=timeout)
    default = resolve_default_branch(repo_root, current, config)
    authors = get_commit_authors(repo_root, timeout=timeout)
    dirty = has_uncommitted_changes(repo_root, timeout=timeout)

    return RepositoryState(
        current_branch=current,
        default_branch=default,
        contributor_count=count_contributors(authors, config.contributors.ignore),
        has_uncommitted_changes=dirty,
    )
