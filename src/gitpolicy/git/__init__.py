"""Git interface layer: adapter, snapshot collection, models."""

from gitpolicy.git.adapter import (
    MetadataUnavailableError,
    get_commit_authors,
    get_current_branch,
    get_repo_root,
    has_uncommitted_changes,
)
from gitpolicy.git.models import RepositoryState
from gitpolicy.git.snapshot import collect_state, count_contributors, resolve_default_branch

__all__ = [
    "MetadataUnavailableError",
    "RepositoryState",
    "collect_state",
    "count_contributors",
    "get_commit_authors",
    "get_current_branch",
    "get_repo_root",
    "has_uncommitted_changes",
    "resolve_default_branch",
]
