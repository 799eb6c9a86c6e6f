"""Policy rule data model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gitpolicy.git.models import RepositoryState


class Action(str, Enum):
    COMMIT_DIRECT = "commit_direct"
    REQUIRE_BRANCH = "require_branch"


@dataclass(frozen=True)
class PolicyRule:
    """One row of the policy table.

    A rule covers the contributor counts ``min_contributors`` through
    ``max_contributors`` inclusive; ``None`` as the upper bound is unbounded.
    ``message`` explains the rule, ``violation`` is reported when the
    repository does not conform.
    """

    id: str
    name: str
    min_contributors: int
    max_contributors: Optional[int]
    expected_action: Action
    message: str
    violation: str

    def covers(self, count: int) -> bool:
        if count < self.min_contributors:
            return False
        return self.max_contributors is None or count <= self.max_contributors

    def applies_to(self, state: RepositoryState) -> bool:
        """Condition predicate: does this rule govern *state*?"""
        count = state.contributor_count
        if count is None:
            return False
        # 0 means the history had no authors; treat the repository as solo
        return self.covers(max(count, 1))

    def is_satisfied_by(self, state: RepositoryState) -> bool:
        if self.expected_action is Action.COMMIT_DIRECT:
            return state.on_default_branch
        return not state.on_default_branch

    @property
    def range_label(self) -> str:
        if self.max_contributors is None:
            return f"{self.min_contributors}+"
        if self.max_contributors == self.min_contributors:
            return str(self.min_contributors)
        return f"{self.min_contributors}-{self.max_contributors}"
