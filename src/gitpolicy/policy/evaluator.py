"""Repository policy evaluator.

``evaluate`` is a pure function of its input: it performs no I/O and the
same RepositoryState always yields an equal EvaluationResult.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from gitpolicy.git.models import RepositoryState
from gitpolicy.policy.models import EvaluationResult
from gitpolicy.rules.registry import RuleRegistry, build_registry


class InvalidStateError(Exception):
    """Raised when a RepositoryState snapshot is malformed."""


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    """The built-in rule table, built once per process."""
    return build_registry()


def validate_state(state: RepositoryState) -> None:
    count = state.contributor_count
    if count is None:
        raise InvalidStateError("contributor count could not be determined")
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidStateError(f"contributor count must be an integer, got {count!r}")
    if count < 0:
        raise InvalidStateError(f"contributor count must be >= 0, got {count}")
    for field_name in ("current_branch", "default_branch"):
        value = getattr(state, field_name)
        if not isinstance(value, str) or not value.strip():
            raise InvalidStateError(f"{field_name} must be a non-empty string")


def evaluate(
    state: RepositoryState,
    registry: Optional[RuleRegistry] = None,
) -> EvaluationResult:
    """Evaluate *state* against the rule table.

    Raises InvalidStateError for a malformed snapshot.
    """
    validate_state(state)
    if registry is None:
        registry = default_registry()
    rule = registry.match(state)
    satisfied = rule.is_satisfied_by(state)
    return EvaluationResult(
        rule_id=rule.id,
        satisfied=satisfied,
        message=rule.message if satisfied else rule.violation,
        expected_action=rule.expected_action,
    )
