"""Evaluation result model."""

from __future__ import annotations

from dataclasses import dataclass

from gitpolicy.rules.models import Action


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one RepositoryState against the policy table."""

    rule_id: str
    satisfied: bool
    message: str
    expected_action: Action
