"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from gitpolicy.git.models import RepositoryState
from gitpolicy.policy.models import EvaluationResult


def to_dict(result: EvaluationResult, state: RepositoryState) -> Dict[str, Any]:
    """Convert an evaluation to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "rule_id": result.rule_id,
        "satisfied": result.satisfied,
        "expected_action": result.expected_action.value,
        "message": result.message,
        "state": state.to_dict(),
    }


def render(result: EvaluationResult, state: RepositoryState) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, state), indent=2)
