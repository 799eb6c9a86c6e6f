"""Policy evaluation."""

from gitpolicy.policy.evaluator import InvalidStateError, evaluate, validate_state
from gitpolicy.policy.models import EvaluationResult

__all__ = ["EvaluationResult", "InvalidStateError", "evaluate", "validate_state"]
