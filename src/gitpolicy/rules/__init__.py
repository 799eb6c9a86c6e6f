"""Rule table: models, registry, built-in rules."""

from gitpolicy.rules.models import Action, PolicyRule
from gitpolicy.rules.registry import RuleRegistry, RuleTableError, build_registry

__all__ = ["Action", "PolicyRule", "RuleRegistry", "RuleTableError", "build_registry"]
