"""Rule registry: built-in and custom rules, partition validation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from gitpolicy.git.models import RepositoryState
from gitpolicy.rules.models import Action, PolicyRule

CUSTOM_RULES_DIRNAME = ".gitpolicy-rules"


class RuleTableError(Exception):
    """Raised when the rule table is malformed or not a partition."""


class RuleRegistry:
    """Central store for the policy table."""

    def __init__(self) -> None:
        self._rules: Dict[str, PolicyRule] = {}

    # ---- registration ----

    def register(self, rule: PolicyRule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[PolicyRule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[PolicyRule]:
        """Rules ordered by the contributor counts they cover."""
        return sorted(self._rules.values(), key=lambda r: r.min_contributors)

    def get(self, rule_id: str) -> Optional[PolicyRule]:
        return self._rules.get(rule_id)

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, state: RepositoryState) -> PolicyRule:
        """Return the single rule whose condition holds for *state*."""
        hits = [r for r in self.all_rules if r.applies_to(state)]
        if len(hits) != 1:
            ids = ", ".join(r.id for r in hits) or "none"
            raise RuleTableError(
                f"expected exactly one rule for {state.contributor_count} "
                f"contributor(s), matched: {ids}"
            )
        return hits[0]

    # ---- validation ----

    def validate(self) -> None:
        """Check that rule ranges partition [0, inf) with no gap or overlap."""
        rules = self.all_rules
        if not rules:
            raise RuleTableError("rule table is empty")

        expected_min = 0
        for rule in rules:
            if rule.min_contributors < 0:
                raise RuleTableError(f"{rule.id}: min_contributors must be >= 0")
            if rule.max_contributors is not None and rule.max_contributors < rule.min_contributors:
                raise RuleTableError(f"{rule.id}: max_contributors is below min_contributors")
            if expected_min is None:
                raise RuleTableError(f"{rule.id}: follows an unbounded rule")
            if rule.min_contributors != expected_min:
                kind = "overlaps" if rule.min_contributors < expected_min else "leaves a gap before"
                raise RuleTableError(
                    f"{rule.id} {kind} {rule.min_contributors} contributor(s)"
                )
            expected_min = None if rule.max_contributors is None else rule.max_contributors + 1

        if expected_min is not None:
            raise RuleTableError(
                f"no rule covers {expected_min} or more contributors"
            )

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleTableError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(_rule_from_mapping(entry, path))
            count += 1
        return count


def _rule_from_mapping(entry: object, path: Path) -> PolicyRule:
    if not isinstance(entry, dict):
        raise RuleTableError(f"{path}: each rule must be a mapping")
    try:
        rule_id = str(entry["id"])
        action = Action(str(entry["action"]).lower())
        min_count = int(entry.get("min_contributors", 0))
        max_raw = entry.get("max_contributors")
        max_count = None if max_raw is None else int(max_raw)
    except KeyError as exc:
        raise RuleTableError(f"{path}: rule is missing {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise RuleTableError(f"{path}: {exc}") from exc

    message = entry.get("message", "")
    return PolicyRule(
        id=rule_id,
        name=entry.get("name", rule_id),
        min_contributors=min_count,
        max_contributors=max_count,
        expected_action=action,
        message=message,
        violation=entry.get("violation", message),
    )


def build_registry(repo_root: Optional[Path] = None) -> RuleRegistry:
    """Create a validated registry: built-ins, overridden by repo rule files."""
    from gitpolicy.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)

    if repo_root is not None:
        registry.load_custom_rules(repo_root / CUSTOM_RULES_DIRNAME)

    registry.validate()
    return registry
