"""Built-in git workflow rules, keyed on contributor count."""

from gitpolicy.rules.models import Action, PolicyRule

SOLO_COMMIT_DIRECT = PolicyRule(
    id="SOLO_COMMIT_DIRECT",
    name="Solo repository commits directly",
    min_contributors=0,
    max_contributors=1,
    expected_action=Action.COMMIT_DIRECT,
    message=(
        "Solo repository: commit directly to the default branch. "
        "Do not create branches unless explicitly requested."
    ),
    violation=(
        "Solo repository is on a non-default branch. Branch creation is "
        "forbidden unless explicitly requested; commit on the default branch."
    ),
)

TEAM_REQUIRE_BRANCH = PolicyRule(
    id="TEAM_REQUIRE_BRANCH",
    name="Team repository requires a branch",
    min_contributors=2,
    max_contributors=None,
    expected_action=Action.REQUIRE_BRANCH,
    message=(
        "Multiple contributors: work happens on a feature branch, "
        "never directly on the default branch."
    ),
    violation=(
        "Multiple contributors and the default branch is checked out. "
        "A branch is required; create a feature branch before committing."
    ),
)

ALL_BUILTIN_RULES: list[PolicyRule] = [SOLO_COMMIT_DIRECT, TEAM_REQUIRE_BRANCH]
