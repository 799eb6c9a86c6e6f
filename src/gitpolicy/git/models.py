"""Repository metadata snapshot."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RepositoryState:
    """Point-in-time view of the repository for one evaluation run.

    ``contributor_count`` is ``None`` when it could not be determined.
    """

    current_branch: str
    default_branch: str
    contributor_count: Optional[int]
    has_uncommitted_changes: bool = False

    @property
    def on_default_branch(self) -> bool:
        return self.current_branch == self.default_branch

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
