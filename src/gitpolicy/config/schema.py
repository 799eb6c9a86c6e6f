"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class PolicyConfig:
    default_branch: str = ""  # empty = auto-detect
    remote: str = "origin"


@dataclass
class ContributorsConfig:
    ignore: List[str] = field(default_factory=list)  # globs over "Name <email>"


@dataclass
class GitConfig:
    timeout: int = 10


@dataclass
class OutputConfig:
    format: Optional[OutputFormat] = None  # unset = json in CI, terminal otherwise
    show_summary: bool = True


@dataclass
class GitPolicyConfig:
    version: str = "1.0"
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    contributors: ContributorsConfig = field(default_factory=ContributorsConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
