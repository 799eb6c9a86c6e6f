"""Load and merge configuration from .gitpolicy.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitpolicy.config.schema import (
    OUTPUT_FORMATS,
    ContributorsConfig,
    GitConfig,
    GitPolicyConfig,
    OutputConfig,
    PolicyConfig,
)

CONFIG_FILENAME = ".gitpolicy.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: GitPolicyConfig) -> None:
    if cfg.output.format is not None and cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got {cfg.output.format!r}"
        )
    if not isinstance(cfg.git.timeout, int) or cfg.git.timeout <= 0:
        raise ConfigError(f"git.timeout must be a positive integer, got {cfg.git.timeout!r}")
    if not isinstance(cfg.policy.default_branch, str):
        raise ConfigError("policy.default_branch must be a string")
    if not isinstance(cfg.contributors.ignore, list):
        raise ConfigError("contributors.ignore must be a list of patterns")


def _merge_env_overrides(cfg: GitPolicyConfig) -> None:
    """Apply GITPOLICY_* environment variable overrides."""
    if val := os.environ.get("GITPOLICY_DEFAULT_BRANCH"):
        cfg.policy.default_branch = val.strip()
    if val := os.environ.get("GITPOLICY_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("GITPOLICY_GIT_TIMEOUT"):
        try:
            timeout = int(val)
        except ValueError:
            timeout = 0
        if timeout > 0:
            cfg.git.timeout = timeout
    if val := os.environ.get("GITPOLICY_IGNORE_AUTHORS"):
        cfg.contributors.ignore.extend(p.strip() for p in val.split(",") if p.strip())


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> GitPolicyConfig:
    """Load, validate, and return a GitPolicyConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = GitPolicyConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = GitPolicyConfig(
                version=str(raw.get("version", "1.0")),
                policy=_build_section(raw, PolicyConfig, "policy"),
                contributors=_build_section(raw, ContributorsConfig, "contributors"),
                git=_build_section(raw, GitConfig, "git"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
