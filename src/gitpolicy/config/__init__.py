"""Configuration loading, schema, and defaults."""

from gitpolicy.config.loader import ConfigError, load_config
from gitpolicy.config.schema import OUTPUT_FORMATS, GitPolicyConfig

__all__ = [
    "ConfigError",
    "GitPolicyConfig",
    "OUTPUT_FORMATS",
    "load_config",
]
