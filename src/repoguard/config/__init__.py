"""Configuration: ``.repoguard.toml`` sections, env overrides, starter files."""

from repoguard.config.loader import CONFIG_FILENAME, ConfigError, find_config_file, load_config
from repoguard.config.schema import (
    DEFAULT_EXEMPT,
    DEFAULT_PREFIXES,
    BranchConfig,
    RepoGuardConfig,
    Severity,
    severity_at_or_above,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXEMPT",
    "DEFAULT_PREFIXES",
    "BranchConfig",
    "ConfigError",
    "RepoGuardConfig",
    "Severity",
    "find_config_file",
    "load_config",
    "severity_at_or_above",
]
