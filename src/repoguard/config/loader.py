"""Load and merge configuration from .repoguard.toml and env vars."""

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

from repoguard.config.schema import (
    OUTPUT_FORMATS,
    SEVERITY_ORDER,
    BranchConfig,
    CIConfig,
    IgnoreConfig,
    OutputConfig,
    RepoGuardConfig,
    RulesConfig,
    ScanConfig,
)

CONFIG_FILENAME = ".repoguard.toml"


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


def _split_list(value: str, sep: str = ",") -> list[str]:
    return [item.strip() for item in value.split(sep) if item.strip()]


def _merge_env_overrides(cfg: RepoGuardConfig) -> None:
    """Apply REPOGUARD_* environment variable overrides."""
    if val := os.environ.get("REPOGUARD_FAIL_ON"):
        if val in SEVERITY_ORDER:
            cfg.scan.fail_on = val  # type: ignore[assignment]
    if val := os.environ.get("REPOGUARD_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("REPOGUARD_DISABLE_RULES"):
        cfg.rules.disable.extend(_split_list(val))
    if val := os.environ.get("REPOGUARD_IGNORE_PATHS"):
        cfg.ignore.paths.extend(_split_list(val, os.pathsep))
    if val := os.environ.get("REPOGUARD_BRANCH_PREFIXES"):
        prefixes = _split_list(val)
        if prefixes:
            cfg.branches.prefixes = prefixes
    if val := os.environ.get("REPOGUARD_MAX_FINDINGS"):
        try:
            cfg.ci.max_findings = int(val)
        except ValueError:
            pass


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(raw).__name__}")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: RepoGuardConfig) -> None:
    if cfg.scan.fail_on not in SEVERITY_ORDER:
        raise ConfigError(f"Invalid scan.fail_on: {cfg.scan.fail_on!r}")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")
    if not cfg.branches.prefixes:
        raise ConfigError("branches.prefixes must not be empty")
    for prefix in cfg.branches.prefixes:
        if not isinstance(prefix, str) or not prefix or "/" in prefix:
            raise ConfigError(f"Invalid branch prefix: {prefix!r}")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> RepoGuardConfig:
    """Load, validate, and return a RepoGuardConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = RepoGuardConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = RepoGuardConfig(
            version=str(raw.get("version", "1.0")),
            branches=_build_section(raw, BranchConfig, "branches"),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
            rules=_build_section(raw, RulesConfig, "rules"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            ci=_build_section(raw, CIConfig, "ci"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
