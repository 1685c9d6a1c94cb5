"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Severity = Literal["low", "medium", "high", "critical"]
OutputFormat = Literal["terminal", "json", "sarif"]

SEVERITY_ORDER: dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
    "critical": 3,
}

OUTPUT_FORMATS = ("terminal", "json", "sarif")

DEFAULT_PREFIXES: tuple[str, ...] = (
    "feature",
    "bugfix",
    "hotfix",
    "docs",
    "test",
    "chore",
    "security",
)

DEFAULT_EXEMPT: tuple[str, ...] = ("main", "master", "develop")


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class BranchConfig:
    prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_PREFIXES))
    exempt: List[str] = field(default_factory=lambda: list(DEFAULT_EXEMPT))


@dataclass
class ScanConfig:
    fail_on: Severity = "high"  # fail on findings at or above this level
    max_file_size_kb: int = 512


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class IgnoreConfig:
    paths: List[str] = field(default_factory=list)


@dataclass
class CIConfig:
    annotation_format: Literal["github", "none"] = "none"
    full_redaction: bool = True
    max_findings: Optional[int] = None  # circuit-breaker: stop at N findings


@dataclass
class RepoGuardConfig:
    version: str = "1.0"
    branches: BranchConfig = field(default_factory=BranchConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    ci: CIConfig = field(default_factory=CIConfig)
