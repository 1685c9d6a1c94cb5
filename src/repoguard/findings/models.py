"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from repoguard.git.models import FileSkipped
    from repoguard.scanner.suppression import Suppression


@dataclass(frozen=True)
class RawFinding:
    """One regex match, as produced by the scanner."""

    rule_id: str
    label: str
    severity: str
    file: str
    line_no: int
    column: int
    matched_value: str


@dataclass
class Finding:
    """A numbered, severity-gated finding for output."""

    id: str  # e.g. FINDING-001
    rule_id: str
    label: str
    severity: str
    file: str
    line_no: int
    column: int
    matched_value: str
    description: str = ""
    is_blocking: bool = True


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[Finding] = field(default_factory=list)
    suppressed: List["Suppression"] = field(default_factory=list)
    skipped_files: List["FileSkipped"] = field(default_factory=list)
    scanned_files: int = 0
    blocked: bool = False
    truncated: bool = False  # stopped early by ci.max_findings
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def blocking_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.is_blocking]
