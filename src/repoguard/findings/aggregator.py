"""Turn raw matches into numbered findings and apply the severity gate."""

from __future__ import annotations

from typing import Dict, List

from repoguard.config.schema import severity_at_or_above
from repoguard.findings.models import Finding, RawFinding


def gate(
    raw_findings: List[RawFinding],
    fail_on: str,
    descriptions: Dict[str, str] | None = None,
) -> List[Finding]:
    """Number *raw_findings* in scan order and mark those at or above *fail_on*.

    Overlapping matches from different rules are kept apart: every match
    the scanner reported becomes its own finding.
    """
    descriptions = descriptions or {}
    return [
        Finding(
            id=f"FINDING-{n:03d}",
            rule_id=raw.rule_id,
            label=raw.label,
            severity=raw.severity,
            file=raw.file,
            line_no=raw.line_no,
            column=raw.column,
            matched_value=raw.matched_value,
            description=descriptions.get(raw.rule_id, ""),
            is_blocking=severity_at_or_above(raw.severity, fail_on),
        )
        for n, raw in enumerate(raw_findings, 1)
    ]
