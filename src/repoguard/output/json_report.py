"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from repoguard.findings.models import ScanResult
from repoguard.findings.redactor import redact

REPORT_VERSION = "1.0"


def to_dict(result: ScanResult, *, ci_mode: bool = True) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    return {
        "version": REPORT_VERSION,
        "scanned_files": result.scanned_files,
        "total_findings": result.total_findings,
        "blocked": result.blocked,
        "truncated": result.truncated,
        "findings": [
            {
                "id": f.id,
                "rule": f.rule_id,
                "label": f.label,
                "severity": f.severity,
                "file": f.file,
                "line": f.line_no,
                "column": f.column,
                "value": redact(f.matched_value, ci_mode=ci_mode),
                "description": f.description,
                "is_blocking": f.is_blocking,
            }
            for f in result.findings
        ],
        "suppressed": [
            {"rule": s.rule_id, "file": s.file, "line": s.line_no, "reason": s.reason, "source": s.source}
            for s in result.suppressed
        ],
        "skipped_files": [{"file": s.path, "reason": s.reason} for s in result.skipped_files],
        "scan_duration_ms": result.scan_duration_ms,
    }


def render(result: ScanResult, *, ci_mode: bool = True) -> str:
    return json.dumps(to_dict(result, ci_mode=ci_mode), indent=2)
