"""SARIF v2.1.0 reporter for code-scanning uploads.

Matched values are always redacted in SARIF output.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from repoguard import __version__
from repoguard.findings.models import ScanResult
from repoguard.findings.redactor import REDACTED

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"

_LEVEL = {
    "critical": "error",
    "high": "error",
    "medium": "warning",
    "low": "note",
}

# GitHub code scanning reads this 0.0-10.0 score from rule properties.
_SECURITY_SEVERITY = {
    "critical": "9.5",
    "high": "7.5",
    "medium": "5.0",
    "low": "2.0",
}


def to_dict(result: ScanResult) -> Dict[str, Any]:
    rules: List[Dict[str, Any]] = []
    seen: set[str] = set()
    results: List[Dict[str, Any]] = []

    for f in result.findings:
        level = _LEVEL.get(f.severity, "warning")
        if f.rule_id not in seen:
            seen.add(f.rule_id)
            rules.append({
                "id": f.rule_id,
                "name": f.label,
                "shortDescription": {"text": f.label},
                "fullDescription": {"text": f.description or f.label},
                "defaultConfiguration": {"level": level},
                "properties": {"security-severity": _SECURITY_SEVERITY.get(f.severity, "5.0")},
            })
        results.append({
            "ruleId": f.rule_id,
            "level": level,
            "message": {"text": f"{f.label} pattern matched {REDACTED}"},
            "locations": [{
                "physicalLocation": {
                    "artifactLocation": {"uri": f.file},
                    "region": {
                        "startLine": max(f.line_no, 1),
                        "startColumn": max(f.column, 1),
                        "snippet": {"text": REDACTED},
                    },
                },
            }],
        })

    return {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [{
            "tool": {
                "driver": {
                    "name": "repoguard",
                    "version": __version__,
                    "rules": rules,
                },
            },
            "results": results,
        }],
    }


def render(result: ScanResult) -> str:
    return json.dumps(to_dict(result), indent=2)
