"""Finding models, severity gating, and redaction."""

from repoguard.findings.aggregator import gate
from repoguard.findings.models import Finding, RawFinding, ScanResult
from repoguard.findings.redactor import redact

__all__ = ["Finding", "RawFinding", "ScanResult", "gate", "redact"]
