"""Scanner — engine, file collection, suppression."""

from repoguard.scanner.engine import ScanError, scan_diff, scan_paths, scan_text
from repoguard.scanner.suppression import RepoGuardIgnore, Suppression, SuppressionChecker

__all__ = [
    "RepoGuardIgnore",
    "ScanError",
    "Suppression",
    "SuppressionChecker",
    "scan_diff",
    "scan_paths",
    "scan_text",
]
