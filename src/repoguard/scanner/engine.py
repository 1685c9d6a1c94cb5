"""Core scan engine.

``scan_text`` is the pure matcher: every rule, every line, every match.
``scan_diff`` and ``scan_paths`` feed it from a unified diff or from files
on disk and add ignores, suppressions and the severity gate.

Exception safety: an unexpected error inside the scan loop discards every
collected match before raising, so secret values never reach a traceback.
"""

from __future__ import annotations

import time
from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from repoguard.config.schema import RepoGuardConfig
from repoguard.findings.aggregator import gate
from repoguard.findings.models import RawFinding, ScanResult
from repoguard.git.diff_parser import DiffParser
from repoguard.git.models import AddedLine, DiffFile, FileSkipped, FileStatus
from repoguard.rules.models import Rule
from repoguard.rules.registry import RuleRegistry
from repoguard.scanner.files import iter_files, numbered_lines, read_text
from repoguard.scanner.suppression import (
    IGNORE_FILENAME,
    RepoGuardIgnore,
    Suppression,
    SuppressionChecker,
)


class ScanError(Exception):
    """Raised on scanner failure (never contains secret values)."""


def _match_line(line: str, rules: Sequence[Rule], file: str, line_no: int) -> Iterator[RawFinding]:
    for rule in rules:
        for m in rule.compiled_pattern.finditer(line):
            yield RawFinding(
                rule_id=rule.id,
                label=rule.label,
                severity=rule.severity,
                file=file,
                line_no=line_no,
                column=m.start() + 1,
                matched_value=m.group(0),
            )


def scan_text(text: str, rules: Sequence[Rule], *, file: str = "<text>") -> List[RawFinding]:
    """Match every rule against every line of *text*.

    Rules are evaluated independently, so one line can yield several
    findings, including overlapping ones. Matches are not checked for
    plausibility: example and test values are reported like real ones.
    """
    findings: List[RawFinding] = []
    for line_no, line in numbered_lines(text):
        findings.extend(_match_line(line, rules, file, line_no))
    return findings


class _ScanRun:
    """Mutable state for one scan: ignores, suppressions, collected matches."""

    def __init__(self, config: RepoGuardConfig, registry: RuleRegistry, repo_root: Path) -> None:
        self.config = config
        self.rules = registry.enabled_rules()
        self.descriptions = {r.id: r.description for r in registry.all_rules}
        self.ignorefile = RepoGuardIgnore.from_file(repo_root / IGNORE_FILENAME)
        self.raw: List[RawFinding] = []
        self.suppressed: List[Suppression] = []
        self.skipped: List[FileSkipped] = []
        self.scanned: Set[str] = set()
        self.truncated = False
        self.start = time.perf_counter()

    def is_ignored(self, path: str) -> bool:
        if any(fnmatch(path, g) for g in self.config.ignore.paths) or self.ignorefile.is_ignored(path):
            self.skipped.append(FileSkipped(path=path, reason="ignored"))
            return True
        return False

    def scan_lines(self, path: str, lines: List[Tuple[int, str]]) -> None:
        self.scanned.add(path)
        checker = SuppressionChecker()
        checker.register_lines(path, lines)
        rules = [r for r in self.rules if not self.ignorefile.is_ignored(path, r.id)]
        limit = self.config.ci.max_findings

        for line_no, content in lines:
            for raw in _match_line(content, rules, path, line_no):
                sup = checker.is_suppressed(path, line_no, raw.rule_id)
                if sup is not None:
                    self.suppressed.append(sup)
                    continue
                self.raw.append(raw)
                if limit is not None and len(self.raw) >= limit:
                    self.truncated = True
                    return

    def result(self) -> ScanResult:
        findings = gate(self.raw, self.config.scan.fail_on, self.descriptions)
        elapsed = (time.perf_counter() - self.start) * 1000
        return ScanResult(
            findings=findings,
            suppressed=self.suppressed,
            skipped_files=self.skipped,
            scanned_files=len(self.scanned),
            blocked=any(f.is_blocking for f in findings),
            truncated=self.truncated,
            scan_duration_ms=round(elapsed, 2),
        )

    def scrub(self) -> ScanError:
        count = len(self.raw)
        self.raw.clear()
        self.suppressed.clear()
        return ScanError(
            f"Internal scanner error after {count} findings. "
            "Matched values have been discarded."
        )


def scan_diff(
    diff_text: str,
    config: RepoGuardConfig,
    registry: RuleRegistry,
    repo_root: Path,
) -> ScanResult:
    """Scan the added lines of a unified diff."""
    run = _ScanRun(config, registry, repo_root)
    added: Dict[str, List[Tuple[int, str]]] = {}
    ignored: Set[str] = set()

    try:
        for item in DiffParser(diff_text).parse():
            if isinstance(item, FileSkipped):
                run.skipped.append(item)
            elif isinstance(item, DiffFile):
                if run.is_ignored(item.path):
                    ignored.add(item.path)
                elif item.status != FileStatus.DELETED:
                    added.setdefault(item.path, [])
            elif isinstance(item, AddedLine) and item.file not in ignored:
                added.setdefault(item.file, []).append((item.line_no, item.content))

        for path, lines in added.items():
            run.scan_lines(path, lines)
            if run.truncated:
                break
    except ScanError:
        raise
    except Exception:
        raise run.scrub() from None

    return run.result()


def _display_path(path: Path, repo_root: Path) -> str:
    try:
        return path.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def scan_paths(
    paths: Iterable[Path],
    config: RepoGuardConfig,
    registry: RuleRegistry,
    repo_root: Path,
    *,
    tracked: Iterable[Path] = (),
) -> ScanResult:
    """Scan whole files; directories are walked recursively.

    *paths* must exist. *tracked* comes from the git index, where a file
    deleted in the working tree is still listed; those are skipped as
    ``missing``.
    """
    run = _ScanRun(config, registry, repo_root)
    max_bytes = config.scan.max_file_size_kb * 1024
    targets = list(paths)
    for path in tracked:
        if path.exists():
            targets.append(path)
        else:
            run.skipped.append(FileSkipped(path=_display_path(path, repo_root), reason="missing"))

    try:
        for path in iter_files(targets):
            display = _display_path(path, repo_root)
            if run.is_ignored(display):
                continue
            text, reason = read_text(path, max_bytes)
            if text is None:
                run.skipped.append(FileSkipped(path=display, reason=reason or "unreadable"))
                continue
            run.scan_lines(display, numbered_lines(text))
            if run.truncated:
                break
    except FileNotFoundError as exc:
        raise ScanError(f"Path not found: {exc}") from None
    except ScanError:
        raise
    except Exception:
        raise run.scrub() from None

    return run.result()
