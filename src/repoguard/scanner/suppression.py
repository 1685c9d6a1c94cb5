"""Inline suppression comments and the .repoguardignore file.

Inline markers:
  - ``# repoguard-ignore`` ending line N suppresses every rule on N.
  - ``# repoguard-ignore[PASSWORD,TOKEN]`` suppresses only those rules.
  - A marker on a comment-only line also covers line N+1, if it was
    registered.
  - ``# nosec`` is accepted as a synonym.

.repoguardignore:
  - One path glob per line; ``#`` starts a comment.
  - ``rule:RULE_ID glob`` ignores the glob for that rule only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

IGNORE_FILENAME = ".repoguardignore"

_SUPPRESS_RE = re.compile(
    r"(?:#|//|/\*)\s*(?:repoguard-ignore|nosec)"
    r"(?:\[([A-Za-z0-9_,\s]+)\])?"
    r"\s*(?:\*/)?\s*$"
)
_COMMENT_PREFIXES = ("#", "//", "/*")

# None = every rule; otherwise the rule ids named in brackets
Scope = Optional[FrozenSet[str]]


@dataclass(frozen=True)
class Suppression:
    """Audit record of a match that was not reported."""

    rule_id: str
    file: str
    line_no: int
    reason: str  # 'inline' | 'next-line'
    source: str  # the marker text, e.g. '# repoguard-ignore[PASSWORD]'


def parse_inline_suppression(line_content: str) -> Tuple[bool, Scope]:
    """Return ``(has_marker, scope)`` for one line of source."""
    m = _SUPPRESS_RE.search(line_content)
    if m is None:
        return False, None
    if m.group(1):
        return True, frozenset(r.strip() for r in m.group(1).split(",") if r.strip())
    return True, None


def is_pure_comment(line_content: str) -> bool:
    return line_content.strip().startswith(_COMMENT_PREFIXES)


class SuppressionChecker:
    """Answers "is this match suppressed?" for lines registered per file."""

    def __init__(self) -> None:
        # file -> line_no -> (reason, scope, marker)
        self._marks: Dict[str, Dict[int, Tuple[str, Scope, str]]] = {}

    def register_lines(self, file: str, lines: Iterable[Tuple[int, str]]) -> None:
        """Pre-scan ``(line_no, content)`` pairs, in file order, for markers."""
        marks: Dict[int, Tuple[str, Scope, str]] = {}
        carry: Optional[Tuple[int, Scope, str]] = None

        for line_no, content in lines:
            found, scope = parse_inline_suppression(content)
            if carry is not None and carry[0] + 1 == line_no:
                marks[line_no] = ("next-line", carry[1], carry[2])
            carry = None
            if found:
                marker = _SUPPRESS_RE.search(content).group(0).strip()  # type: ignore[union-attr]
                marks[line_no] = ("inline", scope, marker)
                if is_pure_comment(content):
                    carry = (line_no, scope, marker)

        self._marks[file] = marks

    def is_suppressed(self, file: str, line_no: int, rule_id: str) -> Optional[Suppression]:
        entry = self._marks.get(file, {}).get(line_no)
        if entry is None:
            return None
        reason, scope, marker = entry
        if scope is not None and rule_id not in scope:
            return None
        return Suppression(rule_id=rule_id, file=file, line_no=line_no, reason=reason, source=marker)


class RepoGuardIgnore:
    """Parsed .repoguardignore file."""

    def __init__(self) -> None:
        self._global_patterns: List[str] = []
        self._rule_patterns: Dict[str, List[str]] = {}

    @classmethod
    def from_file(cls, path: Path) -> "RepoGuardIgnore":
        instance = cls()
        if not path.is_file():
            return instance
        with open(path, encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("rule:"):
                    parts = line.split(None, 1)
                    if len(parts) == 2:
                        rule_id = parts[0].removeprefix("rule:")
                        instance._rule_patterns.setdefault(rule_id, []).append(parts[1])
                    continue
                instance._global_patterns.append(line)
        return instance

    def is_ignored(self, filepath: str, rule_id: Optional[str] = None) -> bool:
        """True if *filepath* is ignored globally, or for *rule_id*."""
        if any(fnmatch(filepath, pat) for pat in self._global_patterns):
            return True
        if rule_id:
            return any(fnmatch(filepath, pat) for pat in self._rule_patterns.get(rule_id, []))
        return False
