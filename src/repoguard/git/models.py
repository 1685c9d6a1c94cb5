"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True, slots=True)
class AddedLine:
    """A line added by a diff, numbered as in the new file."""

    file: str
    line_no: int
    content: str


@dataclass(frozen=True)
class DiffFile:
    """A file touched by a diff."""

    path: str
    old_path: Optional[str] = None  # set on renames
    status: FileStatus = FileStatus.MODIFIED


@dataclass(frozen=True)
class FileSkipped:
    """A file left out of the scan, and why."""

    path: str
    reason: str  # binary | mode_only | oversized | ignored | unreadable | missing
