"""Git interface layer — adapter, diff parsing, models."""

from repoguard.git.adapter import (
    GitError,
    get_current_branch,
    get_range_diff,
    get_repo_root,
    get_staged_diff,
    get_tracked_files,
    resolve_branch_name,
)
from repoguard.git.diff_parser import DiffParser
from repoguard.git.models import AddedLine, DiffFile, FileSkipped, FileStatus

__all__ = [
    "AddedLine",
    "DiffFile",
    "DiffParser",
    "FileSkipped",
    "FileStatus",
    "GitError",
    "get_current_branch",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
    "get_tracked_files",
    "resolve_branch_name",
]
