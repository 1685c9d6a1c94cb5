"""Git subprocess wrapper — repo root, current branch, diffs, tracked files."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


# Keep non-ASCII paths literal in diff headers and ls-files output.
_GIT_OPTIONS = ["-c", "core.quotePath=false"]


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure.

    Output is decoded from bytes so a lone CR inside a file is not turned
    into a line break.
    """
    try:
        result = subprocess.run(
            ["git", *_GIT_OPTIONS, *args],
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(f"git {args[0]} failed: {stderr or f'exit status {result.returncode}'}")
    return result.stdout.decode("utf-8", errors="replace")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_current_branch(repo_root: Path) -> str:
    """Return the checked-out branch name. Raises GitError on detached HEAD."""
    out = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_root).strip()
    if not out or out == "HEAD":
        raise GitError("HEAD is detached; pass a branch name explicitly")
    return out


def resolve_branch_name(repo_root: Path) -> str:
    """Return the branch under test, preferring CI-provided names.

    CI checkouts are usually detached, so ``GITHUB_HEAD_REF`` (pull requests)
    and ``GITHUB_REF_NAME`` (pushes) win over asking git.
    """
    for var in ("GITHUB_HEAD_REF", "GITHUB_REF_NAME"):
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return get_current_branch(repo_root)


def get_staged_diff(repo_root: Path) -> str:
    """Return the unified diff of staged changes (--cached)."""
    return _run_git(
        ["diff", "--cached", "--unified=0", "--no-color", "--no-ext-diff"],
        cwd=repo_root,
    )


def get_range_diff(repo_root: Path, base: str, head: str = "HEAD") -> str:
    """Return the unified diff between two commits (CI mode)."""
    return _run_git(
        ["diff", f"{base}..{head}", "--unified=0", "--no-color", "--no-ext-diff"],
        cwd=repo_root,
    )


def get_tracked_files(repo_root: Path) -> list[str]:
    """Return repo-relative paths of every tracked file."""
    output = _run_git(["ls-files", "-z"], cwd=repo_root)
    return [p for p in output.split("\0") if p]
