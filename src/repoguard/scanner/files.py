"""Collect files from paths and read them as text."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

_SNIFF_BYTES = 8192
_SKIP_DIRS = {".git", ".hg", ".svn", "__pycache__", "node_modules", ".venv", "venv"}


def iter_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield files under *paths*, walking directories in sorted order.

    Raises FileNotFoundError for a path that does not exist.
    """
    for path in paths:
        if path.is_file():
            yield path
        elif path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and not _SKIP_DIRS.intersection(child.relative_to(path).parts):
                    yield child
        else:
            raise FileNotFoundError(str(path))


def read_text(path: Path, max_bytes: int) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(text, None)``, or ``(None, reason)`` when the file is skipped."""
    try:
        if path.stat().st_size > max_bytes:
            return None, "oversized"
        data = path.read_bytes()
    except OSError:
        return None, "unreadable"
    if b"\0" in data[:_SNIFF_BYTES]:
        return None, "binary"
    return data.decode("utf-8", errors="replace").lstrip("\ufeff"), None


def numbered_lines(text: str) -> List[Tuple[int, str]]:
    """Split on ``\\n`` only and number from 1, dropping a CR before each break.

    ``str.splitlines`` also breaks on form feeds, U+2028 and friends, which
    editors and git do not count as line ends.
    """
    if text.endswith("\n"):
        text = text[:-1]
    if not text:
        return []
    return [
        (line_no, line[:-1] if line.endswith("\r") else line)
        for line_no, line in enumerate(text.split("\n"), 1)
    ]
