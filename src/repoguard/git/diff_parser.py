"""Unified diff parser.

Yields a DiffFile for every file header, then an AddedLine for every ``+``
line in its hunks. Binary files and mode-only changes come out as
FileSkipped. Removed lines, submodule pointers and the
``\\ No newline at end of file`` marker are dropped.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Union

from repoguard.git.models import AddedLine, DiffFile, FileSkipped, FileStatus

DiffItem = Union[DiffFile, AddedLine, FileSkipped]

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_DIFF_HEADER_RE = re.compile(
    rf"^diff --git (?P<old>{_QUOTED}|a/.*?) (?P<new>{_QUOTED}|b/.*)$"
)
_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")
_BINARY_RE = re.compile(r"^Binary files .* differ$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_SUBPROJECT_RE = re.compile(r"^\+Subproject commit [0-9a-f]+$")
_OLD_MODE_RE = re.compile(r"^old mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
# Extended header lines that carry nothing we need.
_IGNORED_HEADER_RE = re.compile(
    r"^(?:index [0-9a-f]+\.\.[0-9a-f]+|similarity index \d+%|dissimilarity index \d+%"
    r"|new mode \d+|copy from .+|copy to .+)"
)

_C_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, '"': 34, "\\": 92}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting: ``"caf\\303\\251.py"`` -> ``café.py``.

    Octal escapes are raw UTF-8 bytes, so the result is decoded as a whole.
    Unquoted paths are returned unchanged.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out.extend(ch.encode("utf-8"))
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        else:
            out.extend(nxt.encode("utf-8"))
            i += 2
    return out.decode("utf-8", errors="replace")


def _header_path(raw: str, prefix: str) -> str:
    path = unquote_path(raw)
    return path[len(prefix):] if path.startswith(prefix) else path


class DiffParser:
    """Parse unified diff text into DiffFile / AddedLine / FileSkipped items.

    Usage::

        for item in DiffParser(diff_text).parse():
            if isinstance(item, AddedLine):
                ...
    """

    def __init__(self, diff_text: str) -> None:
        # Only "\n" ends a diff line; form feeds and U+2028 are content.
        self._lines: List[str] = diff_text.split("\n")

    def files(self) -> List[str]:
        """Return the paths of every file the diff would have scanned."""
        return [item.path for item in self.parse() if isinstance(item, DiffFile)]

    def parse(self) -> Iterator[DiffItem]:
        idx = 0
        total = len(self._lines)
        current: Optional[str] = None
        line_no = 0
        in_hunk = False

        while idx < total:
            raw = self._lines[idx]

            header = _DIFF_HEADER_RE.match(raw)
            if header:
                item, idx = self._parse_file_header(header, idx + 1)
                current = item.path if isinstance(item, DiffFile) else None
                in_hunk = False
                yield item
                continue

            hunk = _HUNK_HEADER_RE.match(raw)
            if hunk:
                line_no = int(hunk.group(1))
                in_hunk = current is not None
                idx += 1
                continue

            if in_hunk:
                if raw.startswith("+"):
                    if not _SUBPROJECT_RE.match(raw):
                        # Strip a leading UTF-8 BOM and a CR left by CRLF files.
                        content = raw[1:].lstrip("\ufeff").rstrip("\r")
                        yield AddedLine(file=current, line_no=line_no, content=content)
                    line_no += 1
                elif raw.startswith(" "):
                    line_no += 1
                # '-' lines and "\ No newline" markers do not advance the new file

            idx += 1

    def _parse_file_header(self, header: re.Match, idx: int) -> tuple[DiffItem, int]:
        """Consume extended header lines after ``diff --git``."""
        old_path = _header_path(header.group("old"), "a/")
        path = _header_path(header.group("new"), "b/")
        status = FileStatus.MODIFIED
        mode_changed = False
        binary = False
        total = len(self._lines)

        while idx < total:
            sub = self._lines[idx]
            if _DIFF_HEADER_RE.match(sub) or _HUNK_HEADER_RE.match(sub):
                break
            if _NEW_FILE_RE.match(sub):
                status = FileStatus.ADDED
            elif _DELETED_FILE_RE.match(sub):
                status = FileStatus.DELETED
            elif _OLD_MODE_RE.match(sub):
                mode_changed = True
            elif rename := _RENAME_FROM_RE.match(sub):
                old_path = unquote_path(rename.group(1))
                status = FileStatus.RENAMED
            elif rename := _RENAME_TO_RE.match(sub):
                path = unquote_path(rename.group(1))
            elif _BINARY_RE.match(sub):
                binary = True
            elif sub.startswith(("--- ", "+++ ")) or _IGNORED_HEADER_RE.match(sub):
                pass
            else:
                break
            idx += 1

        if binary:
            return FileSkipped(path=path, reason="binary"), idx
        has_hunk = idx < total and _HUNK_HEADER_RE.match(self._lines[idx]) is not None
        if mode_changed and not has_hunk:
            return FileSkipped(path=path, reason="mode_only"), idx
        return (
            DiffFile(
                path=path,
                old_path=old_path if status == FileStatus.RENAMED else None,
                status=status,
            ),
            idx,
        )
