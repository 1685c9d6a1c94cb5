"""Matched-value masking for reports.

A regex match carries the whole assignment (``password = "..."``) or the
raw key, so every reporter passes it through here before printing.
"""

from __future__ import annotations

REDACTED = "[REDACTED]"

_HEAD = 4
_TAIL = 2


def redact_local(value: str) -> str:
    """Keep the first 4 and last 2 characters, e.g. ``AKIA...LE``.

    Values too short to hide anything between the two ends are masked whole.
    """
    if len(value) <= _HEAD + _TAIL:
        return REDACTED
    return f"{value[:_HEAD]}...{value[-_TAIL:]}"


def redact(value: str, *, ci_mode: bool = False) -> str:
    return REDACTED if ci_mode else redact_local(value)
