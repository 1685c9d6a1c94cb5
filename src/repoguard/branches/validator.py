"""Branch-name validation — ``prefix/description`` against an allow-list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from repoguard.config.schema import DEFAULT_PREFIXES


@dataclass(frozen=True)
class BranchCheck:
    """Outcome of validating one branch name.

    ``allowed_prefixes`` always carries the full allow-list so a failure
    can tell the user what would have been accepted.
    """

    name: str
    valid: bool
    allowed_prefixes: Tuple[str, ...]
    prefix: Optional[str] = None
    description: Optional[str] = None
    reason: Optional[str] = None

    def suggestion(self) -> str:
        """Example of an accepted name built from the first allowed prefix."""
        tail = self.description or self.name or "short-description"
        return f"{self.allowed_prefixes[0]}/{tail}" if self.allowed_prefixes else tail


def validate_branch_name(
    name: str,
    allowed_prefixes: Iterable[str] = DEFAULT_PREFIXES,
) -> BranchCheck:
    """Check *name* against *allowed_prefixes* (case-sensitive, exact).

    The name is split on its first ``/``; everything after it is the
    description, which may itself contain slashes.
    """
    allowed = tuple(allowed_prefixes)

    prefix, sep, description = name.partition("/")
    if not sep:
        return BranchCheck(
            name=name,
            valid=False,
            allowed_prefixes=allowed,
            reason="branch name must have the form <prefix>/<description>",
        )
    if prefix not in allowed:
        return BranchCheck(
            name=name,
            valid=False,
            allowed_prefixes=allowed,
            prefix=prefix,
            description=description,
            reason=f"unknown prefix {prefix!r}",
        )
    return BranchCheck(
        name=name,
        valid=True,
        allowed_prefixes=allowed,
        prefix=prefix,
        description=description,
    )


def is_exempt(name: str, exempt: Iterable[str]) -> bool:
    """Long-lived branches (main, develop, ...) skip the naming rule."""
    return name in set(exempt)
