"""Secret-pattern rule model — a labelled regex, compiled case-insensitively."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from repoguard.config.schema import Severity


class RuleError(Exception):
    """Raised when a rule definition is incomplete or its regex is invalid."""


@dataclass
class Rule:
    """A single secret pattern.

    ``pattern`` is kept as source text so custom rules can be listed and
    serialised; the compiled form is built on first use and always carries
    ``re.IGNORECASE``.
    """

    id: str
    label: str
    pattern: str
    severity: Severity = "high"
    description: str = ""
    enabled: bool = True

    _compiled: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled is None:
            try:
                self._compiled = re.compile(self.pattern, re.IGNORECASE)
            except (re.error, TypeError) as exc:
                raise RuleError(f"Rule {self.id}: invalid pattern: {exc}") from exc
        return self._compiled
