"""Built-in secret patterns."""

from __future__ import annotations

from copy import copy

from repoguard.rules.builtin.credentials import ALL_CREDENTIAL_RULES
from repoguard.rules.builtin.keys import ALL_KEY_RULES
from repoguard.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_CREDENTIAL_RULES,
    *ALL_KEY_RULES,
]


def builtin_rules() -> list[Rule]:
    """Fresh copies, so enabling/disabling never touches the module constants."""
    return [copy(rule) for rule in ALL_BUILTIN_RULES]


__all__ = ["ALL_BUILTIN_RULES", "builtin_rules"]
