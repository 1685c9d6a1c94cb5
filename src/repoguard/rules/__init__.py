"""Secret-pattern rules — model, registry, built-ins."""

from repoguard.rules.models import Rule, RuleError
from repoguard.rules.registry import RuleRegistry, build_registry

__all__ = ["Rule", "RuleError", "RuleRegistry", "build_registry"]
