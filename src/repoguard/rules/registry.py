"""Rule registry — built-in and custom rules, filtered by config."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from repoguard.config.schema import SEVERITY_ORDER, RepoGuardConfig
from repoguard.rules.models import Rule, RuleError

CUSTOM_RULES_DIR = ".repoguard-rules"
_REQUIRED_KEYS = ("id", "label", "pattern")


class RuleRegistry:
    """Central store for all secret patterns, in registration order."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    def apply_config(self, config: RepoGuardConfig) -> None:
        """Enable / disable rules from ``[rules]``; disable wins."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable

        for rule in self._rules.values():
            if enable_list:
                rule.enabled = rule.id in enable_list
            if rule.id in disable_list:
                rule.enabled = False

    def load_custom_rules(self, directory: Path) -> int:
        """Load ``*.yaml`` / ``*.yml`` rule files from *directory*. Returns count loaded."""
        if not directory.is_dir():
            return 0
        count = 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]

        count = 0
        for entry in data:
            if not isinstance(entry, dict):
                raise RuleError(f"{path}: each rule must be a mapping")
            for key in _REQUIRED_KEYS:
                if key not in entry:
                    raise RuleError(f"{path}: rule is missing required key {key!r}")
                if not isinstance(entry[key], str) or not entry[key]:
                    raise RuleError(f"{path}: rule key {key!r} must be a non-empty string")
            severity = entry.get("severity", "high")
            if not isinstance(severity, str) or severity not in SEVERITY_ORDER:
                raise RuleError(f"{path}: rule {entry['id']} has invalid severity {severity!r}")
            description = entry.get("description", "")
            if not isinstance(description, str):
                raise RuleError(f"{path}: rule {entry['id']} description must be a string")
            rule = Rule(
                id=entry["id"],
                label=entry["label"],
                pattern=entry["pattern"],
                severity=severity,
                description=description,
            )
            _ = rule.compiled_pattern  # bad regex fails here, not mid-scan
            self.register(rule)
            count += 1
        return count


def build_registry(config: RepoGuardConfig, repo_root: Path) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from repoguard.rules.builtin import builtin_rules

    registry = RuleRegistry()
    registry.register_many(builtin_rules())
    registry.load_custom_rules(repo_root / CUSTOM_RULES_DIR)
    registry.apply_config(config)

    for rule in registry.enabled_rules():
        _ = rule.compiled_pattern

    return registry
