from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .config import RulesConfig
from .errors import UnknownRuleError
from .models import RuleCategory, RuleType
from .rule import Rule


class RuleRegistry:
    """Ordered, immutable collection of rule instances.

    `with_rule` / `without_rule` return new registries; nothing here is
    shared process-wide.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        ordered: Tuple[Rule, ...] = tuple(rules)
        seen: set[str] = set()
        for rule in ordered:
            if not isinstance(rule, Rule):
                raise TypeError(f"Expected a Rule instance, got {type(rule).__name__}")
            if rule.rule_id in seen:
                raise ValueError(f"Duplicate rule_id registered: {rule.rule_id}")
            seen.add(rule.rule_id)
        self._rules = ordered

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.rule_id == rule_id for rule in self._rules)

    def all(self) -> List[Rule]:
        return list(self._rules)

    def ids(self) -> List[str]:
        return [rule.rule_id for rule in self._rules]

    def by_category(self, category: RuleCategory) -> List[Rule]:
        return [rule for rule in self._rules if rule.category == category]

    def by_type(self, rule_type: RuleType) -> List[Rule]:
        return [rule for rule in self._rules if rule.rule_type == rule_type]

    def find(self, rule_id: str) -> Optional[Rule]:
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def get(self, rule_id: str) -> Rule:
        rule = self.find(rule_id)
        if rule is None:
            raise UnknownRuleError(rule_id)
        return rule

    def index_of(self, rule_id: str) -> int:
        for idx, rule in enumerate(self._rules):
            if rule.rule_id == rule_id:
                return idx
        raise UnknownRuleError(rule_id)

    def with_rule(self, rule: Rule) -> "RuleRegistry":
        return RuleRegistry((*self._rules, rule))

    def without_rule(self, rule_id: str) -> "RuleRegistry":
        idx = self.index_of(rule_id)
        return RuleRegistry((*self._rules[:idx], *self._rules[idx + 1 :]))


def default_registry(rules_config: Optional[RulesConfig] = None) -> RuleRegistry:
    from .rules import default_rules

    return RuleRegistry(default_rules(rules_config))
