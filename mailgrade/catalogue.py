"""
Rule Catalogue — Immutable Registry

Stores rules and categories and answers lookups. No evaluation
logic lives here. A catalogue is validated once at construction
and never changes afterwards; engines receive one explicitly.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from mailgrade.rules import CATEGORIES, Category, Rule, build_rules


class RuleCatalogue:
    """Read-only, ordered collection of rules grouped into categories."""

    def __init__(self, rules: Iterable[Rule], categories: Iterable[Category]):
        self._categories: dict[str, Category] = {}
        for category in categories:
            if category.id in self._categories:
                raise ValueError(f"Duplicate category id: {category.id}")
            self._categories[category.id] = category

        self._rules: dict[str, Rule] = {}
        for rule in rules:
            if rule.id in self._rules:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            if rule.category not in self._categories:
                raise ValueError(
                    f"Rule {rule.id} references unknown category {rule.category!r}"
                )
            if rule.weight <= 0:
                raise ValueError(f"Rule {rule.id} must have a positive weight")
            self._rules[rule.id] = rule

        self._ordered = tuple(self._rules.values())

    def get_all_rules(self) -> tuple[Rule, ...]:
        """Every rule, in construction order."""
        return self._ordered

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Look up a rule by id. Unknown ids return None."""
        return self._rules.get(rule_id)

    def get_categories(self) -> Mapping[str, Category]:
        return MappingProxyType(self._categories)

    def rules_in(self, category: str) -> list[Rule]:
        """Rules of one category, in catalogue order."""
        return [r for r in self._ordered if r.category == category]

    def describe(self) -> list[dict]:
        """
        Return the catalogue as plain dicts.

        Used by hosts that render rule lists and category legends.
        """
        return [
            {
                "id": r.id,
                "category": r.category,
                "category_name": self._categories[r.category].name,
                "weight": r.weight,
                "level": r.level,
                "description": r.description,
                "fix": r.fix,
                "has_auto_fix": r.has_auto_fix,
            }
            for r in self._ordered
        ]

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules


def default_catalogue() -> RuleCatalogue:
    """Build a fresh catalogue holding the built-in email rules."""
    return RuleCatalogue(build_rules(), CATEGORIES)
