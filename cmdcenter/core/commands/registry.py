"""Rule registry for cmdcenter command parsing.

The registry is the flat union of every rule family, ordered once by
descending priority. Ties keep registration order (the sort is stable).
A registry never changes after construction.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence

from .rules import RULE_FAMILIES
from .taxonomy import CommandRule


def build_registry(rule_families: Iterable[Sequence[CommandRule]]) -> tuple[CommandRule, ...]:
    """Concatenate rule families and order them by priority.

    Args:
        rule_families: Sequences of rules, in registration order

    Returns:
        All rules, highest priority first
    """
    rules = [rule for family in rule_families for rule in family]
    return tuple(sorted(rules, key=lambda rule: -rule.priority))


class RuleRegistry:
    """Immutable, priority-ordered collection of command rules.

    Attributes:
        rules: Rules in evaluation order
    """

    def __init__(self, rule_families: Iterable[Sequence[CommandRule]] = RULE_FAMILIES) -> None:
        """Build the registry.

        Args:
            rule_families: Rule families to register (defaults to built-ins)
        """
        self._rules = build_registry(rule_families)

    @property
    def rules(self) -> tuple[CommandRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[CommandRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.id == rule_id for rule in self._rules)

    def get(self, rule_id: str) -> CommandRule | None:
        """Look up a rule by id."""
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def ids(self) -> list[str]:
        """Rule ids in evaluation order."""
        return [rule.id for rule in self._rules]

    def capabilities(self) -> dict[str, list[dict[str, Any]]]:
        """Describe every rule for help text.

        Only display data is exposed; detection and extraction stay private.

        Returns:
            {"rules": [{"id", "name", "examples"}, ...]} in evaluation order
        """
        return {
            "rules": [
                {"id": rule.id, "name": rule.name, "examples": list(rule.examples)}
                for rule in self._rules
            ]
        }


# Module-level registry for convenience
default_registry = RuleRegistry()


__all__ = ["RuleRegistry", "build_registry", "default_registry"]
