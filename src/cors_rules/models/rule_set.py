"""
Ordered CORS rule collection for cors-rules.

A :class:`RuleSet` is loaded once at startup and only read afterwards,
so it can be shared by concurrent requests without locking. Rule order
is significant: the first matching rule wins, so a wildcard rule placed
ahead of specific domains shadows them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from cors_rules.models.cors_rule import CorsRule
from cors_rules.origin import NoOrigin, ParsedOrigin


class DuplicateRuleError(ValueError):
    """Raised when two rules in one set share a domain."""

    def __init__(self, domain: str) -> None:
        super().__init__(f"Duplicate CORS rule for domain {domain!r}")
        self.domain = domain


class RuleSet:
    """Immutable, ordered sequence of :class:`CorsRule` with unique domains.

    Args:
        rules: Rules in their configured order.

    Raises:
        DuplicateRuleError: If a domain appears more than once.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[CorsRule] = ()) -> None:
        ordered = tuple(rules)
        seen: set[str] = set()
        for rule in ordered:
            if rule.domain in seen:
                raise DuplicateRuleError(rule.domain)
            seen.add(rule.domain)
        self._rules = ordered

    @classmethod
    def from_config(cls, items: Iterable[Mapping[str, Any]]) -> RuleSet:
        """Validate raw rule mappings (rule-store keys) into a RuleSet."""
        return cls(CorsRule.model_validate(item) for item in items)

    def __iter__(self) -> Iterator[CorsRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        domains = ", ".join(rule.domain for rule in self._rules)
        return f"RuleSet([{domains}])"

    @property
    def domains(self) -> tuple[str, ...]:
        return tuple(rule.domain for rule in self._rules)

    def first_match(self, origin: ParsedOrigin | NoOrigin) -> CorsRule | None:
        """Return the first rule, in configured order, matching *origin*."""
        for rule in self._rules:
            if rule.is_match(origin):
                return rule
        return None
