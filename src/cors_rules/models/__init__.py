"""
Rule data models for cors-rules.

Contains the single-rule model and the ordered, read-only rule set.
"""

from cors_rules.models.cors_rule import WILDCARD_DOMAIN, CorsPolicy, CorsRule
from cors_rules.models.rule_set import DuplicateRuleError, RuleSet

__all__ = [
    "CorsPolicy",
    "CorsRule",
    "DuplicateRuleError",
    "RuleSet",
    "WILDCARD_DOMAIN",
]
