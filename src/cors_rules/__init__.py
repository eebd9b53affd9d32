"""
cors-rules: ordered, domain-based CORS filtering.

Matches each request's ``Origin`` against an ordered rule set (first
match wins), emits the matched rule's CORS headers and answers preflight
requests with an empty ``204``.
"""

from cors_rules.config import Settings, get_settings
from cors_rules.models import CorsPolicy, CorsRule, DuplicateRuleError, RuleSet
from cors_rules.origin import NO_ORIGIN, ParsedOrigin, RequestContext, resolve_origin
from cors_rules.request_filter import CorsDecision, RequestFilter

__all__ = [
    "CorsDecision",
    "CorsPolicy",
    "CorsRule",
    "DuplicateRuleError",
    "NO_ORIGIN",
    "ParsedOrigin",
    "RequestContext",
    "RequestFilter",
    "RuleSet",
    "Settings",
    "get_settings",
    "resolve_origin",
]
