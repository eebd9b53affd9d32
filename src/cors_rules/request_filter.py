"""
CORS request filter for cors-rules.

Selects the first rule of a :class:`RuleSet` matching the request's
origin and turns it into a :class:`CorsDecision`: the response headers
to set, the ``Vary`` tokens to append, and whether the request is a
preflight that must be answered immediately with ``204 NO CONTENT``.

The filter never touches the transport. The host layer (see
:mod:`cors_rules.middleware.cors`) writes the decision onto the
response and performs the short-circuit.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field

import structlog

from cors_rules.models import CorsRule, RuleSet
from cors_rules.origin import RequestContext

logger = structlog.get_logger()

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"

PREFLIGHT_STATUS_CODE = 204
PREFLIGHT_REASON = "NO CONTENT"


def append_vary(headers: MutableMapping[str, str], token: str) -> None:
    """Append *token* to the ``Vary`` header, creating it when blank.

    Multi-valued mappings (starlette ``MutableHeaders``) may carry several
    ``Vary`` lines; they are folded into one comma-joined line so none is
    lost when the combined value is written back.
    """
    getlist = getattr(headers, "getlist", None)
    if getlist is not None:
        existing = [value for value in getlist(VARY) if value.strip()]
    else:
        value = headers.get(VARY)
        existing = [value] if value is not None and value.strip() else []
    headers[VARY] = ", ".join([*existing, token])


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of applying a matched rule to one request.

    Attributes:
        headers: Response headers to set, in emission order.
        vary: Tokens to append to the response ``Vary`` header.
        short_circuit: ``True`` for a preflight that ends the request.
        status_code: Status of the short-circuit response.
        reason: Reason phrase of the short-circuit response.
    """

    headers: dict[str, str] = field(default_factory=dict)
    vary: tuple[str, ...] = ()
    short_circuit: bool = False
    status_code: int | None = None
    reason: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.vary and not self.short_circuit

    def apply_to(self, headers: MutableMapping[str, str]) -> None:
        """Write this decision onto a mutable response-header mapping."""
        for name, value in self.headers.items():
            headers[name] = value
        for token in self.vary:
            append_vary(headers, token)


NO_EFFECT = CorsDecision()


class RequestFilter:
    """First-match-wins CORS filter over an ordered rule set.

    Args:
        rule_set: The read-only rules, in configured order.
    """

    def __init__(self, rule_set: RuleSet) -> None:
        self._rule_set = rule_set

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    def match(self, context: RequestContext) -> CorsRule | None:
        """Return the first rule matching the request's origin, if any."""
        return self._rule_set.first_match(context.origin)

    def apply(self, rule: CorsRule, context: RequestContext) -> CorsDecision:
        """Build the header policy of *rule* for this request.

        Rules whose policy is not ``ALLOW`` produce :data:`NO_EFFECT`;
        matching such a rule does not fall through to later rules.

        Args:
            rule: The matched rule.
            context: The request being processed.

        Returns:
            The :class:`CorsDecision` to hand to the host layer.
        """
        if not rule.allows:
            logger.debug("cors_rule_not_allow", domain=rule.domain, policy=rule.policy)
            return NO_EFFECT

        headers: dict[str, str] = {}
        vary: tuple[str, ...] = ()

        if rule.is_wildcard:
            headers[ALLOW_ORIGIN] = "*"
        else:
            headers[ALLOW_ORIGIN] = context.origin.original
            vary = ("Origin",)

        if rule.exposed_headers is not None:
            headers[EXPOSE_HEADERS] = rule.exposed_headers

        if rule.allow_credentials is not None:
            headers[ALLOW_CREDENTIALS] = str(rule.allow_credentials).lower()

        if not context.is_preflight:
            return CorsDecision(headers=headers, vary=vary)

        # The client's requested method/headers are not checked against
        # the configured allow-lists.
        logger.debug(
            "cors_preflight_short_circuit",
            domain=rule.domain,
            request_method=context.request_method,
            request_headers=context.request_headers,
        )

        if rule.allowed_methods is not None:
            headers[ALLOW_METHODS] = rule.allowed_methods

        if rule.allowed_headers is not None:
            headers[ALLOW_HEADERS] = rule.allowed_headers

        if rule.max_age is not None:
            headers[MAX_AGE] = str(rule.max_age)

        return CorsDecision(
            headers=headers,
            vary=vary,
            short_circuit=True,
            status_code=PREFLIGHT_STATUS_CODE,
            reason=PREFLIGHT_REASON,
        )

    def evaluate(self, context: RequestContext) -> CorsDecision | None:
        """Match and apply in one step; ``None`` when no rule matched."""
        rule = self.match(context)
        if rule is None:
            logger.debug("cors_no_rule_matched", origin=context.origin_header)
            return None

        logger.debug("cors_rule_matched", domain=rule.domain, method=context.method)
        return self.apply(rule, context)
