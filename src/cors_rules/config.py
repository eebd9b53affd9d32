"""
Environment-based configuration management for cors-rules.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The CORS rules themselves are read from
``CORS_RULES`` as a JSON array of rule objects using the rule-store keys
(``domain``, ``policy``, ``require-https``, ``max-age``, …).

All environment variables are prefixed with ``CORS_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cors_rules.models import CorsRule, RuleSet


class Settings(BaseSettings):
    """Central configuration loaded from ``CORS_``-prefixed environment variables.

    Attributes:
        rules: CORS rules in their configured (significant) order.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON instead of console output.
        host: Bind address for the bundled host application.
        port: Bind port for the bundled host application.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Rules ──
    rules: list[CorsRule] = Field(
        default_factory=list,
        description="Ordered CORS rules (first match wins).",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Emit JSON log lines.")

    # ── Host ──
    host: str = Field(default="0.0.0.0", description="Host application bind address.")
    port: int = Field(default=8000, ge=1, le=65535, description="Host application bind port.")

    @field_validator("rules")
    @classmethod
    def _unique_domains(cls, rules: list[CorsRule]) -> list[CorsRule]:
        # Raises DuplicateRuleError (a ValueError), reported as a ValidationError.
        RuleSet(rules)
        return rules

    def rule_set(self) -> RuleSet:
        """Build the read-only :class:`RuleSet` from the configured rules."""
        return RuleSet(self.rules)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
