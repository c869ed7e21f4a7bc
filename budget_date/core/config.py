"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from budget_date.core.errors import ConfigurationError

DEFAULT_USER_AGENT = "BudgetDate/1.0 (+https://puch.ai)"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_GEOCODE_DELAY_S = 1.2
DEFAULT_HTTP_TIMEOUT_S = 30.0


def parse_token_map(raw: Optional[str]) -> Dict[str, str]:
    """Parse ``token:phone,token2:phone2`` into a lookup table.

    Pairs without a token or a phone are skipped.
    """

    table: Dict[str, str] = {}
    if not raw:
        return table
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        token, _, phone = pair.partition(":")
        token, phone = token.strip(), phone.strip()
        if not token or not phone:
            continue
        table[token] = phone
    return table


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for credentials and upstream tuning knobs.

    Built once at process start and passed explicitly to the services that
    need it; nothing reads the environment after that.
    """

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    owner_phone: Optional[str] = None
    token_map: Dict[str, str] = field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT
    geocode_delay_s: float = DEFAULT_GEOCODE_DELAY_S
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    log_level: str = "INFO"
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment."""

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            owner_phone=os.getenv("OWNER_PHONE") or None,
            token_map=parse_token_map(os.getenv("VALIDATE_TOKEN_MAP")),
            user_agent=os.getenv("HTTP_USER_AGENT") or DEFAULT_USER_AGENT,
            geocode_delay_s=float(os.getenv("GEOCODE_DELAY_S", DEFAULT_GEOCODE_DELAY_S)),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", DEFAULT_HTTP_TIMEOUT_S)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise ConfigurationError(f"Missing configuration value: {field}")
        return value
