"""Error taxonomy shared by the adapters, the tool service and the API layer.

Every error carries an HTTP-style ``status_code`` so the transport can map it
to a response without knowing which adapter raised it.
"""
from __future__ import annotations

from typing import Any, Optional


class BudgetDateError(Exception):
    """Base class for all errors raised by the tool service."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(BudgetDateError, ValueError):
    """Malformed tool arguments or a location that cannot be resolved."""

    status_code = 400


class UnauthorizedError(BudgetDateError):
    """Missing or unrecognised bearer token with no fallback owner."""

    status_code = 401


class ToolNotFoundError(BudgetDateError):
    status_code = 404


class UpstreamError(BudgetDateError):
    """A third-party service answered with a non-success status.

    The upstream status code is passed through as ``status_code`` and the raw
    response text is kept in ``body`` for diagnostics.
    """

    def __init__(self, service: str, status_code: int, body: str, *, reason: str = "") -> None:
        prefix = f"{service} HTTP {status_code}"
        if reason:
            prefix = f"{prefix} {reason}"
        super().__init__(f"{prefix}: {body}")
        self.service = service
        self.status_code = status_code
        self.body = body


class ModelOutputError(BudgetDateError):
    """The generative upstream answered, but not with a usable itinerary."""

    status_code = 502


class ConfigurationError(BudgetDateError, RuntimeError):
    """A required credential is missing when a request needs it."""

    status_code = 500
