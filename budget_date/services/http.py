"""Shared async HTTP client for the upstream JSON services."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from budget_date.core.config import ApiSettings
from budget_date.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class JsonHttpClient:
    """Thin async wrapper around ``httpx.AsyncClient``.

    Every request carries the service ``User-Agent`` and asks for JSON; any
    non-2xx answer becomes an :class:`UpstreamError` with the upstream status
    and body text.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            headers={"user-agent": user_agent, "accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "JsonHttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        service: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
        data: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Execute a request and return the parsed JSON body."""

        response = await self._client.request(
            method, url, params=params, json=json, data=data, headers=headers
        )
        if not response.is_success:
            logger.warning("%s answered HTTP %s", service, response.status_code)
            raise UpstreamError(
                service,
                response.status_code,
                response.text,
                reason=response.reason_phrase,
            )
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s answered with a non-JSON body", service)
            raise UpstreamError(service, 502, response.text[:500], reason="Invalid JSON") from exc

    async def get_json(self, url: str, *, service: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request_json("GET", url, service=service, params=params)

    async def post_json(self, url: str, payload: Any, *, service: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request_json("POST", url, service=service, params=params, json=payload)

    async def post_form(self, url: str, form: Mapping[str, Any], *, service: str) -> Any:
        return await self.request_json("POST", url, service=service, data=form)


def create_http_client(settings: ApiSettings) -> JsonHttpClient:
    """Instantiate the shared HTTP client using project settings."""

    return JsonHttpClient(user_agent=settings.user_agent, timeout_s=settings.http_timeout_s)
