"""Small client for the public Nominatim geocoding service."""
from __future__ import annotations

import logging
from typing import Optional

from budget_date.core.errors import UpstreamError
from budget_date.core.schemas import GeoPoint
from budget_date.services.http import JsonHttpClient

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


class Geocoder:
    """Resolve free-text city names to coordinates.

    Nominatim asks for at most one request per second; callers are expected
    to pause after a lookup before issuing further upstream calls.
    """

    def __init__(self, http: JsonHttpClient, *, url: str = NOMINATIM_SEARCH_URL) -> None:
        self._http = http
        self.url = url

    async def geocode(self, city: str) -> Optional[GeoPoint]:
        """Return the best match for ``city`` or ``None`` when nothing matched."""

        data = await self._http.get_json(
            self.url,
            service="Nominatim",
            params={"city": city, "format": "json", "limit": 1},
        )
        if not isinstance(data, list) or not data:
            logger.info("Nominatim found no match for %r", city)
            return None

        first = data[0]
        try:
            return GeoPoint(
                lat=float(first["lat"]),
                lon=float(first["lon"]),
                display_name=first.get("display_name") or "",
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Nominatim returned an unusable match for %r: %.200r", city, first)
            raise UpstreamError("Nominatim", 502, "Malformed geocoding response") from exc
