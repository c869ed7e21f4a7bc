"""Nearby points of interest from the Overpass API."""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Optional

from budget_date.core.schemas import PlaceCandidate
from budget_date.services.http import JsonHttpClient
from budget_date.services.places.queries import build_overpass_query

logger = logging.getLogger(__name__)

OVERPASS_URL = "https://overpass-api.de/api/interpreter"
MAX_PLACES = 20


def places_from_overpass(data: Dict[str, Any]) -> List[PlaceCandidate]:
    """Normalise raw Overpass elements, dropping unnamed or unplaced ones."""

    places: List[PlaceCandidate] = []
    elements = data.get("elements") if isinstance(data, dict) else None
    for el in elements or []:
        if not isinstance(el, dict):
            continue
        tags = el.get("tags") or {}
        name = tags.get("name")
        if not name:
            continue

        lat = el.get("lat")
        lon = el.get("lon")
        if lat is None or lon is None:
            center = el.get("center") or {}
            lat = center.get("lat")
            lon = center.get("lon")
        if lat is None or lon is None:
            continue

        places.append(
            PlaceCandidate(
                id=el.get("id"),
                name=str(name),
                type=tags.get("amenity") or tags.get("tourism") or tags.get("leisure"),
                lat=float(lat),
                lon=float(lon),
            )
        )
    return places


def dedupe_by_name(places: Iterable[PlaceCandidate]) -> List[PlaceCandidate]:
    """Keep the first place for every case-insensitive name."""

    seen = set()
    unique: List[PlaceCandidate] = []
    for place in places:
        key = place.name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(place)
    return unique


class PlacesClient:
    """Search Overpass for date-friendly spots around a coordinate.

    ``rng`` is the random source for the result shuffle; pass a seeded
    ``random.Random`` for reproducible ordering.
    """

    def __init__(
        self,
        http: JsonHttpClient,
        *,
        url: str = OVERPASS_URL,
        rng: Optional[random.Random] = None,
        limit: int = MAX_PLACES,
    ) -> None:
        self._http = http
        self.url = url
        self.rng = rng or random.Random()
        self.limit = limit

    async def find_places(
        self,
        lat: float,
        lon: float,
        preferences: Optional[str] = None,
        spin: bool = False,
    ) -> List[PlaceCandidate]:
        query = build_overpass_query(lat, lon, preferences, spin)
        logger.debug("Overpass query: %s", query)
        data = await self._http.post_form(self.url, {"data": query}, service="Overpass")

        places = dedupe_by_name(places_from_overpass(data))
        self.rng.shuffle(places)
        logger.info("Overpass returned %d unique places", len(places))
        return places[: self.limit]
