"""Overpass query construction from free-text preferences."""
from __future__ import annotations

from typing import Dict, List, Optional

SEARCH_RADIUS_M = 3000

_FRAGMENT = "node(around:{radius},{lat},{lon})[{selector}];"

# Broad categories used for a "spin" or when no preference matched.
DEFAULT_SELECTORS: List[str] = [
    "amenity=cafe",
    "leisure=park",
    "tourism=museum",
    "amenity=restaurant",
    "amenity=ice_cream",
    "amenity=pub",
]

KEYWORD_SELECTORS: Dict[str, str] = {
    "coffee": "amenity=cafe",
    "cafe": "amenity=cafe",
    "art": "tourism=gallery",
    "museum": "tourism=museum",
    "music": "amenity=music_venue",
    "park": "leisure=park",
    "cinema": "amenity=cinema",
    "restaurant": "amenity=restaurant",
    "bar": "amenity=bar",
}


def tokenize_preferences(preferences: Optional[str]) -> List[str]:
    """Split comma separated preferences into lowercase keywords."""

    return [token.strip().lower() for token in (preferences or "").split(",") if token.strip()]


def select_selectors(preferences: Optional[str], spin: bool = False) -> List[str]:
    """Pick the tag selectors to search for.

    Falls back to :data:`DEFAULT_SELECTORS` on a spin, with no keywords, or
    when none of the keywords is known.
    """

    tokens = tokenize_preferences(preferences)
    if spin or not tokens:
        return list(DEFAULT_SELECTORS)

    matched = [KEYWORD_SELECTORS[token] for token in tokens if token in KEYWORD_SELECTORS]
    if not matched:
        return list(DEFAULT_SELECTORS)
    return list(dict.fromkeys(matched))


def build_fragment(selector: str, lat: float, lon: float, radius: int = SEARCH_RADIUS_M) -> str:
    return _FRAGMENT.format(radius=radius, lat=lat, lon=lon, selector=selector)


def build_overpass_query(
    lat: float,
    lon: float,
    preferences: Optional[str] = None,
    spin: bool = False,
) -> str:
    """Return a single Overpass QL union over every selected category."""

    fragments = "\n  ".join(
        build_fragment(selector, lat, lon) for selector in select_selectors(preferences, spin)
    )
    return f"[out:json];\n(\n  {fragments}\n);\nout center;"
