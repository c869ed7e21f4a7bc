"""Points-of-interest search via the Overpass API.

Public API:
    - PlacesClient: async client returning shuffled, de-duplicated candidates
    - build_overpass_query: preferences to Overpass QL
    - select_selectors: preference keywords to category selectors
"""
from budget_date.services.places.client import (
    MAX_PLACES,
    OVERPASS_URL,
    PlacesClient,
    dedupe_by_name,
    places_from_overpass,
)
from budget_date.services.places.queries import (
    DEFAULT_SELECTORS,
    KEYWORD_SELECTORS,
    SEARCH_RADIUS_M,
    build_overpass_query,
    select_selectors,
    tokenize_preferences,
)

__all__ = [
    "MAX_PLACES",
    "OVERPASS_URL",
    "PlacesClient",
    "dedupe_by_name",
    "places_from_overpass",
    "DEFAULT_SELECTORS",
    "KEYWORD_SELECTORS",
    "SEARCH_RADIUS_M",
    "build_overpass_query",
    "select_selectors",
    "tokenize_preferences",
]
