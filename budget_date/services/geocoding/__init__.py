"""Geocoding via the Nominatim OpenStreetMap API.

Public API:
    - Geocoder: async client resolving a city name to a GeoPoint
"""
from budget_date.services.geocoding.client import NOMINATIM_SEARCH_URL, Geocoder

__all__ = [
    "Geocoder",
    "NOMINATIM_SEARCH_URL",
]
