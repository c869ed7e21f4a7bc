"""External service integrations for the BudgetDate tools.

- HTTP: shared JSON client raising UpstreamError on non-2xx answers
- Geocoding: Nominatim city lookup
- Weather: Open-Meteo current conditions
- Places: Overpass points-of-interest search
- Gemini: itinerary generation

Example Usage:
    >>> from budget_date.core.config import ApiSettings
    >>> from budget_date.services import create_http_client, Geocoder
    >>>
    >>> settings = ApiSettings.from_env()
    >>> http = create_http_client(settings)
    >>> geocoder = Geocoder(http)
"""

from budget_date.services.http import JsonHttpClient, create_http_client
from budget_date.services.geocoding import Geocoder
from budget_date.services.weather import WeatherClient
from budget_date.services.places import PlacesClient, build_overpass_query
from budget_date.services.gemini import ItineraryGenerator, create_itinerary_generator

__all__ = [
    "JsonHttpClient",
    "create_http_client",
    "Geocoder",
    "WeatherClient",
    "PlacesClient",
    "build_overpass_query",
    "ItineraryGenerator",
    "create_itinerary_generator",
]
