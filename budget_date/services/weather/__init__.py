"""Current conditions via Open-Meteo.

Public API:
    - WeatherClient: async client returning a WeatherObservation
    - describe_weather_code: WMO code to text
"""
from budget_date.services.weather.client import (
    OPEN_METEO_FORECAST_URL,
    WeatherClient,
    describe_weather_code,
)

__all__ = [
    "OPEN_METEO_FORECAST_URL",
    "WeatherClient",
    "describe_weather_code",
]
