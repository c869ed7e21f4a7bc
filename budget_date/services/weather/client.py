"""Current weather from the token-free Open-Meteo forecast API."""
from __future__ import annotations

from typing import Any, Dict

from budget_date.core.errors import UpstreamError
from budget_date.core.schemas import WeatherObservation
from budget_date.services.http import JsonHttpClient

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes as documented by Open-Meteo.
WEATHER_CODES: Dict[int, str] = {
    0: "clear sky",
    1: "mainly clear",
    2: "partly cloudy",
    3: "overcast",
    45: "fog",
    48: "depositing rime fog",
    51: "light drizzle",
    53: "moderate drizzle",
    55: "dense drizzle",
    56: "light freezing drizzle",
    57: "dense freezing drizzle",
    61: "light rain",
    63: "moderate rain",
    65: "heavy rain",
    66: "light freezing rain",
    67: "heavy freezing rain",
    71: "light snow",
    73: "moderate snow",
    75: "heavy snow",
    77: "snow grains",
    80: "light rain showers",
    81: "moderate rain showers",
    82: "violent rain showers",
    85: "light snow showers",
    86: "heavy snow showers",
    95: "thunderstorm",
    96: "thunderstorm with light hail",
    99: "thunderstorm with heavy hail",
}


def describe_weather_code(code: Any) -> str:
    try:
        return WEATHER_CODES.get(int(code), "unknown")
    except (TypeError, ValueError):
        return "unknown"


class WeatherClient:
    def __init__(self, http: JsonHttpClient, *, url: str = OPEN_METEO_FORECAST_URL) -> None:
        self._http = http
        self.url = url

    async def get_weather(self, lat: float, lon: float) -> WeatherObservation:
        """Return the current temperature (°C) and a short description."""

        data = await self._http.get_json(
            self.url,
            service="Open-Meteo",
            params={"latitude": lat, "longitude": lon, "current_weather": "true"},
        )
        current = data.get("current_weather") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise UpstreamError("Open-Meteo", 502, "Response has no current_weather object")
        try:
            temperature = float(current.get("temperature", 0.0))
        except (TypeError, ValueError) as exc:
            raise UpstreamError("Open-Meteo", 502, "Malformed temperature") from exc
        return WeatherObservation(
            temperature=temperature,
            description=describe_weather_code(current.get("weathercode")),
        )
