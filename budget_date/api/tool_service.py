import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from budget_date.core.config import ApiSettings
from budget_date.core.errors import BadRequestError, ToolNotFoundError, UnauthorizedError
from budget_date.core.schemas import BudgetDateArgs, ItineraryPlan, ValidateArgs
from budget_date.services import (
    Geocoder,
    ItineraryGenerator,
    JsonHttpClient,
    PlacesClient,
    WeatherClient,
    create_http_client,
    create_itinerary_generator,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "validate",
        "description": "Validates bearer token and returns owner phone number",
        "input_schema": {
            "type": "object",
            "required": [],
            "properties": {"token": {"type": "string"}},
        },
    },
    {
        "name": "budgetDate",
        "description": (
            "Given budget, city or coordinates, and preferences, "
            "returns a 3–4 step romantic itinerary as JSON"
        ),
        "input_schema": {
            "type": "object",
            "required": ["budget"],
            "properties": {
                "budget": {"type": "number"},
                "city": {"type": "string"},
                "latitude": {"type": "number"},
                "longitude": {"type": "number"},
                "preferences": {"type": "string"},
                "spin": {"type": "boolean"},
            },
        },
    },
]


def normalize_phone(phone: str) -> str:
    """Strip everything but digits (``+1 (555) 123-4567`` -> ``15551234567``)."""

    return re.sub(r"\D", "", str(phone))


def _parse_args(model: type[BaseModel], args: Optional[Mapping[str, Any]]) -> Any:
    try:
        return model.model_validate(dict(args or {}))
    except ValidationError as exc:
        details = [
            {"loc": ".".join(str(part) for part in error["loc"]), "msg": error["msg"]}
            for error in exc.errors()
        ]
        raise BadRequestError("Invalid tool arguments", details=details) from exc


class ToolBundle:
    """Container for the tool implementations and their upstream clients.

    The bundle owns one shared HTTP client; every adapter can be swapped in
    tests through the constructor. ``sleep`` is awaited for the courtesy pause
    after a geocoding call.

    Attributes:
        settings: configuration built once at start-up
        geocoder / weather / places / generator: upstream adapters
        sleep: coroutine function used for the post-geocode delay
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        http: Optional[JsonHttpClient] = None,
        geocoder: Optional[Geocoder] = None,
        weather: Optional[WeatherClient] = None,
        places: Optional[PlacesClient] = None,
        generator: Optional[ItineraryGenerator] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self.http = http or create_http_client(settings)
        self.geocoder = geocoder or Geocoder(self.http)
        self.weather = weather or WeatherClient(self.http)
        self.places = places or PlacesClient(self.http)
        self.generator = generator or create_itinerary_generator(self.http, settings)
        self.sleep = sleep

    async def close(self) -> None:
        await self.http.aclose()

    def list_tools(self) -> Dict[str, Any]:
        return {"tools": TOOL_DEFINITIONS}

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Dispatch a tool call by name."""

        if name == "validate":
            return await self.validate(arguments)
        if name == "budgetDate":
            return await self.budget_date(arguments)
        raise ToolNotFoundError(f"Tool not found: {name}")

    async def validate(self, arguments: Optional[Mapping[str, Any]]) -> str:
        """Map a bearer token to its owner's phone number, digits only.

        Unknown tokens fall back to ``owner_phone`` for single-owner setups.
        """

        token = (arguments or {}).get("token")
        if not token:
            raise UnauthorizedError("Missing bearer token")
        args: ValidateArgs = _parse_args(ValidateArgs, arguments)

        phone = self.settings.token_map.get(args.token) or self.settings.owner_phone
        if not phone:
            raise UnauthorizedError("Unauthorized: token not recognized and OWNER_PHONE not set")

        normalized = normalize_phone(phone)
        if not normalized:
            raise BadRequestError("Invalid phone mapping")
        return normalized

    async def budget_date(self, arguments: Optional[Mapping[str, Any]]) -> ItineraryPlan:
        """Build a date itinerary for the requested budget and location.

        Steps, strictly in order:
        - geocode ``city`` unless both coordinates were given, then pause
        - fetch current weather
        - search nearby places
        - generate and validate the itinerary
        """

        args: BudgetDateArgs = _parse_args(BudgetDateArgs, arguments)
        lat, lon, city = args.latitude, args.longitude, args.city

        if (lat is None or lon is None) and city:
            geo = await self.geocoder.geocode(city)
            if geo is None:
                raise BadRequestError("Could not find city")
            lat, lon = geo.lat, geo.lon
            city = geo.display_name.split(",")[0].strip() or city
            logger.info("Geocoded %r to %.5f,%.5f", args.city, lat, lon)
            await self.sleep(self.settings.geocode_delay_s)

        if lat is None or lon is None:
            raise BadRequestError("latitude/longitude or city is required")

        weather = await self.weather.get_weather(lat, lon)
        places = await self.places.find_places(lat, lon, args.preferences, bool(args.spin))
        logger.info(
            "Planning date in %s: %s°C %s, %d candidate places",
            city or "coordinates",
            weather.temperature,
            weather.description,
            len(places),
        )

        return await self.generator.generate_itinerary(
            budget=args.budget,
            city=city or f"{lat:.3f},{lon:.3f}",
            weather=weather,
            preferences=args.preferences or "",
            places=places,
        )
