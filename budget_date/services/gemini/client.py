"""Itinerary generation with the Gemini ``generateContent`` REST endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict, Sequence
from urllib.parse import quote

from budget_date.core.config import ApiSettings
from budget_date.core.post_processing import build_plan
from budget_date.core.prompts import build_itinerary_prompt
from budget_date.core.schemas import ItineraryPlan, PlaceCandidate, WeatherObservation
from budget_date.services.http import JsonHttpClient

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEMPERATURE = 0.8
DEFAULT_MAX_OUTPUT_TOKENS = 512


def extract_text(data: Dict[str, Any]) -> str:
    """Return the first candidate's first text part, or ``""``."""

    try:
        return data["candidates"][0]["content"]["parts"][0].get("text") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""


class ItineraryGenerator:
    """Ask Gemini for an itinerary and turn the answer into an ItineraryPlan.

    A single attempt is made per call; upstream failures propagate as
    ``UpstreamError`` and unusable answers as ``ModelOutputError``.
    """

    def __init__(
        self,
        http: JsonHttpClient,
        settings: ApiSettings,
        *,
        base_url: str = GEMINI_BASE_URL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
    ) -> None:
        self._http = http
        self.settings = settings
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{quote(model, safe='')}:generateContent"

    async def generate_text(self, prompt: str) -> str:
        """Send ``prompt`` to the configured model and return its raw text."""

        api_key = self.settings.ensure("gemini_api_key")
        model = self.settings.gemini_model
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        data = await self._http.post_json(
            self.endpoint(model), body, service="Gemini", params={"key": api_key}
        )
        return extract_text(data)

    async def generate_itinerary(
        self,
        *,
        budget: float,
        city: str,
        weather: WeatherObservation,
        preferences: str,
        places: Sequence[PlaceCandidate],
    ) -> ItineraryPlan:
        self.settings.ensure("gemini_api_key")
        prompt = build_itinerary_prompt(
            budget=budget,
            city=city,
            weather=weather,
            preferences=preferences,
            places=places,
        )
        logger.debug("Itinerary prompt: %s", prompt)
        text = await self.generate_text(prompt)
        return build_plan(text, budget)


def create_itinerary_generator(http: JsonHttpClient, settings: ApiSettings) -> ItineraryGenerator:
    """Instantiate the generator using project settings."""

    return ItineraryGenerator(http, settings)
