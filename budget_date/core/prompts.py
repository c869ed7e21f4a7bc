"""Prompt templates for the itinerary generator."""
from __future__ import annotations

import textwrap
from typing import Sequence

from budget_date.core.schemas import PlaceCandidate, WeatherObservation

ITINERARY_PROMPT = textwrap.dedent(
    """\
    You are a creative, witty date planner.
    Budget: {budget}
    Location: {city}
    Weather: {temperature}°C, {description}
    Preferences: {preferences}
    Nearby places: {places}

    Rules:
    - Suggest 3–4 activities in logical order
    - Keep total cost under budget
    - Mix free & paid activities
    - Include fun descriptions
    - If weather is bad, suggest indoor options
    - Output valid JSON strictly matching this schema: {{"title": string, "steps": string[], "total_cost": number, "weather_note": string}}
    Return ONLY JSON with no markdown, no backticks."""
)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_itinerary_prompt(
    *,
    budget: float,
    city: str,
    weather: WeatherObservation,
    preferences: str,
    places: Sequence[PlaceCandidate],
) -> str:
    """Return the single instruction block sent to the model."""

    return ITINERARY_PROMPT.format(
        budget=_format_number(budget),
        city=city,
        temperature=_format_number(weather.temperature),
        description=weather.description,
        preferences=preferences,
        places=", ".join(place.label for place in places),
    )
