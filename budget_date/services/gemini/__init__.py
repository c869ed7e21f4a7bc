"""Gemini generative-text integration.

Public API:
    - ItineraryGenerator: prompt, call, parse and validate an itinerary
    - create_itinerary_generator: factory using project settings
"""
from budget_date.services.gemini.client import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    GEMINI_BASE_URL,
    ItineraryGenerator,
    create_itinerary_generator,
    extract_text,
)

__all__ = [
    "DEFAULT_MAX_OUTPUT_TOKENS",
    "DEFAULT_TEMPERATURE",
    "GEMINI_BASE_URL",
    "ItineraryGenerator",
    "create_itinerary_generator",
    "extract_text",
]
