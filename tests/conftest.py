"""Pytest configuration and shared fixtures for the BudgetDate project."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

# Ensure the project root is on sys.path so that import budget_date works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from budget_date.core.config import ApiSettings  # noqa: E402
from budget_date.services.http import JsonHttpClient  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> ApiSettings:
    return ApiSettings(
        gemini_api_key="test-gemini-key",
        gemini_model="gemini-test",
        token_map={"known": "+1 (555) 123-4567"},
        geocode_delay_s=1.2,
    )


@pytest.fixture
def make_http() -> Callable[[Handler], JsonHttpClient]:
    """Build a JsonHttpClient whose requests are answered by ``handler``."""

    def _make(handler: Handler) -> JsonHttpClient:
        return JsonHttpClient(user_agent="BudgetDate-Test/1.0", transport=httpx.MockTransport(handler))

    return _make


def gemini_payload(text: str) -> Dict[str, Any]:
    """Wrap ``text`` the way generateContent returns it."""

    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def plan_text(**overrides: Any) -> str:
    plan = {
        "title": "Sunset & Scoops",
        "steps": ["Coffee at Cafe Uno", "Walk in the park", "Gelato by the river"],
        "total_cost": 35,
        "weather_note": "Mild evening, bring a light jacket",
    }
    plan.update(overrides)
    return json.dumps(plan)


def overpass_element(
    element_id: int,
    name: str | None,
    *,
    lat: float | None = 48.85,
    lon: float | None = 2.35,
    center: Dict[str, float] | None = None,
    **tags: str,
) -> Dict[str, Any]:
    element: Dict[str, Any] = {"type": "node", "id": element_id, "tags": dict(tags)}
    if name is not None:
        element["tags"]["name"] = name
    if lat is not None:
        element["lat"] = lat
    if lon is not None:
        element["lon"] = lon
    if center is not None:
        element["center"] = center
    return element


def overpass_payload(elements: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"version": 0.6, "elements": elements}
