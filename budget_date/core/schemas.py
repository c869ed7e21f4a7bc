"""Pydantic data models for the BudgetDate tool service.

Key model categories:
- BudgetDateArgs / ValidateArgs: caller-supplied tool arguments
- GeoPoint / WeatherObservation / PlaceCandidate: normalised upstream results
- ItineraryPlan: the model output contract, validated strictly
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from budget_date.core.types import Lat, Lon, NonEmptyStr, Number, PositiveNumber

__all__ = [
    "BudgetDateArgs",
    "ValidateArgs",
    "GeoPoint",
    "WeatherObservation",
    "PlaceCandidate",
    "CostItem",
    "ItineraryPlan",
]


class BudgetDateArgs(BaseModel):
    """Arguments accepted by the ``budgetDate`` tool.

    Either both ``latitude`` and ``longitude`` or a ``city`` must be supplied
    for the request to resolve to coordinates; that rule is enforced by the
    tool service since it may require a geocoding call.
    """

    budget: PositiveNumber = Field(description="Total spend ceiling for the date")
    city: Optional[StrictStr] = Field(default=None, description="Free-text city name")
    latitude: Optional[Lat] = None
    longitude: Optional[Lon] = None
    preferences: Optional[StrictStr] = Field(
        default=None, description="Comma separated keywords, e.g. 'coffee,museum'"
    )
    spin: Optional[StrictBool] = Field(
        default=None, description="Ignore preferences and use the broad default categories"
    )


class ValidateArgs(BaseModel):
    token: NonEmptyStr


class GeoPoint(BaseModel):
    """A geocoded location."""

    lat: float
    lon: float
    display_name: str = ""

    model_config = ConfigDict(frozen=True)


class WeatherObservation(BaseModel):
    """Current conditions at the resolved coordinates."""

    temperature: float = Field(description="Air temperature in °C")
    description: str

    model_config = ConfigDict(frozen=True)


class PlaceCandidate(BaseModel):
    """A nearby point of interest offered to the model as a suggestion."""

    id: Optional[int] = None
    name: NonEmptyStr
    type: Optional[str] = Field(default=None, description="amenity, tourism or leisure tag value")
    lat: float
    lon: float

    @property
    def label(self) -> str:
        """``name (type)`` as it appears in the prompt."""

        if self.type:
            return f"{self.name} ({self.type})"
        return self.name


class CostItem(BaseModel):
    name: StrictStr
    cost: Number


class ItineraryPlan(BaseModel):
    """Itinerary returned by the ``budgetDate`` tool.

    ``total_cost`` is clamped to the request budget after validation; the
    ``breakdown`` items are left as the model produced them, so they may sum to
    a different value after a clamp.
    """

    title: StrictStr
    steps: List[StrictStr] = Field(min_length=3)
    total_cost: Number
    weather_note: Optional[StrictStr] = None
    breakdown: Optional[List[CostItem]] = None
