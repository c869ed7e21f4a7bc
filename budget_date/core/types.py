"""Shared type aliases used across the schemas."""
from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, StringConstraints


def _require_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would be coerced by lax mode
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Input should be a number")
    # json.loads accepts NaN and Infinity, which would slip past comparisons
    if not math.isfinite(value):
        raise ValueError("Input should be a finite number")
    return value


Number = Annotated[float, BeforeValidator(_require_number)]
PositiveNumber = Annotated[float, BeforeValidator(_require_number), Field(gt=0)]
Lat = Annotated[float, BeforeValidator(_require_number), Field(ge=-90, le=90)]
Lon = Annotated[float, BeforeValidator(_require_number), Field(ge=-180, le=180)]
NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
