from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import InvalidCoordinate, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def _require_finite(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidCoordinate(f"{field_name} must be a number")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise InvalidCoordinate(f"{field_name} must be a finite number")
    return value


def require_latitude(value: Any) -> float:
    lat = _require_finite(value, "Latitude")
    if lat < -90 or lat > 90:
        raise InvalidCoordinate("Latitude must be between -90 and 90")
    return lat


def require_longitude(value: Any) -> float:
    lng = _require_finite(value, "Longitude")
    if lng < -180 or lng > 180:
        raise InvalidCoordinate("Longitude must be between -180 and 180")
    return lng


def require_radius(value: Any) -> float:
    radius = _require_finite(value, "Radius")
    if radius <= 0:
        raise InvalidCoordinate("Radius must be greater than 0")
    return radius
