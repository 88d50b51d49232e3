"""Great-circle distance and coordinate helpers."""
from __future__ import annotations

import math
from typing import Any, Optional

from .models import FEET_PER_METER, Coordinate

EARTH_RADIUS_M = 6371000.0


def distance_in_meters(origin: Coordinate, target: Coordinate) -> float:
    """Return the haversine distance between two coordinates in meters."""

    d_lat = math.radians(target.latitude - origin.latitude)
    d_lon = math.radians(target.longitude - origin.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(target.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def feet_to_meters(feet: float) -> float:
    return feet / FEET_PER_METER


def _coerce_component(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_coordinate(latitude: Any, longitude: Any) -> Optional[Coordinate]:
    """Build a :class:`Coordinate` from stored values, or ``None`` if unusable.

    Spreadsheet cells and JSON payloads may carry numbers as strings, so
    anything ``float()`` accepts is allowed. Non-finite or out-of-range
    components yield ``None``.
    """

    lat = _coerce_component(latitude)
    lng = _coerce_component(longitude)
    if lat is None or lng is None:
        return None
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lng <= 180.0:
        return None
    return Coordinate(latitude=lat, longitude=lng)


__all__ = [
    "EARTH_RADIUS_M",
    "coerce_coordinate",
    "distance_in_meters",
    "feet_to_meters",
    "meters_to_feet",
]
