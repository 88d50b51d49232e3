"""Match an observer position against previously logged leads."""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .geo import coerce_coordinate, distance_in_meters
from .models import Coordinate, LeadLocationRecord, NearbyMatch, last_call_summary

LOGGER = logging.getLogger(__name__)

# 300 ft
DEFAULT_RADIUS_METERS = 91.44
DEFAULT_MAX_RESULTS = 5


class InvalidArgument(ValueError):
    """Raised when a matching call receives an unusable argument."""


def _validate_observer(observer: Optional[Coordinate]) -> Coordinate:
    if observer is None:
        raise InvalidArgument("An observer coordinate is required")
    try:
        lat = float(observer.latitude)
        lng = float(observer.longitude)
    except (AttributeError, TypeError, ValueError) as exc:
        raise InvalidArgument(f"Observer coordinate {observer!r} is not numeric") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidArgument(f"Observer coordinate {observer!r} is not finite")
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lng <= 180.0:
        raise InvalidArgument(f"Observer coordinate {observer!r} is out of range")
    return Coordinate(latitude=lat, longitude=lng)


def find_nearby(
    observer: Coordinate,
    candidates: Sequence[LeadLocationRecord],
    radius_meters: float = DEFAULT_RADIUS_METERS,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[NearbyMatch]:
    """Return the leads within ``radius_meters`` of ``observer``, nearest first.

    Candidates without a usable stored coordinate are skipped. Equal
    distances keep their input order and at most ``max_results`` matches
    are returned. The candidate records are never modified.
    """

    origin = _validate_observer(observer)
    if not radius_meters > 0:
        raise InvalidArgument(f"radius_meters must be positive, got {radius_meters!r}")
    if max_results < 0:
        raise InvalidArgument(f"max_results must not be negative, got {max_results!r}")

    matches: List[NearbyMatch] = []
    for record in candidates:
        stored = record.coordinate
        target = coerce_coordinate(stored.latitude, stored.longitude) if stored is not None else None
        if target is None:
            LOGGER.debug("Skipping lead %s without a usable coordinate", record.id)
            continue
        distance = distance_in_meters(origin, target)
        if distance <= radius_meters:
            matches.append(NearbyMatch(record=record, distance_meters=distance))

    matches.sort(key=lambda match: match.distance_meters)
    LOGGER.debug(
        "Found %s of %s candidates within %.1f m", len(matches), len(candidates), radius_meters
    )
    return matches[:max_results]


__all__ = [
    "DEFAULT_MAX_RESULTS",
    "DEFAULT_RADIUS_METERS",
    "InvalidArgument",
    "find_nearby",
    "last_call_summary",
]
