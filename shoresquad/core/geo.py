from __future__ import annotations

import math

from .abstractions import Coordinate

EARTH_RADIUS_M = 6_371_000


def calculate_distance(origin: Coordinate, destination: Coordinate) -> float:
    """Great-circle distance between two coordinates in metres (haversine)."""
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(destination.latitude)
    delta_phi = math.radians(destination.latitude - origin.latitude)
    delta_lambda = math.radians(destination.longitude - origin.longitude)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def format_distance(metres: float) -> str:
    if metres < 1000:
        return f"{round(metres)}m"
    return f"{metres / 1000:.1f}km"


__all__ = ["EARTH_RADIUS_M", "calculate_distance", "format_distance"]
