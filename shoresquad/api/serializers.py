"""Turn domain dataclasses into JSON-ready dictionaries."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Mapping

from shoresquad.core.abstractions import Coordinate, LocationResult, WeatherResult
from shoresquad.core.bootstrap import AppSnapshot, EventView
from shoresquad.core.events import CleanupEvent, Crew, CrewStats


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    return value


def serialize_coordinate(coordinate: Coordinate) -> dict:
    return asdict(coordinate)


def serialize_location(result: LocationResult) -> dict:
    return {
        "coordinate": serialize_coordinate(result.coordinate),
        "source": result.source,
        "fallback_reason": result.fallback_reason,
    }


def serialize_weather(result: WeatherResult) -> dict:
    return {
        "current": _json_value(asdict(result.bundle.current)),
        "forecast": [_json_value(asdict(day)) for day in result.bundle.forecast],
        "source": result.source,
        "fallback_reason": result.fallback_reason,
    }


def serialize_event(event: CleanupEvent) -> dict:
    return event.to_dict()


def serialize_event_view(view: EventView) -> dict:
    payload = serialize_event(view.event)
    payload["distance_m"] = view.distance_m
    payload["distance"] = view.distance_label
    return payload


def serialize_crew(crew: Crew) -> dict:
    return crew.to_dict()


def serialize_stats(stats: CrewStats) -> dict:
    return asdict(stats)


def serialize_snapshot(snapshot: AppSnapshot) -> dict:
    return {
        "location": serialize_location(snapshot.location) if snapshot.location else None,
        "weather": serialize_weather(snapshot.weather) if snapshot.weather else None,
        "events": [serialize_event_view(view) for view in snapshot.events],
        "crews": [serialize_crew(crew) for crew in snapshot.crews],
        "stats": serialize_stats(snapshot.stats) if snapshot.stats else None,
        "notification": snapshot.notification,
    }


def parse_new_event(payload: Mapping) -> CleanupEvent:
    """Build an event from request data; raises ValueError on bad input."""
    if not isinstance(payload, Mapping):
        raise ValueError("payload must be an object")
    data = dict(payload)
    data.setdefault("id", "pending")
    data.setdefault("participants", 0)
    for required in ("title", "date", "location", "max_participants"):
        if required not in data:
            raise ValueError(f"{required} is required")
    if not isinstance(data["location"], Mapping):
        raise ValueError("location must be an object with lat and lng")
    try:
        event = CleanupEvent.from_dict(data)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"invalid event: {exc}") from exc
    if event.max_participants <= 0:
        raise ValueError("max_participants must be positive")
    return event
