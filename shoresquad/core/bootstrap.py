"""Initialization sequence: location, weather, then events and crews."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .abstractions import LocationResult, WeatherResult
from .events import CleanupEvent, Crew, CrewStats, EventRepository, crew_stats
from .geo import calculate_distance, format_distance
from .location import LocationResolver
from .services.weather_service import WeatherService


logger = logging.getLogger(__name__)

INIT_FAILED_MESSAGE = "Failed to initialize app. Please refresh the page."


@dataclass(frozen=True)
class EventView:
    event: CleanupEvent
    distance_m: Optional[float] = None
    distance_label: str = ""


@dataclass(frozen=True)
class AppSnapshot:
    location: Optional[LocationResult] = None
    weather: Optional[WeatherResult] = None
    events: Tuple[EventView, ...] = field(default_factory=tuple)
    crews: Tuple[Crew, ...] = field(default_factory=tuple)
    stats: Optional[CrewStats] = None
    notification: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.notification is None


def annotate_events(events: List[CleanupEvent], location: Optional[LocationResult]) -> Tuple[EventView, ...]:
    if location is None:
        return tuple(EventView(event=event) for event in events)
    views = []
    for event in events:
        distance = calculate_distance(location.coordinate, event.location)
        views.append(EventView(event=event, distance_m=distance, distance_label=format_distance(distance)))
    return tuple(views)


class AppBootstrap:
    def __init__(
        self,
        resolver: LocationResolver,
        weather: WeatherService,
        repository: EventRepository,
    ) -> None:
        self._resolver = resolver
        self._weather = weather
        self._repository = repository

    def initialize(self) -> AppSnapshot:
        try:
            location = self._resolver.resolve()
            logger.info("Location loaded: %s (%s)", location.coordinate, location.source)
            weather = self._weather.fetch()
            events = self._repository.get_events()
            crews = self._repository.get_crews()
            logger.info("Data loaded: %d events, %d crews", len(events), len(crews))
            return AppSnapshot(
                location=location,
                weather=weather,
                events=annotate_events(events, location),
                crews=tuple(crews),
                stats=crew_stats(crews),
            )
        except Exception:  # noqa: BLE001 - reported once as a user-facing notification
            logger.exception("Error initializing ShoreSquad")
            return AppSnapshot(notification=INIT_FAILED_MESSAGE)


__all__ = ["AppBootstrap", "AppSnapshot", "EventView", "INIT_FAILED_MESSAGE", "annotate_events"]
