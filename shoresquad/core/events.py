"""Cleanup events and crews kept in key-value storage."""
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Iterable, List, Mapping, Optional

from .abstractions import Coordinate
from .config import AppConfig
from .storage import KeyValueStore, StorageWriteError


logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_TODAY = "today"
FILTER_WEEKEND = "weekend"
FILTER_UPCOMING = "upcoming"
FILTERS = (FILTER_ALL, FILTER_TODAY, FILTER_WEEKEND, FILTER_UPCOMING)

AVG_TRASH_PER_CLEANUP_KG = 8.2


class EventNotFound(LookupError):
    pass


class CrewNotFound(LookupError):
    pass


@dataclass(frozen=True)
class CleanupEvent:
    id: str
    title: str
    date: datetime
    location: Coordinate
    participants: int
    max_participants: int
    organizer: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "location": {
                "lat": self.location.latitude,
                "lng": self.location.longitude,
                "name": self.location.name,
            },
            "participants": self.participants,
            "max_participants": self.max_participants,
            "organizer": self.organizer,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, payload: Mapping) -> "CleanupEvent":
        location = payload["location"]
        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            date=_parse_datetime(payload["date"]),
            location=Coordinate(
                latitude=float(location["lat"]),
                longitude=float(location["lng"]),
                name=location.get("name"),
            ),
            participants=int(payload.get("participants", 0)),
            max_participants=int(payload["max_participants"]),
            organizer=str(payload.get("organizer", "")),
            description=str(payload.get("description", "")),
        )


@dataclass(frozen=True)
class Crew:
    id: str
    name: str
    members: int
    cleanups: int
    avatar: str
    description: str
    next_event: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping) -> "Crew":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            members=int(payload["members"]),
            cleanups=int(payload["cleanups"]),
            avatar=str(payload.get("avatar", "")),
            description=str(payload.get("description", "")),
            next_event=str(payload.get("next_event", "")),
        )


@dataclass(frozen=True)
class CrewStats:
    active_crews: int
    cleanups_completed: int
    trash_collected_kg: float


def seed_events(now: datetime) -> List[CleanupEvent]:
    return [
        CleanupEvent(
            id="event_1",
            title="East Coast Park Morning Cleanup",
            date=now + timedelta(days=1),
            location=Coordinate(1.3008, 103.9122, name="East Coast Park, Singapore"),
            participants=12,
            max_participants=25,
            organizer="EcoWarriors Squad",
            description="Join us for a morning beach cleanup at East Coast Park!",
        ),
        CleanupEvent(
            id="event_2",
            title="Pasir Ris Earth Day Special",
            date=now + timedelta(days=3),
            location=Coordinate(1.3815, 103.9556, name="Pasir Ris Beach, Singapore"),
            participants=8,
            max_participants=20,
            organizer="Green Coast Collective",
            description="Earth Day celebration with beach cleanup and lunch!",
        ),
        CleanupEvent(
            id="event_3",
            title="Changi Beach Weekend Warriors",
            date=now + timedelta(days=5),
            location=Coordinate(1.3906, 103.9915, name="Changi Beach, Singapore"),
            participants=15,
            max_participants=30,
            organizer="Bay Area Beach Squad",
            description="Weekend cleanup with post-activity BBQ!",
        ),
    ]


SEED_CREWS = (
    Crew(
        id="crew_1",
        name="EcoWarriors Squad",
        members=24,
        cleanups=8,
        avatar="🌊",
        description="Young environmentalists making waves along the coast!",
        next_event="East Coast Park Morning Cleanup",
    ),
    Crew(
        id="crew_2",
        name="Green Coast Collective",
        members=18,
        cleanups=12,
        avatar="🏖️",
        description="Dedicated to keeping our coastlines pristine",
        next_event="Pasir Ris Earth Day Special",
    ),
    Crew(
        id="crew_3",
        name="Bay Area Beach Squad",
        members=31,
        cleanups=15,
        avatar="♻️",
        description="The largest beach cleanup crew on the east coast",
        next_event="Changi Beach Weekend Warriors",
    ),
)


def filter_events(
    events: Iterable[CleanupEvent],
    token: str,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> List[CleanupEvent]:
    """Return the events matching ``token``, keeping the input order.

    ``today`` and ``weekend`` compare calendar days in ``tz`` (defaults to the
    time zone of ``now``).
    """
    if token not in FILTERS:
        raise ValueError(f"unknown filter: {token}")
    events = list(events)
    if token == FILTER_ALL:
        return events

    tz = tz or now.tzinfo
    local_now = now.astimezone(tz)

    def matches(event: CleanupEvent) -> bool:
        local_date = event.date.astimezone(tz)
        if token == FILTER_TODAY:
            return local_date.date() == local_now.date()
        if token == FILTER_WEEKEND:
            return local_date.weekday() >= 5
        return event.date > now

    return [event for event in events if matches(event)]


def crew_stats(crews: Iterable[Crew]) -> CrewStats:
    crews = list(crews)
    total_cleanups = sum(crew.cleanups for crew in crews)
    return CrewStats(
        active_crews=len(crews),
        cleanups_completed=total_cleanups,
        trash_collected_kg=round(total_cleanups * AVG_TRASH_PER_CLEANUP_KG, 1),
    )


def generate_id() -> str:
    return f"id_{uuid.uuid4().hex[:12]}"


class EventRepository:
    """Read events and crews from storage, seeding defaults when empty.

    Joining is optimistic: the returned copy carries the new count but the
    stored record is left alone.
    """

    def __init__(
        self,
        config: AppConfig,
        storage: KeyValueStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config
        self._storage = storage
        self._clock = clock or (lambda: datetime.now(tz=config.timezone))

    def get_events(self) -> List[CleanupEvent]:
        stored = self._storage.get(self._config.storage_keys.cleanup_events)
        if stored is None:
            return seed_events(self._clock())
        try:
            return [CleanupEvent.from_dict(item) for item in stored]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Stored events are malformed, using defaults: %s", exc)
            return seed_events(self._clock())

    def get_crews(self) -> List[Crew]:
        stored = self._storage.get(self._config.storage_keys.crew_data)
        if stored is None:
            return list(SEED_CREWS)
        try:
            return [Crew.from_dict(item) for item in stored]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Stored crews are malformed, using defaults: %s", exc)
            return list(SEED_CREWS)

    def get_event(self, event_id: str) -> CleanupEvent:
        for event in self.get_events():
            if event.id == event_id:
                return event
        raise EventNotFound(event_id)

    def get_crew(self, crew_id: str) -> Crew:
        for crew in self.get_crews():
            if crew.id == crew_id:
                return crew
        raise CrewNotFound(crew_id)

    def add_event(self, event: CleanupEvent) -> List[CleanupEvent]:
        events = self.get_events()
        events.append(replace(event, id=generate_id()))
        key = self._config.storage_keys.cleanup_events
        if not self._storage.set(key, [item.to_dict() for item in events]):
            raise StorageWriteError(key)
        return events

    def join_event(self, event_id: str) -> CleanupEvent:
        event = self.get_event(event_id)
        return replace(event, participants=min(event.participants + 1, event.max_participants))

    def join_crew(self, crew_id: str) -> Crew:
        crew = self.get_crew(crew_id)
        return replace(crew, members=crew.members + 1)

    def filter(self, token: str) -> List[CleanupEvent]:
        return filter_events(self.get_events(), token, self._clock(), tz=self._config.timezone)


def _parse_datetime(value) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        raise ValueError("event date must be timezone aware")
    return dt


__all__ = [
    "FILTERS",
    "CleanupEvent",
    "Crew",
    "CrewNotFound",
    "CrewStats",
    "EventNotFound",
    "EventRepository",
    "crew_stats",
    "filter_events",
    "seed_events",
]
