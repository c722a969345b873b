from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from shoresquad.core.abstractions import Coordinate
from shoresquad.core.events import (
    CleanupEvent,
    CrewNotFound,
    EventNotFound,
    EventRepository,
    crew_stats,
    filter_events,
    seed_events,
)
from shoresquad.core.storage import StorageWriteError

SGT = ZoneInfo("Asia/Singapore")
# Wednesday 12 June 2024, 17:00 in Singapore.
NOW = datetime(2024, 6, 12, 9, 0, tzinfo=timezone.utc)


def make_event(event_id: str, when: str) -> CleanupEvent:
    return CleanupEvent(
        id=event_id,
        title=f"Cleanup {event_id}",
        date=datetime.fromisoformat(when),
        location=Coordinate(1.3008, 103.9122, name="East Coast Park"),
        participants=3,
        max_participants=10,
        organizer="EcoWarriors Squad",
    )


@pytest.fixture
def events():
    return [
        make_event("tonight", "2024-06-12T20:00:00+08:00"),
        make_event("late-utc", "2024-06-12T23:30:00+00:00"),
        make_event("saturday", "2024-06-15T08:00:00+08:00"),
        make_event("yesterday", "2024-06-11T08:00:00+08:00"),
        make_event("last-sunday", "2024-06-09T08:00:00+08:00"),
    ]


def ids(events):
    return [event.id for event in events]


def test_all_returns_every_event_in_order(events):
    assert filter_events(events, "all", NOW, tz=SGT) == events


def test_today_uses_local_calendar_day(events):
    assert ids(filter_events(events, "today", NOW, tz=SGT)) == ["tonight"]


def test_today_in_utc(events):
    assert ids(filter_events(events, "today", NOW, tz=timezone.utc)) == ["tonight", "late-utc"]


def test_weekend(events):
    assert ids(filter_events(events, "weekend", NOW, tz=SGT)) == ["saturday", "last-sunday"]


def test_upcoming(events):
    assert ids(filter_events(events, "upcoming", NOW, tz=SGT)) == ["tonight", "late-utc", "saturday"]


def test_unknown_filter(events):
    with pytest.raises(ValueError):
        filter_events(events, "someday", NOW)


def test_seeded_events_are_relative_to_now(config, storage):
    repository = EventRepository(config, storage, clock=lambda: NOW)

    events = repository.get_events()

    assert ids(events) == ["event_1", "event_2", "event_3"]
    assert [(event.date - NOW).days for event in events] == [1, 3, 5]
    assert ids(repository.filter("upcoming")) == ids(events)
    assert repository.filter("today") == []


def test_add_event_persists_with_generated_id(config, storage):
    repository = EventRepository(config, storage, clock=lambda: NOW)

    events = repository.add_event(make_event("ignored", "2024-06-20T08:00:00+08:00"))

    assert len(events) == 4
    assert events[-1].id.startswith("id_")
    assert events[-1].id != "ignored"
    assert ids(repository.get_events()) == ids(events)
    stored = storage.get(config.storage_keys.cleanup_events)
    assert stored[-1]["location"] == {"lat": 1.3008, "lng": 103.9122, "name": "East Coast Park"}


def test_add_event_reports_failed_write(config, storage, monkeypatch):
    repository = EventRepository(config, storage, clock=lambda: NOW)
    monkeypatch.setattr(storage, "set", lambda key, value: False)

    with pytest.raises(StorageWriteError):
        repository.add_event(make_event("ignored", "2024-06-20T08:00:00+08:00"))

    assert ids(repository.get_events()) == ["event_1", "event_2", "event_3"]


def test_join_event_is_not_persisted(config, storage):
    repository = EventRepository(config, storage, clock=lambda: NOW)

    joined = repository.join_event("event_1")

    assert joined.participants == 13
    assert repository.get_event("event_1").participants == 12


def test_join_event_is_capped(config, storage):
    repository = EventRepository(config, storage, clock=lambda: NOW)
    full = make_event("full", "2024-06-20T08:00:00+08:00")
    storage.set(config.storage_keys.cleanup_events, [full.to_dict() | {"participants": 10}])

    assert repository.join_event("full").participants == 10


def test_join_unknown_records(config, storage):
    repository = EventRepository(config, storage, clock=lambda: NOW)

    with pytest.raises(EventNotFound):
        repository.join_event("nope")
    with pytest.raises(CrewNotFound):
        repository.join_crew("nope")


def test_join_crew(config, storage):
    repository = EventRepository(config, storage)

    crew = repository.join_crew("crew_2")

    assert crew.members == 19
    assert repository.get_crew("crew_2").members == 18


def test_malformed_storage_uses_seed_data(config, storage):
    storage.set(config.storage_keys.cleanup_events, [{"id": "broken"}])
    storage.set(config.storage_keys.crew_data, "not a list")
    repository = EventRepository(config, storage, clock=lambda: NOW)

    assert ids(repository.get_events()) == ["event_1", "event_2", "event_3"]
    assert len(repository.get_crews()) == 3


def test_naive_dates_are_rejected():
    payload = make_event("x", "2024-06-20T08:00:00+08:00").to_dict()
    payload["date"] = "2024-06-20T08:00:00"

    with pytest.raises(ValueError):
        CleanupEvent.from_dict(payload)


def test_crew_stats(config, storage):
    stats = crew_stats(EventRepository(config, storage).get_crews())

    assert stats.active_crews == 3
    assert stats.cleanups_completed == 35
    assert stats.trash_collected_kg == 287.0


def test_seed_events_use_given_clock():
    assert seed_events(NOW)[0].date == datetime(2024, 6, 13, 9, 0, tzinfo=timezone.utc)
