from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from django.core.cache import caches
from requests_mock import Mocker

from shoresquad.core.config import AppConfig
from shoresquad.core.storage import KeyValueStore

from payloads import CURRENT_URL, FORECAST_URL, GEO_URL


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock

@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        current_readings_url=CURRENT_URL,
        forecast_url=FORECAST_URL,
        geolocation_url=GEO_URL,
        preferred_station="S24",
    )

@pytest.fixture
def storage():
    cache = caches["storage"]
    cache.clear()
    yield KeyValueStore(cache)
    cache.clear()

class TimeController:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)

    def __call__(self) -> datetime:
        return self.now

@pytest.fixture
def clock() -> TimeController:
    return TimeController(datetime(2024, 6, 12, 9, 0, tzinfo=timezone.utc))

