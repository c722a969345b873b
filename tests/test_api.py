from __future__ import annotations

import json

import pytest
from django.apps import apps
from django.core.cache import caches
from django.core.management import call_command
from django.db import connections
from django.test import Client

from shoresquad.api.views import get_services

from payloads import make_current_payload, make_forecast_payload

LIVE_CURRENT_URL = "https://api.data.gov.sg/v1/environment/air-temperature"
LIVE_FORECAST_URL = "https://api.data.gov.sg/v1/environment/4-day-weather-forecast"
LIVE_GEO_URL = "https://ipapi.co/json/"


@pytest.fixture(autouse=True)
def fresh_services():
    get_services.cache_clear()
    caches["storage"].clear()
    yield
    get_services.cache_clear()
    caches["storage"].clear()


@pytest.fixture
def live_weather(requests_mock):
    requests_mock.get(LIVE_CURRENT_URL, json=make_current_payload())
    requests_mock.get(LIVE_FORECAST_URL, json=make_forecast_payload())
    return requests_mock


def test_weather_endpoint_returns_payload(live_weather) -> None:
    response = Client().get("/api/weather")

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "live"
    assert payload["fallback_reason"] is None
    assert payload["current"]["station_id"] == "S24"
    assert payload["current"]["timestamp"] == "2024-06-12T17:00:00+08:00"
    assert len(payload["forecast"]) == 4
    assert payload["forecast"][0]["date"] == "2024-06-13"


def test_weather_endpoint_reports_fallback(requests_mock) -> None:
    requests_mock.get(LIVE_CURRENT_URL, status_code=502, text="bad gateway")

    payload = Client().get("/api/weather").json()

    assert payload["source"] == "fallback"
    assert payload["current"]["temperature_c"] == 29
    assert payload["current"]["condition"] == "pleasant"

    health = Client().get("/api/health").json()
    assert health["weather"]["fallback"] == 1
    assert health["weather"]["last_fallback_reason"] == "ProviderError: HTTP 502"


def test_location_endpoint_falls_back(requests_mock) -> None:
    requests_mock.get(LIVE_GEO_URL, status_code=403, text="denied")

    payload = Client().get("/api/location").json()

    assert payload["source"] == "fallback"
    assert payload["coordinate"]["name"] == "Pasir Ris Beach, Singapore"
    assert payload["fallback_reason"] == "permission denied"


def test_events_endpoint_filters_and_measures(requests_mock) -> None:
    response = Client().get("/api/events", {"filter": "upcoming", "lat": "1.3815", "lng": "103.9556"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["filter"] == "upcoming"
    assert [event["id"] for event in payload["events"]] == ["event_1", "event_2", "event_3"]
    assert payload["events"][1]["distance"] == "0m"


def test_events_endpoint_validates_params() -> None:
    client = Client()

    assert client.get("/api/events", {"filter": "someday"}).status_code == 400
    assert client.get("/api/events", {"lat": "abc", "lng": "103.9"}).status_code == 400
    assert client.get("/api/events", {"lat": "1.3"}).status_code == 400


def test_create_event() -> None:
    client = Client()
    body = {
        "title": "Sentosa Sunrise Sweep",
        "date": "2030-01-05T07:00:00+08:00",
        "location": {"lat": 1.2494, "lng": 103.8303, "name": "Siloso Beach"},
        "max_participants": 40,
        "organizer": "Green Coast Collective",
    }

    response = client.post("/api/events", data=json.dumps(body), content_type="application/json")

    assert response.status_code == 201
    created = response.json()
    assert created["id"].startswith("id_")
    assert created["participants"] == 0
    listed = client.get("/api/events").json()["events"]
    assert listed[-1]["title"] == "Sentosa Sunrise Sweep"


def test_create_event_reports_storage_failure(monkeypatch) -> None:
    client = Client()
    monkeypatch.setattr(get_services().storage, "set", lambda key, value: False)
    body = {
        "title": "Sentosa Sunrise Sweep",
        "date": "2030-01-05T07:00:00+08:00",
        "location": {"lat": 1.2494, "lng": 103.8303},
        "max_participants": 40,
    }

    response = client.post("/api/events", data=json.dumps(body), content_type="application/json")

    assert response.status_code == 503
    assert response.json()["detail"] == "event could not be saved"
    titles = [event["title"] for event in client.get("/api/events").json()["events"]]
    assert "Sentosa Sunrise Sweep" not in titles


def test_create_event_rejects_invalid_payload() -> None:
    response = Client().post(
        "/api/events",
        data=json.dumps({"title": "No date", "location": {"lat": 1, "lng": 2}, "max_participants": 5}),
        content_type="application/json",
    )

    assert response.status_code == 400
    assert "date" in response.json()["detail"]


def test_join_endpoints() -> None:
    client = Client()

    joined = client.post("/api/events/event_2/join").json()
    assert joined["event"]["participants"] == 9

    crew = client.post("/api/crews/crew_3/join").json()
    assert crew["crew"]["members"] == 32

    assert client.post("/api/events/missing/join").status_code == 404
    assert client.post("/api/crews/missing/join").status_code == 404


def test_crews_and_stats() -> None:
    client = Client()

    crews = client.get("/api/crews").json()["crews"]
    stats = client.get("/api/stats").json()

    assert len(crews) == 3
    assert stats == {"active_crews": 3, "cleanups_completed": 35, "trash_collected_kg": 287.0}


def test_bootstrap_endpoint(live_weather) -> None:
    live_weather.get(LIVE_GEO_URL, json={"city": "Singapore", "latitude": 1.3008, "longitude": 103.9122})

    payload = Client().get("/api/bootstrap").json()

    assert payload["notification"] is None
    assert payload["location"]["source"] == "live"
    assert payload["weather"]["source"] == "live"
    assert payload["events"][0]["distance"] == "0m"
    assert payload["stats"]["active_crews"] == 3


def test_weather_fetch_command(live_weather, capsys) -> None:
    call_command("weather_fetch")

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "live"
    assert payload["current"]["wind_speed_kmh"] == 12


def test_preferences_round_trip() -> None:
    client = Client()

    assert client.get("/api/preferences").json() == {}
    saved = client.put(
        "/api/preferences", data=json.dumps({"units": "metric"}), content_type="application/json"
    )

    assert saved.status_code == 200
    assert client.get("/api/preferences").json() == {"units": "metric"}
    assert client.put("/api/preferences", data="[1, 2]", content_type="application/json").status_code == 400


def test_runs_without_database_or_auth_apps() -> None:
    assert not apps.is_installed("django.contrib.auth")
    assert not apps.is_installed("django.contrib.contenttypes")
    assert connections["default"].settings_dict["ENGINE"] == "django.db.backends.dummy"
    assert Client().get("/api/health").status_code == 200
