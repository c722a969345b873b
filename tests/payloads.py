"""Sample data.gov.sg payloads shared by the tests."""
from __future__ import annotations

CURRENT_URL = "https://weather.test/air-temperature"
FORECAST_URL = "https://weather.test/4-day-weather-forecast"
WIND_URL = "https://weather.test/wind-speed"
GEO_URL = "https://geo.test/json/"


def make_current_payload(readings=None, timestamp="2024-06-12T17:00:00+08:00") -> dict:
    if readings is None:
        readings = [
            {"station_id": "S109", "value": 30.4},
            {"station_id": "S24", "value": 27.2},
        ]
    return {
        "metadata": {
            "stations": [{"id": r["station_id"]} for r in readings],
            "reading_type": "DBT 1M F",
            "reading_unit": "deg C",
        },
        "items": [{"timestamp": timestamp, "readings": readings}],
    }


def make_forecast_payload(days=4) -> dict:
    labels = ["Thundery Showers", "Partly Cloudy (Day)", "Fair (Day)", "Showers"]
    forecasts = []
    for idx in range(days):
        forecasts.append(
            {
                "date": f"2024-06-{13 + idx:02d}",
                "forecast": labels[idx % len(labels)],
                "temperature": {"low": 25 + idx % 2, "high": 33 - idx % 2},
                "relative_humidity": {"low": 55, "high": 95},
                "wind": {"speed": {"low": 10, "high": 20}, "direction": "SSE"},
            }
        )
    return {
        "items": [
            {
                "update_timestamp": "2024-06-12T17:05:00+08:00",
                "timestamp": "2024-06-12T17:00:00+08:00",
                "forecasts": forecasts,
            }
        ]
    }
