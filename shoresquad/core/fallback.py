"""Hardcoded records used whenever live weather data is unavailable."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Tuple

from .abstractions import CurrentWeather, ForecastDay, WeatherBundle
from .conditions import PLEASANT, description_for, forecast_description, forecast_icon, icon_for

FALLBACK_TEMPERATURE_C = 29
FALLBACK_HUMIDITY_PCT = 78
FALLBACK_WIND_SPEED_KMH = 12
FALLBACK_RAINFALL_MM = 0

# (label, high, low, humidity high, humidity low, wind)
_FALLBACK_DAYS = (
    ("Partly Cloudy", 32, 26, 90, 60, "NE 10-20 km/h"),
    ("Fair", 33, 26, 85, 55, "NE 10-20 km/h"),
    ("Afternoon thundery showers", 31, 25, 95, 60, "E 10-25 km/h"),
    ("Partly Cloudy", 32, 26, 90, 60, "NE 10-20 km/h"),
)


def fallback_current(now: datetime) -> CurrentWeather:
    return CurrentWeather(
        temperature_c=FALLBACK_TEMPERATURE_C,
        humidity_pct=FALLBACK_HUMIDITY_PCT,
        wind_speed_kmh=FALLBACK_WIND_SPEED_KMH,
        rainfall_mm=FALLBACK_RAINFALL_MM,
        condition=PLEASANT,
        description=description_for(PLEASANT),
        icon=icon_for(PLEASANT),
        timestamp=now,
    )


def fallback_forecast(today: date) -> Tuple[ForecastDay, ...]:
    return tuple(
        ForecastDay(
            date=today + timedelta(days=offset),
            forecast=label,
            temperature_high=high,
            temperature_low=low,
            humidity_high=humidity_high,
            humidity_low=humidity_low,
            icon=forecast_icon(label),
            description=forecast_description(label),
            wind=wind,
        )
        for offset, (label, high, low, humidity_high, humidity_low, wind) in enumerate(_FALLBACK_DAYS)
    )


def fallback_bundle(now: datetime) -> WeatherBundle:
    return WeatherBundle(current=fallback_current(now), forecast=fallback_forecast(now.date()))


__all__ = ["fallback_bundle", "fallback_current", "fallback_forecast"]
