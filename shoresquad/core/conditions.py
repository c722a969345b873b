"""Qualitative weather conditions and their static lookup tables.

The thresholds are policy constants, checked in order: heavy rain wins over
humidity, humidity over heat, and so on.
"""
from __future__ import annotations

from typing import Optional

RAINY = "rainy"
HUMID = "humid"
HOT = "hot"
COOL = "cool"
PLEASANT = "pleasant"

RAINFALL_THRESHOLD_MM = 5
HUMIDITY_THRESHOLD_PCT = 80
HOT_THRESHOLD_C = 32
COOL_THRESHOLD_C = 26

KNOTS_TO_KMH = 1.852

CONDITION_ICONS = {
    RAINY: "🌧️",
    HUMID: "💧",
    HOT: "☀️",
    COOL: "⛅",
    PLEASANT: "🌤️",
}

CONDITION_DESCRIPTIONS = {
    RAINY: "Consider rescheduling your cleanup",
    HUMID: "Humid out there, bring extra water",
    HOT: "Hot day, remember sunscreen and shade breaks",
    COOL: "Cool and comfortable for a cleanup",
    PLEASANT: "Perfect weather for beach cleanup!",
}

DEFAULT_ICON = "🌤️"
DEFAULT_DESCRIPTION = "Weather conditions are variable"

# Keyword -> (icon, description) for free-text forecast labels, first match wins.
FORECAST_KEYWORDS = (
    ("thunder", "⛈️", "Thundery showers expected, stay off the beach"),
    ("shower", "🌦️", "Passing showers, pack a raincoat"),
    ("rain", "🌧️", "Rain expected, consider rescheduling"),
    ("cloud", "☁️", "Cloudy skies, great for outdoor work"),
    ("wind", "💨", "Windy conditions, secure your bags"),
    ("fair", "☀️", "Fair weather, ideal for a cleanup"),
    ("sunny", "☀️", "Sunny skies, ideal for a cleanup"),
)


def derive_condition(temperature: float, humidity: float, rainfall: float) -> str:
    if rainfall > RAINFALL_THRESHOLD_MM:
        return RAINY
    if humidity > HUMIDITY_THRESHOLD_PCT:
        return HUMID
    if temperature > HOT_THRESHOLD_C:
        return HOT
    if temperature < COOL_THRESHOLD_C:
        return COOL
    return PLEASANT


def icon_for(condition: str) -> str:
    return CONDITION_ICONS.get(condition, DEFAULT_ICON)


def description_for(condition: str) -> str:
    return CONDITION_DESCRIPTIONS.get(condition, DEFAULT_DESCRIPTION)


def _match_forecast(text: Optional[str]):
    lowered = (text or "").lower()
    for keyword, icon, description in FORECAST_KEYWORDS:
        if keyword in lowered:
            return icon, description
    return DEFAULT_ICON, DEFAULT_DESCRIPTION


def forecast_icon(text: Optional[str]) -> str:
    return _match_forecast(text)[0]


def forecast_description(text: Optional[str]) -> str:
    return _match_forecast(text)[1]


def knots_to_kmh(value: float) -> int:
    """Convert a wind reading in knots to km/h, rounding after the conversion."""
    return round(value * KNOTS_TO_KMH)


__all__ = [
    "COOL",
    "CONDITION_DESCRIPTIONS",
    "CONDITION_ICONS",
    "HOT",
    "HUMID",
    "PLEASANT",
    "RAINY",
    "derive_condition",
    "description_for",
    "forecast_description",
    "forecast_icon",
    "icon_for",
    "knots_to_kmh",
]
