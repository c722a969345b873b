"""Provider for the data.gov.sg environment endpoints.

Two endpoints are used: the latest air temperature of every weather station
and the four day outlook. The real-time endpoints report one ``value`` per
station and metric, so humidity and rainfall keep their fallback values. Wind
is read from the wind-speed endpoint (in knots) only when one is configured.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from ..abstractions import CurrentWeather, ForecastDay
from ..conditions import (
    derive_condition,
    description_for,
    forecast_description,
    forecast_icon,
    icon_for,
    knots_to_kmh,
)
from ..config import DATA_GOV_SG_CURRENT_URL, DATA_GOV_SG_FORECAST_URL
from ..fallback import FALLBACK_HUMIDITY_PCT, FALLBACK_RAINFALL_MM, FALLBACK_WIND_SPEED_KMH
from .base import ProviderError, WeatherProvider

FORECAST_DAYS = 4


class DataGovSgProvider(WeatherProvider):
    name = "data.gov.sg"

    def __init__(
        self,
        current_url: Optional[str] = None,
        forecast_url: Optional[str] = None,
        wind_speed_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.current_url = current_url or DATA_GOV_SG_CURRENT_URL
        self.forecast_url = forecast_url or DATA_GOV_SG_FORECAST_URL
        self.wind_speed_url = wind_speed_url

    # Public API ---------------------------------------------------------
    def current(self, preferred_station: Optional[str] = None) -> CurrentWeather:
        item = self._latest_item(self._get_json(self.current_url))
        readings = item.get("readings") or []
        if not readings:
            raise ProviderError("missing readings in response")
        reading = _select_station(readings, preferred_station)
        if reading.get("station_id") != preferred_station:
            self._log.info(
                "Station %s not reporting, using %s", preferred_station, reading.get("station_id")
            )

        temperature = _required_float(reading, "value")
        humidity = FALLBACK_HUMIDITY_PCT
        rainfall = FALLBACK_RAINFALL_MM

        condition = derive_condition(temperature, humidity, rainfall)
        return CurrentWeather(
            temperature_c=round(temperature),
            humidity_pct=humidity,
            wind_speed_kmh=self._wind_speed(preferred_station),
            rainfall_mm=rainfall,
            condition=condition,
            description=description_for(condition),
            icon=icon_for(condition),
            timestamp=_parse_timestamp(item.get("timestamp")),
            station_id=reading.get("station_id"),
        )

    def forecast(self) -> List[ForecastDay]:
        item = self._latest_item(self._get_json(self.forecast_url))
        forecasts = item.get("forecasts") or []
        if len(forecasts) < FORECAST_DAYS:
            raise ProviderError(f"expected {FORECAST_DAYS} forecast days, got {len(forecasts)}")
        return [self._build_day(entry) for entry in forecasts[:FORECAST_DAYS]]

    # Helpers ------------------------------------------------------------
    def _wind_speed(self, preferred_station: Optional[str]) -> int:
        if not self.wind_speed_url:
            return FALLBACK_WIND_SPEED_KMH
        readings = self._latest_item(self._get_json(self.wind_speed_url)).get("readings") or []
        if not readings:
            raise ProviderError("missing wind readings in response")
        return knots_to_kmh(_required_float(_select_station(readings, preferred_station), "value"))

    def _latest_item(self, data: Any) -> dict:
        if not isinstance(data, dict):
            raise ProviderError("unexpected payload")
        items = data.get("items") or []
        if not items or not isinstance(items[0], dict):
            raise ProviderError("missing items in response")
        return items[0]

    def _build_day(self, entry: dict) -> ForecastDay:
        label = entry.get("forecast")
        if not label:
            raise ProviderError("missing forecast label")
        temperature = entry.get("temperature") or {}
        humidity = entry.get("relative_humidity") or {}
        return ForecastDay(
            date=_parse_date(entry.get("date")),
            forecast=label,
            temperature_high=_required_float(temperature, "high"),
            temperature_low=_required_float(temperature, "low"),
            humidity_high=_required_float(humidity, "high"),
            humidity_low=_required_float(humidity, "low"),
            icon=forecast_icon(label),
            description=forecast_description(label),
            wind=_wind_descriptor(entry.get("wind")),
        )


def _select_station(readings: List[dict], preferred_station: Optional[str]) -> dict:
    for reading in readings:
        if reading.get("station_id") == preferred_station:
            return reading
    return readings[0]


def _required_float(payload: dict, key: str) -> float:
    value = payload.get(key)
    if value is None:
        raise ProviderError(f"missing field: {key}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ProviderError(f"invalid value for {key}: {value!r}") from exc


def _wind_descriptor(wind: Optional[dict]) -> Optional[str]:
    if not wind:
        return None
    speed = wind.get("speed") or {}
    direction = wind.get("direction")
    low, high = speed.get("low"), speed.get("high")
    if low is None or high is None:
        return direction
    descriptor = f"{low}-{high} km/h"
    return f"{direction} {descriptor}" if direction else descriptor


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        raise ProviderError("missing timestamp")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ProviderError(f"invalid timestamp: {value}") from exc


def _parse_date(value: Optional[str]) -> date:
    if not value:
        raise ProviderError("missing forecast date")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as exc:
        raise ProviderError(f"invalid date: {value}") from exc


__all__ = ["DataGovSgProvider", "FORECAST_DAYS"]
