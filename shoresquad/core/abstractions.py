"""Core abstractions for the ShoreSquad domain."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Protocol, Tuple

LIVE = "live"
CACHED = "cached"
FALLBACK = "fallback"


@dataclass(frozen=True)
class Coordinate:
    """A point on the globe, optionally with the accuracy radius in metres."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class CurrentWeather:
    """Normalized current conditions derived from the latest station reading.

    Units:
    - temperature in Celsius
    - humidity in percent
    - wind speed in kilometres per hour
    - rainfall in millimetres
    """

    temperature_c: float
    humidity_pct: float
    wind_speed_kmh: float
    rainfall_mm: float
    condition: str
    description: str
    icon: str
    timestamp: datetime
    station_id: Optional[str] = None


@dataclass(frozen=True)
class ForecastDay:
    date: date
    forecast: str
    temperature_high: float
    temperature_low: float
    humidity_high: float
    humidity_low: float
    icon: str
    description: str
    wind: Optional[str] = None


@dataclass(frozen=True)
class WeatherBundle:
    current: CurrentWeather
    forecast: Tuple[ForecastDay, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WeatherResult:
    """Weather bundle tagged with where it came from.

    ``fallback_reason`` is ``None`` whenever ``source`` is ``"live"``.
    """

    bundle: WeatherBundle
    source: str = LIVE
    fallback_reason: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.source == LIVE


@dataclass(frozen=True)
class LocationResult:
    coordinate: Coordinate
    source: str = LIVE
    fallback_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK


class GeolocationSource(Protocol):
    """A capability able to report the user's position."""

    def get_position(self, timeout: float) -> Coordinate:
        """Return the current position or raise on denial, timeout or absence."""
        ...


class WeatherSource(Protocol):
    """A data source for current readings and the four day forecast."""

    def current(self, preferred_station: Optional[str] = None) -> CurrentWeather:
        ...

    def forecast(self) -> list[ForecastDay]:
        ...


__all__ = [
    "CACHED",
    "FALLBACK",
    "LIVE",
    "Coordinate",
    "CurrentWeather",
    "ForecastDay",
    "GeolocationSource",
    "LocationResult",
    "WeatherBundle",
    "WeatherResult",
    "WeatherSource",
]
