"""Immutable application configuration handed to every component."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .abstractions import Coordinate

DATA_GOV_SG_CURRENT_URL = "https://api.data.gov.sg/v1/environment/air-temperature"
DATA_GOV_SG_FORECAST_URL = "https://api.data.gov.sg/v1/environment/4-day-weather-forecast"
IP_GEOLOCATION_URL = "https://ipapi.co/json/"


@dataclass(frozen=True)
class StorageKeys:
    user_location: str = "shoresquad_user_location"
    crew_data: str = "shoresquad_crew_data"
    cleanup_events: str = "shoresquad_cleanup_events"
    user_preferences: str = "shoresquad_preferences"


@dataclass(frozen=True)
class AppConfig:
    current_readings_url: str = DATA_GOV_SG_CURRENT_URL
    forecast_url: str = DATA_GOV_SG_FORECAST_URL
    wind_speed_url: Optional[str] = None
    geolocation_url: Optional[str] = IP_GEOLOCATION_URL
    preferred_station: str = "S24"
    default_location: Coordinate = Coordinate(
        latitude=1.3815,
        longitude=103.9556,
        name="Pasir Ris Beach, Singapore",
    )
    storage_keys: StorageKeys = field(default_factory=StorageKeys)
    location_timeout: float = 10.0
    location_max_age: float = 5 * 60
    request_timeout: Optional[float] = None
    timezone: tzinfo = ZoneInfo("Asia/Singapore")

    @classmethod
    def from_settings(cls, settings: Any) -> "AppConfig":
        """Build the configuration from a Django settings object."""
        default_location = Coordinate(
            latitude=float(settings.SHORESQUAD_DEFAULT_LAT),
            longitude=float(settings.SHORESQUAD_DEFAULT_LNG),
            name=settings.SHORESQUAD_DEFAULT_NAME,
        )
        return cls(
            current_readings_url=settings.SHORESQUAD_CURRENT_URL,
            forecast_url=settings.SHORESQUAD_FORECAST_URL,
            wind_speed_url=settings.SHORESQUAD_WIND_SPEED_URL or None,
            geolocation_url=settings.SHORESQUAD_GEOLOCATION_URL or None,
            preferred_station=settings.SHORESQUAD_PREFERRED_STATION,
            default_location=default_location,
            request_timeout=settings.WEATHER_REQUEST_TIMEOUT,
            timezone=ZoneInfo(settings.TIME_ZONE),
        )


__all__ = ["AppConfig", "StorageKeys"]
