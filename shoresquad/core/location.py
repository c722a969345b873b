"""Resolve the user's position, falling back to a fixed coordinate."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import requests

from .abstractions import CACHED, FALLBACK, LIVE, Coordinate, GeolocationSource, LocationResult
from .config import AppConfig
from .health import FetchRegistry
from .storage import KeyValueStore


logger = logging.getLogger(__name__)

COMPONENT = "location"


class GeolocationError(RuntimeError):
    """Raised when the position cannot be determined."""


class IpGeolocationSource(GeolocationSource):
    """Approximate the user's position from their IP address."""

    def __init__(self, url: str, session: Optional[requests.Session] = None) -> None:
        self.url = url
        self.session = session or requests.Session()

    def get_position(self, timeout: float) -> Coordinate:
        try:
            response = self.session.get(self.url, timeout=timeout)
        except requests.Timeout as exc:
            raise GeolocationError("timeout") from exc
        except requests.RequestException as exc:
            raise GeolocationError("position unavailable") from exc
        if response.status_code in (401, 403):
            raise GeolocationError("permission denied")
        if response.status_code >= 400:
            raise GeolocationError(f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise GeolocationError("invalid json") from exc
        if not isinstance(data, dict) or data.get("error"):
            reason = data.get("reason") if isinstance(data, dict) else None
            raise GeolocationError(reason or "position unavailable")
        try:
            latitude = float(data["latitude"])
            longitude = float(data["longitude"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeolocationError("missing coordinates") from exc
        return Coordinate(
            latitude=latitude,
            longitude=longitude,
            accuracy=_safe_float(data.get("accuracy")),
            name=data.get("city"),
        )


class LocationResolver:
    """Ask the geolocation source at most once per instance.

    A position persisted less than ``location_max_age`` seconds ago is reused
    without asking. Denial, timeout or a missing source all resolve to the
    configured default location.
    """

    def __init__(
        self,
        config: AppConfig,
        storage: KeyValueStore,
        source: Optional[GeolocationSource] = None,
        registry: Optional[FetchRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config
        self._storage = storage
        self._source = source
        self._registry = registry or FetchRegistry()
        self._clock = clock or (lambda: datetime.now(tz=timezone.utc))
        self._result: Optional[LocationResult] = None

    def resolve(self) -> LocationResult:
        if self._result is None:
            self._result = self._resolve_once()
        return self._result

    def _resolve_once(self) -> LocationResult:
        cached = self._load_persisted()
        if cached is not None:
            return LocationResult(coordinate=cached, source=CACHED)

        if self._source is None:
            return self._fallback("geolocation not supported")

        try:
            coordinate = self._source.get_position(self._config.location_timeout)
        except Exception as exc:  # noqa: BLE001 - any failure resolves to the default
            return self._fallback(str(exc) or exc.__class__.__name__)

        self._persist(coordinate)
        self._registry.record_live(COMPONENT)
        return LocationResult(coordinate=coordinate, source=LIVE)

    def _fallback(self, reason: str) -> LocationResult:
        logger.warning("Geolocation error: %s, using default location", reason)
        self._registry.record_fallback(COMPONENT, reason)
        return LocationResult(
            coordinate=self._config.default_location,
            source=FALLBACK,
            fallback_reason=reason,
        )

    def _persist(self, coordinate: Coordinate) -> None:
        self._storage.set(
            self._config.storage_keys.user_location,
            {
                "lat": coordinate.latitude,
                "lng": coordinate.longitude,
                "accuracy": coordinate.accuracy,
                "name": coordinate.name,
                "timestamp": self._clock().timestamp(),
            },
        )

    def _load_persisted(self) -> Optional[Coordinate]:
        stored = self._storage.get(self._config.storage_keys.user_location)
        if not isinstance(stored, dict):
            return None
        try:
            age = self._clock().timestamp() - float(stored["timestamp"])
            if age > self._config.location_max_age:
                return None
            return Coordinate(
                latitude=float(stored["lat"]),
                longitude=float(stored["lng"]),
                accuracy=_safe_float(stored.get("accuracy")),
                name=stored.get("name"),
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed stored location")
            return None


def _safe_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = ["GeolocationError", "IpGeolocationSource", "LocationResolver"]
