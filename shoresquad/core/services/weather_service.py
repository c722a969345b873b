"""Weather service that swaps in the fallback bundle on any failure."""
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable, Optional

from shoresquad.core.abstractions import FALLBACK, LIVE, WeatherBundle, WeatherResult, WeatherSource
from shoresquad.core.config import AppConfig
from shoresquad.core.fallback import fallback_bundle
from shoresquad.core.health import FetchRegistry


logger = logging.getLogger(__name__)

COMPONENT = "weather"


class WeatherService:
    """Fetch current readings and the forecast, one after the other.

    Either request failing discards both and returns the complete fallback
    bundle. The reason is kept on the result and in the registry.
    """

    def __init__(
        self,
        source: WeatherSource,
        config: AppConfig,
        registry: Optional[FetchRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._source = source
        self._config = config
        self._registry = registry or FetchRegistry()
        self._clock = clock or (lambda: datetime.now(tz=config.timezone))
        self._testing_mode = os.environ.get("TESTING_MODE", "0") == "1"

    @property
    def registry(self) -> FetchRegistry:
        return self._registry

    def fetch(self) -> WeatherResult:
        try:
            current = self._source.current(self._config.preferred_station)
            forecast = self._source.forecast()
        except Exception as exc:  # noqa: BLE001 - every failure maps to the fallback bundle
            reason = f"{exc.__class__.__name__}: {exc}"
            logger.warning("Weather fetch failed, using fallback data: %s", reason)
            self._registry.record_fallback(COMPONENT, reason)
            return WeatherResult(
                bundle=fallback_bundle(self._clock()),
                source=FALLBACK,
                fallback_reason=reason,
            )

        self._registry.record_live(COMPONENT)
        if self._testing_mode:
            logger.info("Live weather from station %s", current.station_id)
        return WeatherResult(
            bundle=WeatherBundle(current=current, forecast=tuple(forecast)),
            source=LIVE,
        )


__all__ = ["WeatherService"]
