"""In-memory registry of live versus fallback outcomes.

Every component that can substitute a fallback value reports here, so the
health endpoint can tell "served live data" apart from "served the hardcoded
bundle" even though callers receive the same shapes either way.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional


@dataclass(frozen=True)
class OutcomeStats:
    """Counters for one component."""

    live: int = 0
    fallback: int = 0
    last_fallback_reason: Optional[str] = None
    last_fallback_at: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "live": self.live,
            "fallback": self.fallback,
            "last_fallback_reason": self.last_fallback_reason,
            "last_fallback_at": self.last_fallback_at,
        }


class FetchRegistry:
    """Stores live/fallback counters per component."""

    def __init__(self) -> None:
        self._stats: Dict[str, OutcomeStats] = {}
        self._lock = Lock()

    def record_live(self, component: str) -> None:
        if not component:
            raise ValueError("component must be provided")
        with self._lock:
            current = self._stats.get(component, OutcomeStats())
            self._stats[component] = OutcomeStats(
                live=current.live + 1,
                fallback=current.fallback,
                last_fallback_reason=current.last_fallback_reason,
                last_fallback_at=current.last_fallback_at,
            )

    def record_fallback(
        self, component: str, reason: str, when: Optional[datetime] = None
    ) -> None:
        if not component:
            raise ValueError("component must be provided")
        when = when or datetime.now(timezone.utc)
        with self._lock:
            current = self._stats.get(component, OutcomeStats())
            self._stats[component] = OutcomeStats(
                live=current.live,
                fallback=current.fallback + 1,
                last_fallback_reason=reason,
                last_fallback_at=self._format_datetime(when),
            )

    def get(self, component: str) -> OutcomeStats:
        with self._lock:
            return self._stats.get(component, OutcomeStats())

    def reset(self) -> None:
        with self._lock:
            self._stats.clear()

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {name: stats.as_dict() for name, stats in sorted(self._stats.items())}

    @staticmethod
    def _format_datetime(value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


__all__ = ["FetchRegistry", "OutcomeStats"]
