"""String-keyed, JSON-valued storage on top of a Django cache backend."""
from __future__ import annotations

import json
import logging
from typing import Any

from django.core.cache.backends.base import BaseCache


logger = logging.getLogger(__name__)


class StorageWriteError(RuntimeError):
    """A document could not be written to storage."""


class KeyValueStore:
    """Persist JSON documents under string keys without expiry.

    Failures never reach the caller: reads fall back to the default and
    writes report ``False``.
    """

    def __init__(self, cache: BaseCache) -> None:
        self._cache = cache

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self._cache.get(key)
            if raw is None:
                return default
            return json.loads(raw)
        except Exception as exc:  # noqa: BLE001 - corrupt or unreachable storage
            logger.warning("Error reading %s from storage: %s", key, exc)
            return default

    def set(self, key: str, value: Any) -> bool:
        try:
            self._cache.set(key, json.dumps(value), timeout=None)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error writing %s to storage: %s", key, exc)
            return False
        return True

    def delete(self, key: str) -> None:
        self._cache.delete(key)


__all__ = ["KeyValueStore", "StorageWriteError"]
