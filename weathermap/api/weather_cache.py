"""In-memory cache of hourly weather payloads.

Entries are keyed by location rounded to two decimals (about 1 km) and the
calendar day the payload covers, i.e. the `start_date` that was requested.
Nothing is ever evicted: the cache lives as long as the dashboard session.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

logger = logging.getLogger("weathermap")


def make_key(lat: float, lng: float, day: date) -> str:
    """Cache key like '52.52_13.41_2024-05-01'."""
    return f"{lat:.2f}_{lng:.2f}_{day.isoformat()}"


class WeatherCache:
    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        return self._entries.get(key)

    def put(self, key: str, payload: dict[str, Any]) -> None:
        # same key → same data, so overwriting is harmless
        self._entries[key] = payload
        logger.debug("weather cache store %s (%d entries)", key, len(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
