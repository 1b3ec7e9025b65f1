from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any

from weathermap.api.http import http_get_json
from weathermap.api.weather_cache import WeatherCache, make_key
from weathermap.api.weather_utils import as_float
from weathermap.config import ARCHIVE_API_URL, HOURLY_VARIABLE, TIMEZONE_MODE, TZ

logger = logging.getLogger("weathermap")


def _local(instant: datetime) -> datetime:
    """Instant in dashboard time; naive values are taken as dashboard time already."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=TZ)
    return instant.astimezone(TZ)


def request_window(instant: datetime) -> tuple[date, date]:
    """One-day window [local midnight, next midnight] as calendar dates."""
    start = _local(instant).date()
    return start, start + timedelta(days=1)


def build_request_params(lat: float, lng: float, instant: datetime) -> dict[str, str]:
    start, end = request_window(instant)
    return {
        "latitude": f"{lat:.4f}",
        "longitude": f"{lng:.4f}",
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "hourly": HOURLY_VARIABLE,
        "timezone": TIMEZONE_MODE,
    }


def fetch_hourly(
    lat: float,
    lng: float,
    instant: datetime,
    cache: WeatherCache,
) -> dict[str, Any]:
    """
    Return the raw Open-Meteo payload for the local day of `instant`.

    The cache key and `start_date` come from the same local date, so a
    cached entry always holds the series for the day it is filed under.
    A cache hit never touches the network. On a miss the provider is asked
    once; failures raise FetchError and are not cached.
    """
    day, _ = request_window(instant)
    key = make_key(lat, lng, day)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("weather cache hit %s", key)
        return cached

    params = build_request_params(lat, lng, instant)
    logger.info("fetching hourly weather %s", params)
    data = http_get_json(ARCHIVE_API_URL, params=params)
    cache.put(key, data)
    return data


def temperature_at(payload: Any, instant: datetime) -> float | None:
    """Temperature for the local hour of `instant`.

    None if the hour is missing or the payload does not have the
    `{"hourly": {"temperature_2m": [...]}}` shape.
    """
    if not isinstance(payload, dict):
        return None
    hourly = payload.get("hourly")
    if not isinstance(hourly, dict):
        return None
    temps = hourly.get(HOURLY_VARIABLE)
    if not isinstance(temps, list):
        return None
    idx = _local(instant).hour
    if idx >= len(temps):
        return None
    return as_float(temps[idx])
