# config.py
"""Configuration settings for the region temperature dashboard."""

import os
from zoneinfo import ZoneInfo

HTTP_TIMEOUT_S: float = float(os.getenv("HTTP_TIMEOUT_S", "8.0"))

DEV: bool = os.environ.get("DEV", "0") == "1"

LOG_LEVEL: str = os.getenv("WEATHERMAP_LOG_LEVEL", "DEBUG" if DEV else "INFO").upper()

# ------------------- WEATHER PROVIDER -------------------

ARCHIVE_API_URL: str = os.getenv(
    "WEATHERMAP_ARCHIVE_URL", "https://archive-api.open-meteo.com/v1/archive"
)
"""Open-Meteo archive endpoint for hourly temperatures."""

HOURLY_VARIABLE: str = "temperature_2m"
TIMEZONE_MODE: str = "auto"
"""Provider-side local time for the hourly series."""

DATA_SOURCES: dict[str, str] = {
    "temperature": "Temperature (2 m)",
}
"""Data sources a region can be bound to (tag -> label)."""

# ------------------- GEOLOCATION AND TIMEZONE -------------------

TZ: ZoneInfo = ZoneInfo(os.getenv("WEATHERMAP_TZ", "Europe/Berlin"))
"""Timezone used for the timeline and for picking the hour of the series."""

MAP_CENTER: tuple[float, float] = (52.52, 13.41)
MAP_ZOOM: int = 10
MAP_MIN_ZOOM: int = 8
MAP_MAX_ZOOM: int = 12
"""Initial map view (Berlin) and zoom limits."""

# ------------------- TIMELINE -------------------

TIMELINE_DAYS_BEFORE: int = 15
TIMELINE_DAYS_AFTER: int = 15
RANGE_DEFAULT_HOURS: int = 2
"""Initial range selection spans this many hours ending at startup time."""

TRACK_WIDTH_PX: int = 1000
"""Virtual pixel width of the timeline track."""

# ------------------- POLYGONS -------------------

POLYGON_MIN_POINTS: int = 3
POLYGON_MAX_POINTS: int = 12

POLYGON_STYLE: dict = {
    "color": "#1890ff",
    "weight": 2,
    "opacity": 1,
    "fill_opacity": 0.6,
}

# ------------------- UI COLORS -------------------

COLOR_PENDING: str = "#cccccc"
"""Fill for regions still waiting for data; also the classifier fallback."""

COLOR_ERROR: str = "#999999"
"""Fill for regions whose weather fetch failed."""

COLOR_TEXT_ERROR: str = "#ff4d4f"

# ------------------- TEMPERATURE COLOR RULES -------------------

COLOR_RULES: list[dict] = [
    {"operator": "<", "value": 10, "color": "#ff4d4f", "label": "Cold"},
    {
        "operator": ">=",
        "value": 10,
        "operator_second": "<",
        "value_second": 25,
        "color": "#faad14",
        "label": "Moderate",
    },
    {"operator": ">=", "value": 25, "color": "#52c41a", "label": "Warm"},
]
"""Evaluated in order, first match wins."""

# ------------------- NOTIFICATIONS -------------------

NOTIFICATION_TTL_S: float = 5.0

# ------------------- PLOTLY CONFIG -------------------

PLOTLY_CONFIG: dict = {
    "displayModeBar": False,
    "responsive": True,
}
