# weathermap/regions.py
from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from weathermap.api.weather_fetch import temperature_at
from weathermap.config import DATA_SOURCES, POLYGON_MAX_POINTS, POLYGON_MIN_POINTS
from weathermap.errors import DrawValidationError, FetchError, SelectionError
from weathermap.geometry import Coordinate, centroid
from weathermap.timeline import Selection, instant_for

logger = logging.getLogger("weathermap")

# (lat, lng, instant) -> raw provider payload
Fetcher = Callable[[float, float, datetime], dict[str, Any]]


class RegionStatus(str, Enum):
    PENDING = "pending"
    OK = "ok"
    ERROR = "error"


@dataclass
class Observation:
    temperature: float
    timestamp: datetime


@dataclass
class Region:
    id: str
    vertices: list[Coordinate]
    centroid: Coordinate
    data_source: str
    observation: Observation | None = None
    status: RegionStatus = RegionStatus.PENDING
    error: str | None = None


@dataclass
class PendingPolygon:
    """Completed polygon waiting for a data source."""

    vertices: list[Coordinate]
    centroid: Coordinate


@dataclass
class DrawSession:
    active: bool = False
    points: list[Coordinate] = field(default_factory=list)


class RegionRegistry:
    """User-drawn regions and the draw session that produces them.

    Listeners get (event, region) with event one of "added", "updated",
    "removed".
    """

    def __init__(
        self,
        fetcher: Fetcher,
        min_points: int = POLYGON_MIN_POINTS,
        max_points: int = POLYGON_MAX_POINTS,
    ) -> None:
        self.fetcher = fetcher
        self.min_points = min_points
        self.max_points = max_points
        self.regions: list[Region] = []
        self.draw = DrawSession()
        self.pending: PendingPolygon | None = None
        self._listeners: list[Callable[[str, Region], None]] = []

    def subscribe(self, callback: Callable[[str, Region], None]) -> None:
        self._listeners.append(callback)

    def _emit(self, event: str, region: Region) -> None:
        for callback in list(self._listeners):
            callback(event, region)

    # --- drawing ------------------------------------------------------------
    def start_draw(self) -> None:
        self.draw = DrawSession(active=True)
        self.pending = None

    def cancel_draw(self) -> None:
        self.draw = DrawSession()
        self.pending = None

    def add_vertex(self, coord: Coordinate) -> PendingPolygon | None:
        """Add a point; returns the pending polygon if this point auto-completed it."""
        if not self.draw.active:
            return None
        self.draw.points.append(Coordinate(float(coord[0]), float(coord[1])))
        if len(self.draw.points) >= self.max_points:
            return self.complete_draw()
        return None

    def complete_draw(self) -> PendingPolygon:
        points = self.draw.points
        if len(points) < self.min_points:
            raise DrawValidationError(f"Minimum {self.min_points} points required")

        self.pending = PendingPolygon(vertices=list(points), centroid=centroid(points))
        self.draw = DrawSession()
        return self.pending

    def draw_hint(self) -> str:
        count = len(self.draw.points)
        remaining = max(0, self.min_points - count)
        if remaining > 0:
            return f"Add {remaining} more points (minimum)"
        return f"Double-click to complete polygon ({count}/{self.max_points} points)"

    # --- regions ------------------------------------------------------------
    def confirm_region(self, data_source: str | None, selection: Selection) -> Region:
        if self.pending is None:
            raise SelectionError("No polygon to confirm")
        if not data_source or data_source not in DATA_SOURCES:
            raise SelectionError("Please select a data source")

        region = Region(
            id=uuid.uuid4().hex,
            vertices=self.pending.vertices,
            centroid=self.pending.centroid,
            data_source=data_source,
        )
        self.regions.append(region)
        self.pending = None
        logger.info("region %s created (%d vertices)", region.id, len(region.vertices))
        self._emit("added", region)

        self.refresh_region(region, selection)
        return region

    def refresh_region(self, region: Region, selection: Selection) -> bool:
        """Fetch the temperature for `region` at the selection; False on failure."""
        target = instant_for(selection)
        try:
            payload = self.fetcher(region.centroid.lat, region.centroid.lng, target)
            temperature = temperature_at(payload, target)
            if temperature is None:
                raise FetchError("No temperature data available")
        except FetchError as e:
            logger.warning("refresh of region %s failed: %s", region.id, e)
            region.observation = None
            region.status = RegionStatus.ERROR
            region.error = str(e)
            self._emit("updated", region)
            return False

        region.observation = Observation(temperature=temperature, timestamp=target)
        region.status = RegionStatus.OK
        region.error = None
        self._emit("updated", region)
        return True

    def refresh_all(self, selection: Selection) -> list[bool]:
        """Refresh every region one after another, in registry order."""
        return [self.refresh_region(region, selection) for region in list(self.regions)]

    def delete_region(self, region_id: str) -> Region | None:
        for idx, region in enumerate(self.regions):
            if region.id == region_id:
                del self.regions[idx]
                self._emit("removed", region)
                return region
        return None

    def index_of(self, region: Region) -> int:
        return self.regions.index(region)
