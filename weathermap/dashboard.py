# weathermap/dashboard.py
"""
Dashboard controller.

Owns the application state and reacts to named input events. Rendering goes
through the RenderingSurface protocol, so nothing here knows about
Streamlit or plotly.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import partial
from typing import Any, Protocol

from weathermap.api.weather_cache import WeatherCache
from weathermap.api.weather_fetch import fetch_hourly
from weathermap.config import (
    COLOR_PENDING,
    MAP_CENTER,
    MAP_ZOOM,
    NOTIFICATION_TTL_S,
    TZ,
)
from weathermap.errors import DrawValidationError, SelectionError
from weathermap.geometry import Coordinate
from weathermap.regions import Region, RegionRegistry, RegionStatus
from weathermap.timeline import Handle, TimelineMode, TimelineModel, TrackBounds
from weathermap.viewmodels.regions import fill_color, popup_text

logger = logging.getLogger("weathermap")


class RenderingSurface(Protocol):
    def add_polygon(self, region_id: str, vertices: Sequence[Coordinate], fill: str) -> None: ...

    def set_fill(self, region_id: str, fill: str) -> None: ...

    def set_popup(self, region_id: str, text: str) -> None: ...

    def remove(self, region_id: str) -> None: ...

    def show_draft(self, vertices: Sequence[Coordinate]) -> None: ...

    def clear_draft(self) -> None: ...


class InputEvent(str, Enum):
    HANDLE_DOWN = "handle_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    TRACK_CLICK = "track_click"
    MAP_CLICK = "map_click"
    MAP_DBLCLICK = "map_dblclick"
    MODE_TOGGLE = "mode_toggle"
    DRAW_START = "draw_start"
    DRAW_CANCEL = "draw_cancel"
    CONFIRM_DATA_SOURCE = "confirm_data_source"
    CLOSE_MODAL = "close_modal"
    DELETE_REGION = "delete_region"
    RECENTER = "recenter"
    SIDEBAR_TOGGLE = "sidebar_toggle"
    ESCAPE = "escape"


@dataclass
class Notification:
    message: str
    kind: str = "info"  # "info" / "success" / "error"
    created_at: float = field(default_factory=time.time)


@dataclass
class DashboardState:
    timeline: TimelineModel
    registry: RegionRegistry
    cache: WeatherCache
    notifications: list[Notification] = field(default_factory=list)
    api_status: tuple[str, str] = ("info", "No data fetched yet")
    loading: bool = False
    modal_open: bool = False
    sidebar_collapsed: bool = False
    map_center: tuple[float, float] = MAP_CENTER
    map_zoom: int = MAP_ZOOM


def create_state(now: datetime | None = None, cache: WeatherCache | None = None) -> DashboardState:
    cache = cache if cache is not None else WeatherCache()
    registry = RegionRegistry(fetcher=partial(fetch_hourly, cache=cache))
    return DashboardState(
        timeline=TimelineModel.starting_now(now),
        registry=registry,
        cache=cache,
    )


class DashboardController:
    def __init__(self, state: DashboardState, surface: RenderingSurface) -> None:
        self.state = state
        self.surface = surface
        self.state.timeline.subscribe(self._on_timeline_change)
        self.state.registry.subscribe(self._on_region_event)
        self._handlers = {
            InputEvent.HANDLE_DOWN: self._handle_down,
            InputEvent.POINTER_MOVE: self._pointer_move,
            InputEvent.POINTER_UP: self._pointer_up,
            InputEvent.TRACK_CLICK: self._track_click,
            InputEvent.MAP_CLICK: self._map_click,
            InputEvent.MAP_DBLCLICK: self._map_dblclick,
            InputEvent.MODE_TOGGLE: self._mode_toggle,
            InputEvent.DRAW_START: self.start_drawing,
            InputEvent.DRAW_CANCEL: self.cancel_drawing,
            InputEvent.CONFIRM_DATA_SOURCE: self.confirm_data_source,
            InputEvent.CLOSE_MODAL: self.close_modal,
            InputEvent.DELETE_REGION: self.delete_region,
            InputEvent.RECENTER: self.recenter,
            InputEvent.SIDEBAR_TOGGLE: self.toggle_sidebar,
            InputEvent.ESCAPE: self.escape,
        }

    # --- input layer --------------------------------------------------------
    def handle(self, event: InputEvent | str, **payload: Any) -> None:
        handler = self._handlers[InputEvent(event)]
        handler(**payload)

    def _handle_down(self, handle: Handle | str) -> None:
        self.state.timeline.begin_drag(handle)

    def _pointer_move(self, x: float, bounds: TrackBounds) -> None:
        self.state.timeline.drag_to(x, bounds)

    def _pointer_up(self) -> None:
        self.state.timeline.end_drag()

    def _track_click(self, x: float, bounds: TrackBounds) -> None:
        self.state.timeline.click_track(x, bounds)

    def _map_click(self, lat: float, lng: float) -> None:
        self.add_point(Coordinate(lat, lng))

    def _map_dblclick(self) -> None:
        if self.state.registry.draw.active:
            self.complete_polygon()

    def _mode_toggle(self, mode: TimelineMode | str) -> None:
        self.state.timeline.set_mode(mode)

    # --- notifications ------------------------------------------------------
    def notify(self, message: str, kind: str = "info") -> None:
        self.state.notifications.append(Notification(message, kind))

    def active_notifications(self, now: float | None = None) -> list[Notification]:
        now = time.time() if now is None else now
        self.state.notifications = [
            n for n in self.state.notifications if now - n.created_at < NOTIFICATION_TTL_S
        ]
        return list(self.state.notifications)

    def pop_notifications(self) -> list[Notification]:
        pending = self.active_notifications()
        self.state.notifications = []
        return pending

    # --- drawing ------------------------------------------------------------
    def start_drawing(self) -> None:
        self.state.registry.start_draw()
        self.surface.clear_draft()
        self.notify("Click on the map to start drawing a polygon")

    def cancel_drawing(self) -> None:
        self.state.registry.cancel_draw()
        self.state.modal_open = False
        self.surface.clear_draft()
        self.notify("Polygon drawing cancelled")

    def add_point(self, coord: Coordinate) -> None:
        registry = self.state.registry
        if not registry.draw.active:
            return

        points_before = list(registry.draw.points) + [coord]
        completed = registry.add_vertex(coord)
        if len(points_before) >= 2:
            self.surface.show_draft(points_before)

        if completed is not None:
            self._open_modal()
        else:
            self.notify(registry.draw_hint())

    def complete_polygon(self) -> None:
        try:
            self.state.registry.complete_draw()
        except DrawValidationError as e:
            self.notify(str(e), "error")
            return
        self._open_modal()

    def _open_modal(self) -> None:
        self.state.modal_open = True

    def close_modal(self) -> None:
        self.cancel_drawing()

    def confirm_data_source(self, data_source: str | None = None) -> Region | None:
        try:
            region = self.state.registry.confirm_region(data_source, self.state.timeline.selection)
        except SelectionError as e:
            self.notify(str(e), "error")
            return None
        self.state.modal_open = False
        self.surface.clear_draft()
        self.notify("Polygon created successfully!", "success")
        return region

    # --- regions ------------------------------------------------------------
    def delete_region(self, region_id: str) -> None:
        if self.state.registry.delete_region(region_id) is not None:
            self._refresh_popups()
            self.notify("Polygon deleted")

    def refresh_all(self) -> None:
        registry = self.state.registry
        if not registry.regions:
            return
        logger.info("refreshing %d regions at %s", len(registry.regions), self.state.timeline.query_instant)
        self.state.loading = True
        try:
            registry.refresh_all(self.state.timeline.selection)
        finally:
            self.state.loading = False

    def _on_timeline_change(self, _timeline: TimelineModel) -> None:
        self.refresh_all()

    def _on_region_event(self, event: str, region: Region) -> None:
        if event == "removed":
            self.surface.remove(region.id)
            return

        index = self.state.registry.index_of(region)
        if event == "added":
            self.surface.add_polygon(region.id, region.vertices, COLOR_PENDING)
            self.surface.set_popup(region.id, popup_text(region, index))
            return

        self.surface.set_fill(region.id, fill_color(region))
        self.surface.set_popup(region.id, popup_text(region, index))
        if region.status is RegionStatus.OK:
            self.state.api_status = ("success", f"Last updated: {datetime.now(TZ):%H:%M:%S}")
        else:
            self.state.api_status = ("error", "Failed to fetch weather data")
            self.notify("Failed to fetch weather data", "error")

    def _refresh_popups(self) -> None:
        # names are positional, so deleting shifts them
        for idx, region in enumerate(self.state.registry.regions):
            self.surface.set_popup(region.id, popup_text(region, idx))

    # --- view ---------------------------------------------------------------
    def recenter(self) -> None:
        self.state.map_center = MAP_CENTER
        self.state.map_zoom = MAP_ZOOM

    def toggle_sidebar(self) -> None:
        self.state.sidebar_collapsed = not self.state.sidebar_collapsed

    def escape(self) -> None:
        if self.state.registry.draw.active or self.state.modal_open:
            self.cancel_drawing()
