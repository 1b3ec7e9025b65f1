# weathermap/timeline.py
"""Timeline window, pointer ↔ time mapping and single/range selection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from weathermap.config import (
    RANGE_DEFAULT_HOURS,
    TIMELINE_DAYS_AFTER,
    TIMELINE_DAYS_BEFORE,
    TZ,
)

logger = logging.getLogger("weathermap")


class TimelineMode(str, Enum):
    SINGLE = "single"
    RANGE = "range"


class Handle(str, Enum):
    PRIMARY = "primary"  # single time, or range start
    SECONDARY = "secondary"  # range end


@dataclass(frozen=True)
class TimelineWindow:
    start: datetime
    end: datetime

    @classmethod
    def around(
        cls,
        now: datetime,
        days_before: int = TIMELINE_DAYS_BEFORE,
        days_after: int = TIMELINE_DAYS_AFTER,
    ) -> TimelineWindow:
        return cls(now - timedelta(days=days_before), now + timedelta(days=days_after))

    @property
    def span(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class TrackBounds:
    """Pixel bounds of the timeline track."""

    left: float
    width: float


@dataclass(frozen=True)
class SingleSelection:
    instant: datetime


@dataclass(frozen=True)
class RangeSelection:
    start: datetime
    end: datetime


Selection = SingleSelection | RangeSelection


def instant_for(selection: Selection) -> datetime:
    """The instant that gets queried: the selected time, or the start of a range."""
    if isinstance(selection, RangeSelection):
        return selection.start
    return selection.instant


def format_datetime(dt: datetime) -> str:
    """'May 1, 10:00' style label."""
    return f"{dt:%b} {dt.day}, {dt:%H:%M}"


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


class TimelineModel:
    """Selection state on a fixed window.

    Listeners registered with `subscribe` are called with the model after each
    change that should trigger a data refresh: end of a drag, a track click
    and a mode switch.
    """

    def __init__(self, window: TimelineWindow, now: datetime) -> None:
        self.window = window
        self.mode = TimelineMode.SINGLE
        self.selected_time = now
        self.range_start = now - timedelta(hours=RANGE_DEFAULT_HOURS)
        self.range_end = now
        self._active_handle: Handle | None = None
        self._dragged = False
        self._listeners: list[Callable[[TimelineModel], None]] = []

    @classmethod
    def starting_now(cls, now: datetime | None = None) -> TimelineModel:
        now = now or datetime.now(TZ)
        return cls(TimelineWindow.around(now), now)

    # --- notifications ------------------------------------------------------
    def subscribe(self, callback: Callable[[TimelineModel], None]) -> None:
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    # --- pointer mapping ----------------------------------------------------
    def position_to_instant(self, pointer_x: float, bounds: TrackBounds) -> datetime:
        if bounds.width <= 0:
            percent = 0.0
        else:
            percent = _clamp01((pointer_x - bounds.left) / bounds.width)
        return self.window.start + self.window.span * percent

    def instant_to_position(self, instant: datetime, bounds: TrackBounds) -> float:
        total = self.window.span.total_seconds()
        offset = (instant - self.window.start).total_seconds()
        percent = _clamp01(offset / total) if total > 0 else 0.0
        return bounds.left + percent * bounds.width

    # --- selection ----------------------------------------------------------
    @property
    def selection(self) -> Selection:
        if self.mode is TimelineMode.RANGE:
            return RangeSelection(self.range_start, self.range_end)
        return SingleSelection(self.selected_time)

    @property
    def query_instant(self) -> datetime:
        return instant_for(self.selection)

    @property
    def is_dragging(self) -> bool:
        return self._active_handle is not None

    def set_mode(self, mode: TimelineMode | str) -> None:
        self.mode = TimelineMode(mode)
        logger.info("timeline mode -> %s", self.mode.value)
        self._changed()

    # --- dragging -----------------------------------------------------------
    def begin_drag(self, handle: Handle | str) -> None:
        self._active_handle = Handle(handle)
        self._dragged = False

    def drag_to(self, pointer_x: float, bounds: TrackBounds) -> None:
        if self._active_handle is None:
            return
        new_time = self.position_to_instant(pointer_x, bounds)
        self._dragged = True

        if self.mode is TimelineMode.SINGLE:
            self.selected_time = new_time
        elif self._active_handle is Handle.PRIMARY:
            self.range_start = new_time
            if self.range_start > self.range_end:
                self.range_end = self.range_start
        else:
            self.range_end = new_time
            if self.range_end < self.range_start:
                self.range_start = self.range_end

    def end_drag(self) -> None:
        if self._active_handle is None:
            return
        dragged = self._dragged
        self._active_handle = None
        self._dragged = False
        if dragged:
            self._changed()

    # --- clicking -----------------------------------------------------------
    def click_track(self, pointer_x: float, bounds: TrackBounds) -> None:
        if self.is_dragging:
            return
        new_time = self.position_to_instant(pointer_x, bounds)

        if self.mode is TimelineMode.SINGLE:
            self.selected_time = new_time
        else:
            # keep the duration; the end may run past the window
            duration = self.range_end - self.range_start
            self.range_start = new_time
            self.range_end = new_time + duration

        self._changed()

    # --- labels -------------------------------------------------------------
    def describe(self) -> str:
        if self.mode is TimelineMode.SINGLE:
            return f"Selected: {format_datetime(self.selected_time)}"
        return (
            f"Range: {format_datetime(self.range_start)} - {format_datetime(self.range_end)}"
        )

    def window_labels(self) -> tuple[str, str]:
        return format_datetime(self.window.start), format_datetime(self.window.end)
