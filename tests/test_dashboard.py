from __future__ import annotations

from datetime import datetime

import pytest

from weathermap.config import COLOR_ERROR, COLOR_PENDING, MAP_CENTER, MAP_ZOOM, TZ
from weathermap.dashboard import DashboardController, InputEvent, Notification, create_state
from weathermap.errors import FetchError
from weathermap.regions import RegionStatus
from weathermap.timeline import Handle, TrackBounds

NOW = datetime(2024, 5, 16, 12, 0, tzinfo=TZ)
TRACK = TrackBounds(0, 1000)


class FakeSurface:
    def __init__(self):
        self.polygons: dict[str, dict] = {}
        self.draft: list = []
        self.calls: list[str] = []

    def add_polygon(self, region_id, vertices, fill):
        self.calls.append("add")
        self.polygons[region_id] = {"vertices": list(vertices), "fill": fill, "popup": ""}

    def set_fill(self, region_id, fill):
        self.calls.append("fill")
        self.polygons[region_id]["fill"] = fill

    def set_popup(self, region_id, text):
        self.calls.append("popup")
        self.polygons[region_id]["popup"] = text

    def remove(self, region_id):
        self.calls.append("remove")
        self.polygons.pop(region_id, None)

    def show_draft(self, vertices):
        self.draft = list(vertices)

    def clear_draft(self):
        self.draft = []


def _payload(temp: float):
    return {"hourly": {"temperature_2m": [temp] * 24}}


@pytest.fixture
def ctx():
    state = create_state(now=NOW)
    temps = {"value": 30.0, "fail": False, "calls": 0}

    def fetcher(lat, lng, instant):
        temps["calls"] += 1
        if temps["fail"]:
            raise FetchError("HTTP error! status: 503")
        return _payload(temps["value"])

    state.registry.fetcher = fetcher
    surface = FakeSurface()
    return DashboardController(state, surface), surface, temps


def _messages(controller):
    return [(n.message, n.kind) for n in controller.state.notifications]


def _draw_triangle(controller):
    controller.handle(InputEvent.DRAW_START)
    for lat, lng in ((52.5, 13.3), (52.6, 13.4), (52.5, 13.5)):
        controller.handle(InputEvent.MAP_CLICK, lat=lat, lng=lng)
    controller.handle(InputEvent.MAP_DBLCLICK)


def test_draw_too_few_points_reports_error(ctx):
    controller, surface, _ = ctx
    controller.handle(InputEvent.DRAW_START)
    controller.handle(InputEvent.MAP_CLICK, lat=1, lng=1)
    controller.handle(InputEvent.MAP_CLICK, lat=2, lng=2)
    controller.handle(InputEvent.MAP_DBLCLICK)

    assert ("Minimum 3 points required", "error") in _messages(controller)
    assert controller.state.registry.draw.active
    assert not controller.state.modal_open
    assert len(surface.draft) == 2


def test_full_create_flow(ctx):
    controller, surface, temps = ctx
    _draw_triangle(controller)
    assert controller.state.modal_open

    controller.handle(InputEvent.CONFIRM_DATA_SOURCE, data_source=None)
    assert ("Please select a data source", "error") in _messages(controller)
    assert controller.state.modal_open

    controller.handle(InputEvent.CONFIRM_DATA_SOURCE, data_source="temperature")

    assert not controller.state.modal_open
    assert surface.draft == []
    (region,) = controller.state.registry.regions
    shape = surface.polygons[region.id]
    assert shape["fill"] == "#52c41a"
    assert "30.0°C" in shape["popup"]
    assert surface.calls[:2] == ["add", "popup"]
    assert controller.state.api_status[0] == "success"
    assert ("Polygon created successfully!", "success") in _messages(controller)
    assert temps["calls"] == 1


def test_new_region_starts_gray(ctx):
    controller, surface, temps = ctx
    fills: list[str] = []
    original = surface.add_polygon

    def spy(region_id, vertices, fill):
        fills.append(fill)
        original(region_id, vertices, fill)

    surface.add_polygon = spy
    _draw_triangle(controller)
    controller.confirm_data_source("temperature")
    assert fills == [COLOR_PENDING]


def test_timeline_change_refreshes_all_regions(ctx):
    controller, surface, temps = ctx
    for _ in range(2):
        _draw_triangle(controller)
        controller.confirm_data_source("temperature")
    assert temps["calls"] == 2

    temps["value"] = 5.0
    controller.handle(InputEvent.TRACK_CLICK, x=300, bounds=TRACK)

    assert temps["calls"] == 4
    assert not controller.state.loading
    for region in controller.state.registry.regions:
        assert surface.polygons[region.id]["fill"] == "#ff4d4f"


def test_drag_refreshes_once_on_release(ctx):
    controller, _, temps = ctx
    _draw_triangle(controller)
    controller.confirm_data_source("temperature")

    controller.handle(InputEvent.HANDLE_DOWN, handle=Handle.PRIMARY)
    controller.handle(InputEvent.POINTER_MOVE, x=100, bounds=TRACK)
    controller.handle(InputEvent.POINTER_MOVE, x=200, bounds=TRACK)
    assert temps["calls"] == 1
    controller.handle(InputEvent.POINTER_UP)
    assert temps["calls"] == 2


def test_mode_toggle_without_regions_does_not_fetch(ctx):
    controller, _, temps = ctx
    controller.handle(InputEvent.MODE_TOGGLE, mode="range")
    assert temps["calls"] == 0
    assert controller.state.timeline.mode.value == "range"


def test_fetch_failure_marks_region_and_notifies(ctx):
    controller, surface, temps = ctx
    temps["fail"] = True
    _draw_triangle(controller)
    region = controller.confirm_data_source("temperature")

    assert region.status is RegionStatus.ERROR
    assert surface.polygons[region.id]["fill"] == COLOR_ERROR
    assert "Error loading weather data" in surface.polygons[region.id]["popup"]
    assert controller.state.api_status == ("error", "Failed to fetch weather data")
    assert ("Failed to fetch weather data", "error") in _messages(controller)


def test_delete_region_removes_shape_and_renames(ctx):
    controller, surface, _ = ctx
    for _ in range(2):
        _draw_triangle(controller)
        controller.confirm_data_source("temperature")
    first, second = controller.state.registry.regions

    controller.handle(InputEvent.DELETE_REGION, region_id=first.id)

    assert first.id not in surface.polygons
    assert "Region 1" in surface.polygons[second.id]["popup"]
    assert ("Polygon deleted", "info") in _messages(controller)


def test_escape_cancels_drawing_and_closes_modal(ctx):
    controller, surface, _ = ctx
    _draw_triangle(controller)
    assert controller.state.modal_open

    controller.handle(InputEvent.ESCAPE)

    assert not controller.state.modal_open
    assert controller.state.registry.pending is None
    assert surface.draft == []
    assert ("Polygon drawing cancelled", "info") in _messages(controller)


def test_close_modal_cancels(ctx):
    controller, _, _ = ctx
    _draw_triangle(controller)
    controller.handle(InputEvent.CLOSE_MODAL)
    assert controller.state.registry.pending is None


def test_recenter_and_sidebar(ctx):
    controller, _, _ = ctx
    controller.state.map_center = (0.0, 0.0)
    controller.state.map_zoom = 3
    controller.handle(InputEvent.RECENTER)
    assert controller.state.map_center == MAP_CENTER
    assert controller.state.map_zoom == MAP_ZOOM

    controller.handle(InputEvent.SIDEBAR_TOGGLE)
    assert controller.state.sidebar_collapsed
    controller.handle("sidebar_toggle")
    assert not controller.state.sidebar_collapsed


def test_notifications_expire(ctx):
    controller, _, _ = ctx
    controller.state.notifications = [
        Notification("old", created_at=100.0),
        Notification("new", created_at=104.0),
    ]
    active = controller.active_notifications(now=106.0)
    assert [n.message for n in active] == ["new"]


def test_pop_notifications_empties_queue(ctx):
    controller, _, _ = ctx
    controller.notify("hello")
    assert [n.message for n in controller.pop_notifications()] == ["hello"]
    assert controller.state.notifications == []


def test_unknown_event_raises(ctx):
    controller, _, _ = ctx
    with pytest.raises(ValueError):
        controller.handle("teleport")
