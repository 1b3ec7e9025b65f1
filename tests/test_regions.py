from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from weathermap.config import TZ
from weathermap.errors import DrawValidationError, FetchError, SelectionError
from weathermap.geometry import Coordinate
from weathermap.regions import RegionRegistry, RegionStatus
from weathermap.timeline import RangeSelection, SingleSelection

WHEN = datetime(2024, 5, 1, 10, 0, tzinfo=TZ)
TRIANGLE = [Coordinate(52.5, 13.3), Coordinate(52.6, 13.4), Coordinate(52.5, 13.5)]


def _payload(temp_at_10: float = 12.5):
    temps = [0.0] * 24
    temps[10] = temp_at_10
    return {"hourly": {"temperature_2m": temps}}


class FakeFetcher:
    def __init__(self, fail_on: set[int] | None = None):
        self.calls: list[tuple[float, float, datetime]] = []
        self.fail_on = fail_on or set()

    def __call__(self, lat, lng, instant):
        self.calls.append((lat, lng, instant))
        if len(self.calls) in self.fail_on:
            raise FetchError("HTTP error! status: 500")
        return _payload()


def _draw(registry: RegionRegistry, points=TRIANGLE):
    registry.start_draw()
    for p in points:
        registry.add_vertex(p)
    return registry.complete_draw()


def test_complete_draw_with_two_vertices_fails_and_keeps_session():
    registry = RegionRegistry(FakeFetcher())
    registry.start_draw()
    registry.add_vertex(Coordinate(0, 0))
    registry.add_vertex(Coordinate(1, 1))

    with pytest.raises(DrawValidationError):
        registry.complete_draw()

    assert registry.draw.active
    assert len(registry.draw.points) == 2
    assert registry.pending is None


def test_complete_draw_with_three_vertices_succeeds():
    registry = RegionRegistry(FakeFetcher())
    pending = _draw(registry)
    assert pending.vertices == TRIANGLE
    assert pending.centroid.lat == pytest.approx(52.5333333)
    assert not registry.draw.active


def test_twelfth_vertex_auto_completes():
    registry = RegionRegistry(FakeFetcher())
    registry.start_draw()
    results = [registry.add_vertex(Coordinate(i * 0.01, i * 0.02)) for i in range(12)]

    assert all(r is None for r in results[:11])
    assert results[11] is not None
    assert len(registry.pending.vertices) == 12
    assert not registry.draw.active


def test_add_vertex_outside_session_is_ignored():
    registry = RegionRegistry(FakeFetcher())
    assert registry.add_vertex(Coordinate(1, 1)) is None
    assert registry.draw.points == []


def test_cancel_draw_clears_everything():
    registry = RegionRegistry(FakeFetcher())
    _draw(registry)
    registry.cancel_draw()
    assert registry.pending is None
    assert not registry.draw.active


def test_draw_hint_messages():
    registry = RegionRegistry(FakeFetcher())
    registry.start_draw()
    registry.add_vertex(Coordinate(0, 0))
    assert registry.draw_hint() == "Add 2 more points (minimum)"
    registry.add_vertex(Coordinate(0, 1))
    registry.add_vertex(Coordinate(1, 1))
    assert registry.draw_hint() == "Double-click to complete polygon (3/12 points)"


def test_confirm_region_creates_and_refreshes():
    fetcher = FakeFetcher()
    registry = RegionRegistry(fetcher)
    events: list[str] = []
    registry.subscribe(lambda event, region: events.append(event))
    _draw(registry)

    region = registry.confirm_region("temperature", SingleSelection(WHEN))

    assert registry.regions == [region]
    assert registry.pending is None
    assert region.status is RegionStatus.OK
    assert region.observation.temperature == 12.5
    assert region.observation.timestamp == WHEN
    assert fetcher.calls == [(region.centroid.lat, region.centroid.lng, WHEN)]
    assert events == ["added", "updated"]


def test_confirm_region_ids_are_unique():
    registry = RegionRegistry(FakeFetcher())
    ids = set()
    for _ in range(5):
        _draw(registry)
        ids.add(registry.confirm_region("temperature", SingleSelection(WHEN)).id)
    assert len(ids) == 5


def test_confirm_without_data_source_is_selection_error():
    registry = RegionRegistry(FakeFetcher())
    _draw(registry)
    with pytest.raises(SelectionError):
        registry.confirm_region(None, SingleSelection(WHEN))
    with pytest.raises(SelectionError):
        registry.confirm_region("humidity", SingleSelection(WHEN))
    assert registry.regions == []
    assert registry.pending is not None


def test_confirm_without_polygon_is_selection_error():
    registry = RegionRegistry(FakeFetcher())
    with pytest.raises(SelectionError):
        registry.confirm_region("temperature", SingleSelection(WHEN))


def test_refresh_uses_range_start():
    fetcher = FakeFetcher()
    registry = RegionRegistry(fetcher)
    _draw(registry)
    region = registry.confirm_region("temperature", RangeSelection(WHEN, WHEN + timedelta(hours=5)))
    assert fetcher.calls[-1][2] == WHEN
    assert region.observation.timestamp == WHEN


def test_refresh_missing_hour_marks_error():
    registry = RegionRegistry(lambda lat, lng, instant: {"hourly": {"temperature_2m": []}})
    _draw(registry)
    region = registry.confirm_region("temperature", SingleSelection(WHEN))
    assert region.status is RegionStatus.ERROR
    assert region.observation is None
    assert region.error == "No temperature data available"


def test_refresh_all_continues_after_failure():
    fetcher = FakeFetcher(fail_on={5})
    registry = RegionRegistry(fetcher)
    for _ in range(3):
        _draw(registry)
        registry.confirm_region("temperature", SingleSelection(WHEN))
    assert len(fetcher.calls) == 3

    # calls 4, 5, 6: the second region fails
    results = registry.refresh_all(SingleSelection(WHEN))

    assert results == [True, False, True]
    assert len(fetcher.calls) == 6
    r1, r2, r3 = registry.regions
    assert r1.observation is not None and r3.observation is not None
    assert r2.status is RegionStatus.ERROR
    assert r2.observation is None


def test_refresh_all_continues_after_malformed_payload():
    payloads = iter([_payload(), _payload(), _payload(), _payload(), {"hourly": "unavailable"}, _payload()])
    registry = RegionRegistry(lambda lat, lng, instant: next(payloads))
    for _ in range(3):
        _draw(registry)
        registry.confirm_region("temperature", SingleSelection(WHEN))

    results = registry.refresh_all(SingleSelection(WHEN))

    assert results == [True, False, True]
    r1, r2, r3 = registry.regions
    assert r2.status is RegionStatus.ERROR
    assert r2.error == "No temperature data available"
    assert r3.status is RegionStatus.OK
    assert r3.observation.temperature == 12.5


def test_refresh_all_is_sequential_in_registry_order():
    fetcher = FakeFetcher()
    registry = RegionRegistry(fetcher)
    for pts in (TRIANGLE, [Coordinate(1, 1), Coordinate(1, 2), Coordinate(2, 2)]):
        _draw(registry, pts)
        registry.confirm_region("temperature", SingleSelection(WHEN))
    fetcher.calls.clear()

    registry.refresh_all(SingleSelection(WHEN))

    assert [c[:2] for c in fetcher.calls] == [
        (r.centroid.lat, r.centroid.lng) for r in registry.regions
    ]


def test_delete_region():
    registry = RegionRegistry(FakeFetcher())
    events = []
    registry.subscribe(lambda event, region: events.append(event))
    _draw(registry)
    region = registry.confirm_region("temperature", SingleSelection(WHEN))

    assert registry.delete_region("nope") is None
    assert registry.delete_region(region.id) is region
    assert registry.regions == []
    assert events[-1] == "removed"
