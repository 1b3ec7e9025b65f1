# weathermap/geometry.py
"""Coordinates and polygon centroid."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple


class Coordinate(NamedTuple):
    """WGS84 point in degrees."""

    lat: float
    lng: float


def centroid(vertices: Sequence[Coordinate]) -> Coordinate:
    """Return the plain vertex average of a polygon.

    This is not an area-weighted centroid: every vertex counts the same,
    so the result does not depend on vertex order.
    """
    if not vertices:
        raise ValueError("centroid needs at least one vertex")

    lat = sum(v.lat for v in vertices)
    lng = sum(v.lng for v in vertices)
    n = len(vertices)
    return Coordinate(lat / n, lng / n)
