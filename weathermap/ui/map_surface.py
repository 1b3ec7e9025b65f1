# weathermap/ui/map_surface.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import plotly.graph_objects as go

from weathermap.config import MAP_MAX_ZOOM, MAP_MIN_ZOOM, POLYGON_STYLE
from weathermap.geometry import Coordinate


def _hex_to_rgba(color: str, alpha: float) -> str:
    h = color.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


@dataclass
class MapShape:
    vertices: list[Coordinate]
    fill: str
    popup: str = ""


class PlotlyMapSurface:
    """Keeps rendered shapes and turns them into a plotly map figure."""

    def __init__(self) -> None:
        self.shapes: dict[str, MapShape] = {}
        self.draft: list[Coordinate] = []

    def add_polygon(self, region_id: str, vertices: Sequence[Coordinate], fill: str) -> None:
        self.shapes[region_id] = MapShape(vertices=list(vertices), fill=fill)

    def set_fill(self, region_id: str, fill: str) -> None:
        shape = self.shapes.get(region_id)
        if shape is not None:
            shape.fill = fill

    def set_popup(self, region_id: str, text: str) -> None:
        shape = self.shapes.get(region_id)
        if shape is not None:
            shape.popup = text

    def remove(self, region_id: str) -> None:
        self.shapes.pop(region_id, None)

    def show_draft(self, vertices: Sequence[Coordinate]) -> None:
        self.draft = list(vertices)

    def clear_draft(self) -> None:
        self.draft = []

    def build_figure(self, center: tuple[float, float], zoom: int, height: int = 520) -> go.Figure:
        fig = go.Figure()
        line_color = POLYGON_STYLE["color"]
        line_width = POLYGON_STYLE["weight"]
        fill_opacity = POLYGON_STYLE["fill_opacity"]

        for region_id, shape in self.shapes.items():
            ring = shape.vertices + shape.vertices[:1]
            fig.add_trace(
                go.Scattermap(
                    lat=[v.lat for v in ring],
                    lon=[v.lng for v in ring],
                    mode="lines",
                    fill="toself",
                    fillcolor=_hex_to_rgba(shape.fill, fill_opacity),
                    line=dict(color=line_color, width=line_width),
                    hoverinfo="text",
                    text=shape.popup,
                    name=region_id,
                    showlegend=False,
                )
            )

        if self.draft:
            fig.add_trace(
                go.Scattermap(
                    lat=[v.lat for v in self.draft],
                    lon=[v.lng for v in self.draft],
                    mode="lines+markers",
                    line=dict(color=line_color, width=line_width),
                    marker=dict(size=8, color=line_color),
                    hoverinfo="skip",
                    name="draft",
                    showlegend=False,
                )
            )

        fig.update_layout(
            map=dict(
                style="open-street-map",
                center=dict(lat=center[0], lon=center[1]),
                zoom=max(MAP_MIN_ZOOM, min(MAP_MAX_ZOOM, zoom)),
            ),
            margin=dict(l=0, r=0, t=0, b=0),
            height=height,
            paper_bgcolor="rgba(0,0,0,0)",
        )
        return fig
