from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from weathermap.config import COLOR_ERROR, COLOR_PENDING
from weathermap.regions import Region, RegionStatus
from weathermap.timeline import format_datetime
from weathermap.utils_colors import (
    DEFAULT_RULES,
    ColorRule,
    classify_temperature,
    color_for_temperature,
)


@dataclass
class RegionRow:
    """UI-ready row for one region."""

    id: str
    name: str  # "Region 1", "Region 2", …
    value_text: str  # "12.3°C" / "Loading..." / "Error"
    label: str  # rule label, "" when there is no observation
    color: str
    status: str  # "pending" / "ok" / "error"


def region_name(index: int) -> str:
    return f"Region {index + 1}"


def fill_color(region: Region, rules: Iterable[ColorRule] = DEFAULT_RULES) -> str:
    if region.status is RegionStatus.ERROR:
        return COLOR_ERROR
    if region.observation is None:
        return COLOR_PENDING
    return color_for_temperature(region.observation.temperature, rules)


def popup_text(region: Region, index: int) -> str:
    """Popup content shown on the map for a region."""
    name = region_name(index)
    if region.status is RegionStatus.ERROR:
        return f"{name}<br><i>Error loading weather data</i>"
    obs = region.observation
    if obs is None:
        return f"{name}<br><i>Loading weather data...</i>"
    return (
        f"<b>{name}</b><br>"
        f"Temperature: {obs.temperature:.1f}°C<br>"
        f"Time: {format_datetime(obs.timestamp)}<br>"
        f"Location: {region.centroid.lat:.3f}, {region.centroid.lng:.3f}"
    )


def build_region_rows(
    regions: Iterable[Region],
    rules: Iterable[ColorRule] = DEFAULT_RULES,
) -> list[RegionRow]:
    rules = tuple(rules)
    rows: list[RegionRow] = []
    for idx, region in enumerate(regions):
        obs = region.observation
        if region.status is RegionStatus.ERROR:
            value_text, label = "Error", ""
        elif obs is None:
            value_text, label = "Loading...", ""
        else:
            value_text = f"{obs.temperature:.1f}°C"
            label = classify_temperature(obs.temperature, rules)[1]

        rows.append(
            RegionRow(
                id=region.id,
                name=region_name(idx),
                value_text=value_text,
                label=label,
                color=fill_color(region, rules),
                status=region.status.value,
            )
        )
    return rows
