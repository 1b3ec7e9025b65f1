# weathermap/ui/card_regions.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from weathermap.dashboard import InputEvent
from weathermap.ui.common import error_card, section_title, status_badge
from weathermap.ui.session import get_controller
from weathermap.viewmodels.regions import RegionRow, build_region_rows


def regions_frame(rows: list[RegionRow]) -> pd.DataFrame:
    """Table shown under the region list."""
    return pd.DataFrame(
        [{"Region": r.name, "Temperature": r.value_text, "Class": r.label} for r in rows],
        columns=["Region", "Temperature", "Class"],
    )


def _render_row(row: RegionRow) -> None:
    controller = get_controller()
    c1, c2 = st.columns([5, 1], gap="small")
    with c1:
        st.markdown(
            f"<div class='region-item'><span style='color:{row.color};'>&#9632;</span> "
            f"<b>{row.name}</b> &nbsp; {row.value_text}</div>",
            unsafe_allow_html=True,
        )
    with c2:
        st.button(
            "🗑️",
            key=f"delete_{row.id}",
            on_click=controller.handle,
            args=(InputEvent.DELETE_REGION,),
            kwargs={"region_id": row.id},
        )


def card_regions() -> None:
    """Render the region list with temperatures and the API status line."""
    try:
        controller = get_controller()
        state = controller.state

        section_title("📍 Regions", mt=4, mb=4)
        kind, message = state.api_status
        st.markdown(status_badge(kind, message), unsafe_allow_html=True)
        if state.loading:
            st.markdown("<span class='hint'>Loading…</span>", unsafe_allow_html=True)

        rows = build_region_rows(state.registry.regions)
        if not rows:
            st.markdown("<p class='hint'>No regions created yet</p>", unsafe_allow_html=True)
            return

        for row in rows:
            _render_row(row)

        st.dataframe(regions_frame(rows), hide_index=True, use_container_width=True)

    except Exception as e:
        error_card("Regions", e)
