# weathermap/ui/card_map.py
from __future__ import annotations

import streamlit as st

from weathermap.config import DATA_SOURCES, PLOTLY_CONFIG
from weathermap.dashboard import InputEvent
from weathermap.ui.common import error_card, section_title
from weathermap.ui.session import get_controller
from weathermap.utils_colors import legend


def _legend_html() -> str:
    items = "".join(
        f"<span style='color:{color};'>&#9632;</span> {text} &nbsp; " for color, text in legend()
    )
    return f"<div class='hint' style='margin-top:2px;'>{items}</div>"


def _render_draw_controls() -> None:
    controller = get_controller()
    registry = controller.state.registry

    if not registry.draw.active:
        st.button(
            "✏️ Draw region",
            key="draw_start",
            on_click=controller.handle,
            args=(InputEvent.DRAW_START,),
        )
        return

    st.markdown(
        f"<span class='hint'>{registry.draw_hint()}</span>",
        unsafe_allow_html=True,
    )
    center = controller.state.map_center
    c1, c2 = st.columns(2, gap="small")
    with c1:
        lat = st.number_input("Latitude", value=float(center[0]), format="%.4f", key="draw_lat")
    with c2:
        lng = st.number_input("Longitude", value=float(center[1]), format="%.4f", key="draw_lng")

    b1, b2, b3 = st.columns(3, gap="small")
    with b1:
        st.button(
            "➕ Add point",
            key="draw_add",
            on_click=controller.handle,
            args=(InputEvent.MAP_CLICK,),
            kwargs={"lat": lat, "lng": lng},
        )
    with b2:
        st.button(
            "✔ Complete",
            key="draw_complete",
            on_click=controller.handle,
            args=(InputEvent.MAP_DBLCLICK,),
        )
    with b3:
        st.button(
            "✖ Cancel (Esc)",
            key="draw_cancel",
            on_click=controller.handle,
            args=(InputEvent.ESCAPE,),
        )


def _on_confirm() -> None:
    controller = get_controller()
    controller.handle(
        InputEvent.CONFIRM_DATA_SOURCE,
        data_source=st.session_state.get("data_source"),
    )


def _render_data_source_modal() -> None:
    controller = get_controller()
    with st.container(border=True):
        st.markdown("**Select data source**")
        st.radio(
            "Data source",
            options=list(DATA_SOURCES),
            format_func=lambda tag: DATA_SOURCES[tag],
            index=0,
            key="data_source",
            label_visibility="collapsed",
        )
        c1, c2 = st.columns(2, gap="small")
        with c1:
            st.button("Confirm", key="modal_confirm", on_click=_on_confirm)
        with c2:
            st.button(
                "Close",
                key="modal_close",
                on_click=controller.handle,
                args=(InputEvent.CLOSE_MODAL,),
            )


def card_map() -> None:
    """Render the map with all regions, the draw controls and the data source dialog."""
    try:
        controller = get_controller()
        state = controller.state

        c_title, c_btn = st.columns([5, 1], gap="small")
        with c_title:
            section_title("🗺️ Regions map", mb=4)
        with c_btn:
            st.button(
                "🎯 Re-center",
                key="map_recenter",
                on_click=controller.handle,
                args=(InputEvent.RECENTER,),
            )

        fig = controller.surface.build_figure(state.map_center, state.map_zoom)
        st.plotly_chart(fig, use_container_width=True, theme=None, config=PLOTLY_CONFIG)
        st.markdown(_legend_html(), unsafe_allow_html=True)

        if state.modal_open:
            _render_data_source_modal()
        else:
            _render_draw_controls()

    except Exception as e:
        error_card("Regions map", e, height_dvh=30)
