# weathermap/ui/card_timeline.py
from __future__ import annotations

import streamlit as st

from weathermap.config import TRACK_WIDTH_PX
from weathermap.dashboard import DashboardController, InputEvent
from weathermap.timeline import Handle, TimelineMode, TrackBounds
from weathermap.ui.common import error_card, section_title
from weathermap.ui.session import get_controller

TRACK = TrackBounds(left=0, width=TRACK_WIDTH_PX)

KEY_SINGLE = "timeline_single"
KEY_RANGE = "timeline_range"
KEY_ANCHOR = "timeline_anchor"
KEY_MODE = "timeline_mode"


def _positions(controller: DashboardController) -> tuple[int, int, int]:
    tl = controller.state.timeline
    return (
        round(tl.instant_to_position(tl.selected_time, TRACK)),
        round(tl.instant_to_position(tl.range_start, TRACK)),
        round(tl.instant_to_position(tl.range_end, TRACK)),
    )


def _sync_widgets(controller: DashboardController) -> None:
    single, start, end = _positions(controller)
    st.session_state[KEY_SINGLE] = single
    st.session_state[KEY_RANGE] = (start, end)
    st.session_state[KEY_ANCHOR] = start


def _drag(controller: DashboardController, handle: Handle, x: float) -> None:
    controller.handle(InputEvent.HANDLE_DOWN, handle=handle)
    controller.handle(InputEvent.POINTER_MOVE, x=x, bounds=TRACK)
    controller.handle(InputEvent.POINTER_UP)


def _on_single_change() -> None:
    controller = get_controller()
    _drag(controller, Handle.PRIMARY, st.session_state[KEY_SINGLE])
    _sync_widgets(controller)


def _on_range_change() -> None:
    controller = get_controller()
    new_start, new_end = st.session_state[KEY_RANGE]
    _, start, end = _positions(controller)
    if new_start != start:
        _drag(controller, Handle.PRIMARY, new_start)
    if new_end != end:
        _drag(controller, Handle.SECONDARY, new_end)
    _sync_widgets(controller)


def _on_anchor_change() -> None:
    controller = get_controller()
    controller.handle(InputEvent.TRACK_CLICK, x=st.session_state[KEY_ANCHOR], bounds=TRACK)
    _sync_widgets(controller)


def _on_mode_change() -> None:
    controller = get_controller()
    controller.handle(InputEvent.MODE_TOGGLE, mode=st.session_state[KEY_MODE])
    _sync_widgets(controller)


def card_timeline() -> None:
    """Render the timeline: mode toggle, handles and the selected time label."""
    try:
        controller = get_controller()
        tl = controller.state.timeline
        if KEY_SINGLE not in st.session_state:
            _sync_widgets(controller)

        start_label, end_label = tl.window_labels()
        section_title("🕒 Timeline", hint=tl.describe(), mb=4)

        st.radio(
            "Mode",
            options=[m.value for m in TimelineMode],
            format_func=lambda v: "Single time" if v == "single" else "Time range",
            index=0 if tl.mode is TimelineMode.SINGLE else 1,
            key=KEY_MODE,
            horizontal=True,
            on_change=_on_mode_change,
        )

        if tl.mode is TimelineMode.SINGLE:
            st.slider(
                "Selected time",
                min_value=0,
                max_value=TRACK_WIDTH_PX,
                key=KEY_SINGLE,
                on_change=_on_single_change,
                label_visibility="collapsed",
            )
        else:
            st.slider(
                "Selected range",
                min_value=0,
                max_value=TRACK_WIDTH_PX,
                key=KEY_RANGE,
                on_change=_on_range_change,
                label_visibility="collapsed",
            )
            st.slider(
                "Move range to",
                min_value=0,
                max_value=TRACK_WIDTH_PX,
                key=KEY_ANCHOR,
                on_change=_on_anchor_change,
            )

        st.markdown(
            f"<div class='hint timeline-labels'><span>{start_label}</span>"
            f"<span style='float:right'>{end_label}</span></div>",
            unsafe_allow_html=True,
        )

    except Exception as e:
        error_card("Timeline", e, height_dvh=8)
