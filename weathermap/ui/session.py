from __future__ import annotations

import streamlit as st

from weathermap.dashboard import DashboardController, create_state
from weathermap.ui.map_surface import PlotlyMapSurface

SESSION_KEY = "dashboard"


def get_controller() -> DashboardController:
    """One controller (and its state) per browser session."""
    controller = st.session_state.get(SESSION_KEY)
    if controller is None:
        controller = DashboardController(create_state(), PlotlyMapSurface())
        controller.notify("Dashboard initialized successfully", "success")
        st.session_state[SESSION_KEY] = controller
    return controller
