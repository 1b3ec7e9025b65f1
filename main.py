# main.py
"""Main entry point for the region temperature dashboard (Streamlit)."""

import sys
import traceback

import streamlit as st

from weathermap.dashboard import DashboardController, InputEvent
from weathermap.logger_config import setup_logging
from weathermap.paths import ensure_dirs
from weathermap.ui import card_map, card_regions, card_timeline
from weathermap.ui.common import load_css
from weathermap.ui.session import get_controller

ensure_dirs()

logger = setup_logging()

_TOAST_ICONS = {"success": "✅", "error": "⚠️", "info": "ℹ️"}


def show_notifications(controller: DashboardController) -> None:
    """Flush pending notifications as toasts."""
    for n in controller.pop_notifications():
        st.toast(n.message, icon=_TOAST_ICONS.get(n.kind, "ℹ️"))


def main() -> None:
    """Initialize and render the dashboard layout."""
    try:
        st.set_page_config(
            page_title="Weather Map",
            layout="wide",
            page_icon="🌡️",
        )
        load_css("style.css")
        controller = get_controller()

        if controller.state.sidebar_collapsed:
            st.button(
                "☰ Show regions",
                key="sidebar_toggle",
                on_click=controller.handle,
                args=(InputEvent.SIDEBAR_TOGGLE,),
            )
        else:
            with st.sidebar:
                st.button(
                    "⟨ Hide",
                    key="sidebar_toggle",
                    on_click=controller.handle,
                    args=(InputEvent.SIDEBAR_TOGGLE,),
                )
                card_regions()

        card_timeline()
        card_map()

        show_notifications(controller)

    except KeyboardInterrupt:
        logger.info("Dashboard shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unhandled error: {str(e)}")
        logger.error(traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
