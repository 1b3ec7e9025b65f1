# weathermap/ui/common.py
"""Small HTML building blocks shared by the dashboard cards."""

from __future__ import annotations

import html

import streamlit as st

from weathermap.paths import asset_path


def load_css(file_name: str) -> None:
    """Inject an assets/ stylesheet; a missing file is skipped silently."""
    path = asset_path(file_name)
    if not path.exists():
        return
    st.markdown(f"<style>{path.read_text(encoding='utf-8')}</style>", unsafe_allow_html=True)


def section_title(title: str, hint: str = "", mt: int = 10, mb: int = 10) -> None:
    """Card heading, optionally followed by a dimmed hint (selection, counts...)."""
    hint_html = f" &nbsp; <span class='hint'>{html.escape(hint)}</span>" if hint else ""
    st.markdown(
        f"<div class='section-title' style='margin:{mt}px 0 {mb}px 0'>{title}{hint_html}</div>",
        unsafe_allow_html=True,
    )


def card(title: str, body_html: str, height_dvh: int = 16) -> None:
    st.markdown(
        f"""
        <section class="card" style="min-height:{height_dvh}dvh; position:relative; overflow:hidden;">
          <div class="card-title">{title}</div>
          <div class="card-body">{body_html}</div>
        </section>
        """,
        unsafe_allow_html=True,
    )


def error_card(title: str, error: Exception, height_dvh: int = 12) -> None:
    """Fallback card shown when a card fails to render."""
    message = html.escape(f"{type(error).__name__}: {error}")
    card(title, f"<span class='hint card-error'>Error: {message}</span>", height_dvh=height_dvh)


def status_badge(kind: str, message: str) -> str:
    """HTML badge for the API status line."""
    return f"<span class='status status--{kind}'>{html.escape(message)}</span>"
