# core/ui.py
from __future__ import annotations

import datetime
import logging
from typing import Optional

import streamlit as st

from core.settings import Settings, load_settings
from screens.students.api import StudentApiClient
from screens.students.state import Route, parse_route

logger = logging.getLogger(__name__)

ROUTE_KEY = "students__route"

FOOTER_LINKS = [
    {"label": "Privacy Policy", "url": "#"},
    {"label": "Terms of Service", "url": "#"},
    {"label": "Contact", "url": "#"},
]


def _handle_error(e: Exception, user_message: str = "An error occurred.") -> None:
    logger.error(user_message, exc_info=e)
    st.error(user_message)


@st.cache_resource
def get_settings() -> Settings:
    return load_settings()


@st.cache_resource
def get_client(base_url: str, timeout: float) -> StudentApiClient:
    """One HTTP session per server process."""
    logger.info(f"Student API client for {base_url}")
    return StudentApiClient(base_url, timeout=timeout)


def client_from_settings(settings: Optional[Settings] = None) -> StudentApiClient:
    settings = settings or get_settings()
    return get_client(settings.api.base_url, settings.api.timeout)


# ────────────────────────────────────────────────────────────────────────────────
# Navigation
# ────────────────────────────────────────────────────────────────────────────────

def _clear_view_state() -> None:
    for key in [k for k in st.session_state.keys() if str(k).startswith("students__view__")]:
        del st.session_state[key]


def current_route() -> Route:
    """The URL wins, so browser back/forward and edited links switch views."""
    from_url = parse_route(st.query_params.to_dict())
    route = st.session_state.get(ROUTE_KEY)
    if route != from_url:
        if route is not None:
            _clear_view_state()
        route = from_url
        st.session_state[ROUTE_KEY] = route
    return route


def navigate(view: str, student_id: Optional[int] = None) -> None:
    """Switch views; transient state of the view being left is dropped."""
    route = Route(view=view, student_id=student_id)
    st.session_state[ROUTE_KEY] = route
    _clear_view_state()
    st.query_params.clear()
    st.query_params.update(route.to_query())
    st.rerun()


# ────────────────────────────────────────────────────────────────────────────────
# Chrome
# ────────────────────────────────────────────────────────────────────────────────

def render_navbar() -> None:
    route = current_route()
    col_brand, col_list, col_add = st.columns([4, 1, 1])
    col_brand.markdown("### 🎓 Student Management")
    if col_list.button("Students", key="nav_students", use_container_width=True,
                       type="primary" if route.view == "list" else "secondary"):
        navigate("list")
    if col_add.button("Add Student", key="nav_add", use_container_width=True,
                      type="primary" if route.view == "create" else "secondary"):
        navigate("create")
    st.divider()


def render_footer_global(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    year = datetime.date.today().year
    st.divider()
    col_text, col_links = st.columns([3, 2])
    with col_text:
        st.caption(settings.ui.footer_text.replace("{year}", str(year)))
    with col_links:
        st.caption(" • ".join(f"[{link['label']}]({link['url']})" for link in FOOTER_LINKS))
