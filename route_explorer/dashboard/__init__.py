"""
Dashboard module for the route explorer.

Provides the Streamlit application: a sidebar view selector and one page
per view.

Usage:
    from route_explorer.dashboard import run_dashboard
    run_dashboard()
"""

import streamlit as st

from route_explorer.dashboard.navigation import (
    ACTIVE_VIEW_KEY,
    AIRLINES_VIEW,
    AIRPORTS_VIEW,
    CIRCULAR_VIEW,
    COUNTRIES_VIEW,
    ROUTES_VIEW,
    SCHEDULE_VIEW,
    reset_view_state,
)
from route_explorer.dashboard.pages import (
    render_airlines_view,
    render_airports_view,
    render_circular_view,
    render_countries_view,
    render_routes_view,
    render_schedule_view,
)

VIEWS = {
    ROUTES_VIEW: render_routes_view,
    CIRCULAR_VIEW: render_circular_view,
    AIRPORTS_VIEW: render_airports_view,
    AIRLINES_VIEW: render_airlines_view,
    COUNTRIES_VIEW: render_countries_view,
    SCHEDULE_VIEW: render_schedule_view,
}


def run_dashboard() -> None:
    """
    Main dashboard application entry point.

    Renders the sidebar view selector and the selected view.
    """
    st.sidebar.title("Route Explorer")
    view = st.sidebar.radio(
        "View",
        list(VIEWS),
        key=ACTIVE_VIEW_KEY,
        on_change=reset_view_state,
    )
    VIEWS[view]()


__all__ = ["run_dashboard"]
