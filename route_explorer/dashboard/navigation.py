"""
View selection and cross-view links.
"""

import streamlit as st

from route_explorer.schemas.filters import AggregateKey
from route_explorer.services.query_codec import aggregate_link_params, write_params

ROUTES_VIEW = "Routes"
CIRCULAR_VIEW = "Circular Routes"
AIRPORTS_VIEW = "Airports"
AIRLINES_VIEW = "Airlines"
COUNTRIES_VIEW = "Countries"
SCHEDULE_VIEW = "Schedule Builder"

ACTIVE_VIEW_KEY = "active_view"

# Session keys holding per-view filter state
VIEW_STATE_KEYS = ("route_filters", "circular_filters")


def reset_view_state() -> None:
    """on_change callback for the view selector: start the new view clean."""
    write_params(st.query_params, {})
    for key in VIEW_STATE_KEYS:
        st.session_state.pop(key, None)


def open_aggregate_routes(key: AggregateKey) -> None:
    """
    on_click callback: show every route touching ``key`` as either endpoint.

    Writes the aggregate parameters plus ``auto_apply`` to the URL so the
    routes view runs the query immediately on its next render.
    """
    write_params(st.query_params, aggregate_link_params(key))
    for state_key in VIEW_STATE_KEYS:
        st.session_state.pop(state_key, None)
    st.session_state[ACTIVE_VIEW_KEY] = ROUTES_VIEW
