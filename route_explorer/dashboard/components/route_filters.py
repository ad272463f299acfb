"""
Route search form component.

Renders the route filters (directional fields, either-endpoint fields,
airline, duration range) and returns what the user asked for.
"""

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from route_explorer.config import ExplorerConfig
from route_explorer.exceptions import InvalidFilterError
from route_explorer.schemas.filters import AggregateKind, FilterState
from route_explorer.services.form_state import route_filters_from_form
from route_explorer.services.formatting import aggregate_banner, format_duration


@dataclass(frozen=True)
class RouteFilterAction:
    """User action from the route form: a new FilterState, a clear, or nothing."""

    submitted: Optional[FilterState] = None
    cleared: bool = False


def render_route_filters(filters: FilterState, loading: bool = False) -> RouteFilterAction:
    """
    Render the route search form pre-filled from ``filters``.

    Args:
        filters: Current filter snapshot.
        loading: Disables submission while a query is in flight.

    Returns:
        RouteFilterAction describing the user's action on this rerun.
    """
    config = ExplorerConfig.query

    banner = aggregate_banner(filters)
    if banner:
        col_msg, col_clear = st.columns([5, 1])
        with col_msg:
            st.markdown(f'<div class="aggregate-banner">{banner}</div>', unsafe_allow_html=True)
        with col_clear:
            if st.button("Clear Filter", key="clear_aggregate"):
                return RouteFilterAction(cleared=True)

    key = filters.aggregate_key
    either_airport = key.value if key and key.kind is AggregateKind.AIRPORT else ""
    either_country = key.value if key and key.kind is AggregateKind.COUNTRY else ""
    low, high = filters.duration_range or (config.min_duration, config.max_route_duration)

    with st.form("route_filters"):
        col1, col2, col3 = st.columns(3)
        airline_name = col1.text_input(
            "Airline", value=filters.airline_name, placeholder="e.g. British Airways"
        )
        departure_iata = col2.text_input(
            "From (IATA)", value=filters.departure_iata, placeholder="e.g. LHR", max_chars=3
        )
        arrival_iata = col3.text_input(
            "To (IATA)", value=filters.arrival_iata, placeholder="e.g. JFK", max_chars=3
        )

        col4, col5 = st.columns(2)
        departure_country = col4.text_input(
            "From Country", value=filters.departure_country, placeholder="e.g. United Kingdom"
        )
        arrival_country = col5.text_input(
            "To Country", value=filters.arrival_country, placeholder="e.g. United States"
        )

        with st.expander("Either endpoint", expanded=key is not None):
            col6, col7 = st.columns(2)
            airport_value = col6.text_input(
                "Airport (origin or destination)", value=either_airport, max_chars=3
            )
            country_value = col7.text_input(
                "Country (origin or destination)", value=either_country
            )

        duration_range = st.slider(
            "Flight duration (minutes)",
            min_value=config.min_duration,
            max_value=config.max_route_duration,
            value=(low, high),
            step=config.duration_step,
            help=f"Currently {format_duration(low)} to {format_duration(high)}",
        )

        col_apply, col_clear = st.columns([1, 1])
        submitted = col_apply.form_submit_button("Apply Filters", disabled=loading)
        cleared = col_clear.form_submit_button("Clear Filters")

    if cleared:
        return RouteFilterAction(cleared=True)
    if not submitted:
        return RouteFilterAction()

    try:
        new_filters = route_filters_from_form(
            {
                "airline_name": airline_name,
                "departure_iata": departure_iata,
                "arrival_iata": arrival_iata,
                "departure_country": departure_country,
                "arrival_country": arrival_country,
                "either_airport": airport_value,
                "either_country": country_value,
                "duration_range": duration_range,
            },
            previous=filters,
        )
    except InvalidFilterError as e:
        st.error(e.message)
        return RouteFilterAction()

    return RouteFilterAction(submitted=new_filters)
