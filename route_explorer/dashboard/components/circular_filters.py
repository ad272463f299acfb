"""
Circular route search form component.
"""

from typing import Optional, Sequence

import streamlit as st

from route_explorer.config import ExplorerConfig
from route_explorer.exceptions import InvalidFilterError
from route_explorer.schemas.filters import PATTERN_TYPE_CHOICES, CircularFilterState
from route_explorer.schemas.reference import AirlineRecord
from route_explorer.services.form_state import circular_filters_from_form


def _airline_label(airline: AirlineRecord) -> str:
    return f"{airline.name} ({airline.iata})" if airline.iata else airline.name


def render_circular_filters(
    filters: CircularFilterState,
    airlines: Sequence[AirlineRecord],
    loading: bool = False,
) -> Optional[CircularFilterState]:
    """
    Render the circular-route form pre-filled from ``filters``.

    Args:
        filters: Current filter snapshot.
        airlines: Airline choices; when empty a free-text name is asked for.
        loading: Disables submission while a query is in flight.

    Returns:
        The submitted CircularFilterState, or None if nothing was submitted.
    """
    config = ExplorerConfig.query
    low, high = filters.duration_range or (config.min_duration, config.max_circular_duration)

    with st.form("circular_filters"):
        col1, col2, col3 = st.columns(3)
        airline_id = None
        airline_name = filters.airline_name
        with col1:
            if airlines:
                ids = [None] + [airline.id for airline in airlines]
                by_id = {airline.id: airline for airline in airlines}
                selected = st.selectbox(
                    "Airline",
                    ids,
                    index=ids.index(filters.airline_id) if filters.airline_id in by_id else 0,
                    format_func=lambda i: "Select an airline" if i is None else _airline_label(by_id[i]),
                )
                if selected is not None:
                    airline_id = selected
                    airline_name = by_id[selected].name
            else:
                airline_name = st.text_input("Airline name", value=filters.airline_name)
        start_airport = col2.text_input(
            "Start airport (IATA)", value=filters.start_airport, max_chars=3
        )
        contains_airport = col3.text_input(
            "Contains airport (IATA)", value=filters.contains_airport, max_chars=3
        )

        col4, col5, col6 = st.columns(3)
        pattern_type = col4.selectbox(
            "Pattern",
            PATTERN_TYPE_CHOICES,
            index=PATTERN_TYPE_CHOICES.index(filters.pattern_type),
            format_func=str.title,
        )
        limit_options = list(config.circular_limit_options)
        if filters.limit not in limit_options:
            limit_options = sorted(set(limit_options) | {filters.limit})
        limit = col5.selectbox("Limit", limit_options, index=limit_options.index(filters.limit))
        fetch_all = col6.checkbox("Fetch all results", value=filters.fetch_all)

        duration_range = st.slider(
            "Total duration (minutes)",
            min_value=config.min_duration,
            max_value=config.max_circular_duration,
            value=(low, high),
            step=config.duration_step,
        )

        submitted = st.form_submit_button("Search", disabled=loading)

    if not submitted:
        return None

    try:
        return circular_filters_from_form(
            {
                "airline_id": airline_id,
                "airline_name": airline_name,
                "start_airport": start_airport,
                "contains_airport": contains_airport,
                "pattern_type": pattern_type,
                "duration_range": duration_range,
                "limit": limit,
                "fetch_all": fetch_all,
            },
            previous=filters,
        )
    except InvalidFilterError as e:
        st.error(e.message)
        return None
