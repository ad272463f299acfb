"""
Circular route table and segment breakdown.
"""

from typing import Iterable, Optional

import pandas as pd
import streamlit as st

from route_explorer.schemas.route import CircularRouteRecord
from route_explorer.services.formatting import format_distance, format_duration


def circular_routes_to_frame(routes: Iterable[CircularRouteRecord]) -> pd.DataFrame:
    """Build the display DataFrame for circular routes."""
    rows = [
        {
            "Pattern": route.route_pattern,
            "Type": route.pattern_type.value.title(),
            "Start": route.start_airport,
            "Stops": route.stops_count,
            "Duration": format_duration(route.total_duration_minutes),
            "Distance": format_distance(route.total_distance_km),
        }
        for route in routes
    ]
    return pd.DataFrame(
        rows, columns=["Pattern", "Type", "Start", "Stops", "Duration", "Distance"]
    )


def render_circular_table(
    routes: tuple, key: str = "circular_table"
) -> Optional[CircularRouteRecord]:
    """
    Render one page of circular routes and return the selected one.

    Returns:
        The selected CircularRouteRecord, or None.
    """
    if not routes:
        st.info("No circular routes found matching your criteria.")
        return None

    event = st.dataframe(
        circular_routes_to_frame(routes),
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=key,
    )

    if event.selection and event.selection.rows:
        selected_row = event.selection.rows[0]
        if selected_row < len(routes):
            return routes[selected_row]
    return None


def render_circular_detail(route: CircularRouteRecord) -> None:
    """Render the ordered segments of one circular route."""
    st.markdown("---")
    st.subheader(f"Segments: {route.route_pattern}")

    rows = [
        {
            "#": segment.segment_order,
            "From": segment.departure_iata,
            "From City": segment.departure_city,
            "To": segment.arrival_iata,
            "To City": segment.arrival_city,
            "Duration": format_duration(segment.duration_minutes),
            "Distance": format_distance(segment.distance_km),
        }
        for segment in route.ordered_segments
    ]
    if not rows:
        st.info("No segment data available for this route.")
        return

    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
