"""
Route table component for displaying one page of routes.

Provides an interactive table with single-row selection and a detail
panel for the selected route.
"""

from typing import Iterable, Optional

import pandas as pd
import streamlit as st

from route_explorer.schemas.route import RouteRecord
from route_explorer.services.formatting import format_distance, format_duration


def _place(iata: str, city: str, country: str) -> str:
    where = ", ".join(part for part in (city, country) if part)
    return f"{iata} ({where})" if where else iata


def routes_to_frame(routes: Iterable[RouteRecord]) -> pd.DataFrame:
    """
    Build the display DataFrame for ``routes``, one row per route.

    Args:
        routes: Records in display order.

    Returns:
        DataFrame with Airline, From, To, Duration and Distance columns.
    """
    rows = [
        {
            "Airline": route.airline_name or "N/A",
            "From": _place(route.departure_iata, route.departure_city, route.departure_country),
            "To": _place(route.arrival_iata, route.arrival_city, route.arrival_country),
            "Duration": format_duration(route.duration_minutes),
            "Distance": format_distance(route.distance_km),
        }
        for route in routes
    ]
    return pd.DataFrame(rows, columns=["Airline", "From", "To", "Duration", "Distance"])


def render_route_table(routes: tuple, key: str = "route_table") -> Optional[RouteRecord]:
    """
    Render one page of routes and return the selected route.

    Args:
        routes: Records on the current page.
        key: Widget key, unique per view.

    Returns:
        The selected RouteRecord, or None if no row is selected.
    """
    if not routes:
        st.info("No routes found matching your criteria.")
        return None

    st.caption("Click a row to see route details")

    event = st.dataframe(
        routes_to_frame(routes),
        column_config={
            "Airline": st.column_config.TextColumn("Airline", width="medium"),
            "From": st.column_config.TextColumn("From", width="medium"),
            "To": st.column_config.TextColumn("To", width="medium"),
            "Duration": st.column_config.TextColumn("Duration", width="small"),
            "Distance": st.column_config.TextColumn("Distance", width="small"),
        },
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


def render_route_detail(route: RouteRecord) -> None:
    """Render the detail panel for one route."""
    st.markdown("---")
    st.subheader(f"Route Details: {route.departure_iata} → {route.arrival_iata}")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Airline", route.airline_name or "N/A")
        if route.airline_iata:
            st.caption(f"IATA: {route.airline_iata}")
    with col2:
        st.metric("Duration", format_duration(route.duration_minutes))
    with col3:
        st.metric("Distance", format_distance(route.distance_km))

    st.markdown(
        f"**From:** {_place(route.departure_iata, route.departure_city, route.departure_country)}  \n"
        f"**To:** {_place(route.arrival_iata, route.arrival_city, route.arrival_country)}"
    )
