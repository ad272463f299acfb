"""
Airports view: filterable airport list with links to their routes.
"""

import logging

import pandas as pd
import streamlit as st

from route_explorer.dashboard.navigation import open_aggregate_routes
from route_explorer.dashboard.runtime import load_airports
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.schemas.filters import AggregateKey, AggregateKind
from route_explorer.services.search_service import search_airports

logger = logging.getLogger(__name__)


def render_airports_view() -> None:
    """Render the airport list."""
    st.header("Airports")

    col1, col2, col3 = st.columns(3)
    country = col1.text_input("Country", placeholder="e.g. Germany").strip()
    continent = col2.text_input("Continent", placeholder="e.g. Europe").strip()
    query = col3.text_input("Search", placeholder="Name, city or IATA code")

    try:
        airports = load_airports(country, continent)
    except ListingUnavailableError as e:
        logger.error("Airport list unavailable: %s", e)
        st.error("Failed to load airports")
        return

    if query.strip():
        airports = search_airports(airports, query)

    if not airports:
        st.info("No airports found.")
        return

    df = pd.DataFrame(
        [
            {
                "IATA": airport.iata or "",
                "Name": airport.name,
                "City": airport.city_name,
                "Country": airport.country,
                "Continent": airport.continent,
            }
            for airport in airports
        ]
    )
    st.caption(f"{len(df)} airports. Select a row to browse its routes.")
    event = st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key="airports_table",
    )

    if event.selection and event.selection.rows:
        airport = airports[event.selection.rows[0]]
        if airport.iata:
            st.button(
                f"Show routes for {airport.iata}",
                on_click=open_aggregate_routes,
                args=(AggregateKey(AggregateKind.AIRPORT, airport.iata),),
            )
