"""
Countries view: country list with links to their routes.
"""

import logging

import pandas as pd
import streamlit as st

from route_explorer.dashboard.navigation import open_aggregate_routes
from route_explorer.dashboard.runtime import load_countries
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.schemas.filters import AggregateKey, AggregateKind

logger = logging.getLogger(__name__)


def render_countries_view() -> None:
    """Render the country list."""
    st.header("Countries")

    try:
        countries = load_countries()
    except ListingUnavailableError as e:
        logger.error("Country list unavailable: %s", e)
        st.error("Failed to load countries")
        return

    if not countries:
        st.info("No countries found.")
        return

    df = pd.DataFrame(
        [
            {
                "Country": country.country,
                "Code": country.country_code or "",
                "Continent": country.continent or "",
            }
            for country in countries
        ]
    )
    event = st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key="countries_table",
    )

    if event.selection and event.selection.rows:
        country = countries[event.selection.rows[0]]
        st.button(
            f"Show routes for {country.country}",
            on_click=open_aggregate_routes,
            args=(AggregateKey(AggregateKind.COUNTRY, country.country),),
        )
