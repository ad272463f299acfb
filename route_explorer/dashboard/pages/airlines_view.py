"""
Airlines view.
"""

import logging

import pandas as pd
import streamlit as st

from route_explorer.dashboard.runtime import load_airlines
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.services.search_service import search_airlines

logger = logging.getLogger(__name__)


def render_airlines_view() -> None:
    """Render the airline list with a name/IATA search box."""
    st.header("Airlines")
    query = st.text_input("Search", placeholder="Airline name or IATA code")

    try:
        airlines = load_airlines()
    except ListingUnavailableError as e:
        logger.error("Airline list unavailable: %s", e)
        st.error("Failed to load airlines")
        return

    if query.strip():
        airlines = search_airlines(airlines, query)

    if not airlines:
        st.info("No airlines found.")
        return

    df = pd.DataFrame(
        [{"Name": a.name, "IATA": a.iata or "", "ID": a.id} for a in airlines]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)
