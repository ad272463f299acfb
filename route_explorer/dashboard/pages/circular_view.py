"""
Circular routes view: closed multi-leg patterns flown by one airline.
"""

import logging

import streamlit as st

from route_explorer.application.circular_query import CircularRouteQueryEngine
from route_explorer.config import ExplorerConfig
from route_explorer.dashboard.components.circular_filters import render_circular_filters
from route_explorer.dashboard.components.circular_table import (
    render_circular_detail,
    render_circular_table,
)
from route_explorer.dashboard.components.pagination_controls import (
    render_materialized_pagination,
    render_page_size_select,
)
from route_explorer.dashboard.runtime import get_session, load_airlines, run_in_session
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.services.pagination import MaterializedPagination
from route_explorer.services.query_codec import decode_circular, encode_circular, write_params

logger = logging.getLogger(__name__)

SESSION_KEY = "circular_session"
FILTERS_KEY = "circular_filters"


def render_circular_view() -> None:
    """Render the circular route form, results and segment detail."""
    config = ExplorerConfig.query
    session = get_session(SESSION_KEY)

    if FILTERS_KEY not in st.session_state:
        st.session_state[FILTERS_KEY] = decode_circular(st.query_params.to_dict())
    filters = st.session_state[FILTERS_KEY]

    st.header("Circular Routes")
    st.caption("Triangles return to the start airport; arrows fly out and back.")

    try:
        airlines = load_airlines()
    except ListingUnavailableError as e:
        logger.error("Airline list unavailable: %s", e)
        st.warning("Could not load airlines; enter the airline name instead.")
        airlines = ()

    submitted = render_circular_filters(filters, airlines, loading=session.is_loading)
    if submitted is not None:
        filters = submitted
        st.session_state[FILTERS_KEY] = filters
        write_params(st.query_params, encode_circular(filters))

        previous = session.last_success
        page_size = None
        if filters.fetch_all and previous is not None and previous.filters.fetch_all:
            page_size = previous.pagination.page_size

        with st.spinner("Loading circular routes..."):
            run_in_session(
                session,
                ("run", filters),
                lambda client: CircularRouteQueryEngine(client).run(filters, page_size),
            )

    latest = session.latest
    if latest is not None and latest.is_error:
        st.error(latest.result.error_message)

    outcome = session.displayed
    if outcome is None or not isinstance(outcome.pagination, MaterializedPagination):
        return

    pagination = outcome.pagination
    selected = render_circular_table(outcome.page_records)

    requested = None
    if outcome.filters.fetch_all:
        col_nav, col_size = st.columns([4, 1])
        with col_nav:
            requested = render_materialized_pagination(
                pagination, key="circular_pages", label="circular routes", full_controls=True
            )
        with col_size:
            new_size = render_page_size_select(
                pagination, config.circular_page_size_options, key="circular_page_size"
            )
        if new_size is not None:
            session.apply(outcome.with_pagination(pagination.with_page_size(new_size)))
            st.rerun()
    else:
        first, last = pagination.display_range()
        st.caption(f"Showing {first} - {last} of {pagination.total_items} circular routes")

    if selected is not None:
        render_circular_detail(selected)

    if requested is not None:
        session.apply(outcome.with_pagination(pagination.for_page(requested)))
        st.rerun()
