"""
Routes view: direct and either-endpoint route search.

Filter state lives in the URL query parameters. On first render the view
decodes them; with no parameters it loads the unfiltered first page,
with parameters it only pre-fills the form unless ``auto_apply`` asks
for an immediate query.
"""

import logging

import streamlit as st

from route_explorer.application.route_query import RouteQueryEngine
from route_explorer.dashboard.components.pagination_controls import (
    render_materialized_pagination,
    render_server_pagination,
)
from route_explorer.dashboard.components.route_filters import render_route_filters
from route_explorer.dashboard.components.route_table import (
    render_route_detail,
    render_route_table,
)
from route_explorer.dashboard.runtime import get_session, run_in_session
from route_explorer.schemas.filters import DEFAULT_FILTERS, FilterState
from route_explorer.services.pagination import MaterializedPagination
from route_explorer.services.query_codec import (
    AUTO_APPLY_KEY,
    consume_auto_apply,
    decode,
    encode,
    write_params,
)

logger = logging.getLogger(__name__)

SESSION_KEY = "route_session"
FILTERS_KEY = "route_filters"


def _initial_filters() -> tuple:
    """(filters, run_now) decoded from the URL on first render."""
    params = st.query_params.to_dict()
    has_filters = any(key != AUTO_APPLY_KEY for key in params)
    auto_apply = consume_auto_apply(st.query_params)
    return decode(params), auto_apply or not has_filters


def _run_query(filters: FilterState) -> None:
    session = get_session(SESSION_KEY)
    with st.spinner("Loading routes..."):
        run_in_session(
            session,
            ("run", filters),
            lambda client: RouteQueryEngine(client).run(filters),
        )


def _go_to_page(page: int) -> None:
    session = get_session(SESSION_KEY)
    outcome = session.displayed
    if outcome is None or outcome.pagination is None:
        return

    if isinstance(outcome.pagination, MaterializedPagination):
        session.apply(outcome.with_pagination(outcome.pagination.for_page(page)))
        return

    with st.spinner("Loading routes..."):
        run_in_session(
            session,
            ("page", outcome.filters, page),
            lambda client: RouteQueryEngine(client).go_to_page(outcome, page),
        )


def render_routes_view() -> None:
    """Render the route search form, results table and pagination."""
    session = get_session(SESSION_KEY)
    run_now = False

    if FILTERS_KEY not in st.session_state:
        st.session_state[FILTERS_KEY], run_now = _initial_filters()

    filters = st.session_state[FILTERS_KEY]

    st.header("Flight Routes")

    action = render_route_filters(filters, loading=session.is_loading)
    if action.cleared:
        filters = DEFAULT_FILTERS
        write_params(st.query_params, {})
        run_now = True
    elif action.submitted is not None:
        filters = action.submitted
        write_params(st.query_params, encode(filters))
        run_now = True
    st.session_state[FILTERS_KEY] = filters

    if run_now:
        _run_query(filters)

    latest = session.latest
    if latest is not None and latest.is_error:
        st.error(latest.result.error_message)

    outcome = session.displayed
    if outcome is None:
        return

    if outcome.result.truncated:
        st.warning(
            "Some routes may be missing: the listing returned its maximum "
            "page for one direction."
        )

    records = outcome.page_records
    selected = render_route_table(records)

    pagination = outcome.pagination
    requested = None
    if isinstance(pagination, MaterializedPagination):
        requested = render_materialized_pagination(pagination, key="routes_pages")
    elif pagination is not None:
        requested = render_server_pagination(pagination, len(records), key="routes_pages")

    if selected is not None:
        render_route_detail(selected)

    if requested is not None:
        logger.debug("Routes view: moving to page %d", requested)
        _go_to_page(requested)
        st.rerun()
