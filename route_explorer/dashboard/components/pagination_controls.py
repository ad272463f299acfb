"""
Pagination controls for both pagination disciplines.

Each renderer returns the one-based page the user asked for on this
rerun, or None. Page numbers are clamped by the pagination objects.
"""

from typing import Optional, Sequence

import streamlit as st

from route_explorer.services.pagination import MaterializedPagination, ServerPagination


def render_server_pagination(
    pagination: ServerPagination, shown: int, key: str, label: str = "routes"
) -> Optional[int]:
    """Previous/Next controls for a server-paginated result."""
    first, last = pagination.display_range(shown)
    st.caption(
        f"Showing {first} - {last} of {pagination.total} {label} "
        f"(page {pagination.page} of {pagination.total_pages})"
    )

    col_prev, col_next = st.columns(2)
    with col_prev:
        if st.button("Previous", key=f"{key}_prev", disabled=not pagination.has_previous):
            return pagination.page - 1
    with col_next:
        if st.button("Next", key=f"{key}_next", disabled=not pagination.has_next):
            return pagination.page + 1
    return None


def render_materialized_pagination(
    pagination: MaterializedPagination,
    key: str,
    label: str = "routes",
    full_controls: bool = False,
) -> Optional[int]:
    """
    Controls for a client-materialized result.

    Args:
        pagination: Current position.
        key: Widget key prefix, unique per view.
        label: Noun used in the summary caption.
        full_controls: Also show First/Last and a page number input.
    """
    first, last = pagination.display_range()
    st.caption(
        f"Showing {first} - {last} of {pagination.total_items} {label} "
        f"(page {pagination.page} of {pagination.total_pages})"
    )
    if pagination.total_pages <= 1:
        return None

    if not full_controls:
        col_prev, col_next = st.columns(2)
        with col_prev:
            if st.button("Previous", key=f"{key}_prev", disabled=not pagination.has_previous):
                return pagination.page - 1
        with col_next:
            if st.button("Next", key=f"{key}_next", disabled=not pagination.has_next):
                return pagination.page + 1
        return None

    col_first, col_prev, col_page, col_next, col_last = st.columns([1, 1, 2, 1, 1])
    with col_first:
        if st.button("First", key=f"{key}_first", disabled=not pagination.has_previous):
            return 1
    with col_prev:
        if st.button("Previous", key=f"{key}_prev", disabled=not pagination.has_previous):
            return pagination.page - 1
    with col_page:
        requested = st.number_input(
            "Page",
            min_value=1,
            max_value=pagination.total_pages,
            value=pagination.page,
            step=1,
            key=f"{key}_page_{pagination.page}_{pagination.total_pages}",
            label_visibility="collapsed",
        )
        if int(requested) != pagination.page:
            return int(requested)
    with col_next:
        if st.button("Next", key=f"{key}_next", disabled=not pagination.has_next):
            return pagination.page + 1
    with col_last:
        if st.button("Last", key=f"{key}_last", disabled=not pagination.has_next):
            return pagination.total_pages
    return None


def render_page_size_select(
    pagination: MaterializedPagination, options: Sequence[int], key: str
) -> Optional[int]:
    """Page size selector. Returns the new size if it changed."""
    choices = list(options)
    if pagination.page_size not in choices:
        choices = sorted(set(choices) | {pagination.page_size})
    size = st.selectbox(
        "Results per page",
        choices,
        index=choices.index(pagination.page_size),
        key=key,
    )
    if size != pagination.page_size:
        return int(size)
    return None
