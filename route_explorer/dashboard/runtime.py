"""
Bridges Streamlit's synchronous reruns to the async query layer.

Each rerun runs its coroutine on a fresh event loop with a fresh HTTP
client, so no client outlives the loop it was created on.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable

import streamlit as st

from route_explorer.adapters.http_listing_client import HttpListingClient
from route_explorer.application.session import QuerySession
from route_explorer.ports.listing_provider import RouteListingProvider

logger = logging.getLogger(__name__)

__all__ = [
    "get_session",
    "load_airlines",
    "load_airports",
    "load_countries",
    "run_in_session",
    "run_listing",
]


def run_listing(operation: Callable[[RouteListingProvider], Awaitable[Any]]) -> Any:
    """
    Run ``operation`` against a short-lived listing client.

    Args:
        operation: Coroutine function receiving the listing provider.

    Returns:
        Whatever ``operation`` returns.
    """

    async def _run():
        async with HttpListingClient() as client:
            return await operation(client)

    return asyncio.run(_run())


@st.cache_data(ttl=3600, show_spinner=False)
def load_airports(country: str = "", continent: str = "") -> tuple:
    """
    Load airports with Streamlit caching.

    Failures are not cached; ListingUnavailableError propagates to the page.
    """
    params = {"country": country, "continent": continent}
    logger.debug("Loading airports (country=%r, continent=%r)", country, continent)
    return run_listing(lambda client: client.list_airports(params))


@st.cache_data(ttl=3600, show_spinner=False)
def load_airlines() -> tuple:
    """Load the full airline collection with Streamlit caching."""
    return run_listing(lambda client: client.list_airlines())


@st.cache_data(ttl=3600, show_spinner=False)
def load_countries() -> tuple:
    """Load the full country collection with Streamlit caching."""
    return run_listing(lambda client: client.list_countries())


def get_session(state_key: str) -> QuerySession:
    """The QuerySession stored under ``state_key``, created on first use."""
    if state_key not in st.session_state:
        st.session_state[state_key] = QuerySession(state_key)
    return st.session_state[state_key]


def run_in_session(
    session: QuerySession,
    key: Hashable,
    operation: Callable[[RouteListingProvider], Awaitable[Any]],
) -> Any:
    """Run ``operation`` as the session's request for ``key``."""
    return run_listing(lambda client: session.run(key, lambda: operation(client)))
