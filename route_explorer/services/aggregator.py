"""
Directional aggregation of route listings.

The listing API only filters one direction at a time, so "this airport
or country as either endpoint" is answered by two concurrent calls
(key bound to departure, key bound to arrival) whose results are merged
and de-duplicated by identity key.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Tuple

from route_explorer.config import ExplorerConfig
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.ports.listing_provider import RouteListingProvider, RoutePage
from route_explorer.schemas.filters import AggregateKey
from route_explorer.schemas.results import FetchResult

logger = logging.getLogger(__name__)

__all__ = ["DirectionalAggregator", "merge_unique", "ROUTES_UNAVAILABLE_MESSAGE"]

ROUTES_UNAVAILABLE_MESSAGE = "Failed to load routes"


def merge_unique(*sources: Iterable) -> Tuple[tuple, int]:
    """
    Concatenate record sequences, keeping the first record per identity key.

    Returns:
        Tuple of (merged records in first-occurrence order, duplicates dropped).

    Examples:
        >>> merge_unique([], [])
        ((), 0)
    """
    seen = set()
    merged: List = []
    duplicates = 0
    for source in sources:
        for record in source:
            key = record.identity_key
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            merged.append(record)
    return tuple(merged), duplicates


class DirectionalAggregator:
    """
    Produces the full (unpaged) candidate set for an aggregate-mode query.

    Each directional call asks for one page of ``page_cap`` routes. If a
    side has more matches than that, the merged set is incomplete; the
    result is then flagged ``truncated`` and a warning is logged.

    Attributes:
        _provider: Listing API port.
        _page_cap: Upper bound on routes fetched per direction.
    """

    def __init__(
        self,
        provider: RouteListingProvider,
        page_cap: int = ExplorerConfig.query.aggregate_page_cap,
    ) -> None:
        if page_cap <= 0:
            raise ValueError("page_cap must be positive")
        self._provider = provider
        self._page_cap = page_cap

    @property
    def page_cap(self) -> int:
        return self._page_cap

    def directional_params(self, key: AggregateKey, airline_name: str = "") -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Parameters for the departure-bound and arrival-bound calls."""
        base: Dict[str, Any] = {"limit": self._page_cap, "offset": 0}
        if airline_name:
            base["airline_name"] = airline_name
        return (
            {key.departure_param: key.value, **base},
            {key.arrival_param: key.value, **base},
        )

    async def collect(self, key: AggregateKey, airline_name: str = "") -> FetchResult:
        """
        Fetch and merge both directions for ``key``.

        Args:
            key: Airport or country to match as either endpoint.
            airline_name: Optional airline filter forwarded to both calls.

        Returns:
            FetchResult with the merged, de-duplicated routes (departure-bound
            results first), or UNAVAILABLE if either call failed.
        """
        departure_params, arrival_params = self.directional_params(key, airline_name)

        try:
            departure_page, arrival_page = await self._fetch_both(
                departure_params, arrival_params
            )
        except ListingUnavailableError as e:
            logger.error(
                "Aggregate query for %s '%s' failed: %s", key.kind.value, key.value, e
            )
            return FetchResult.unavailable(ROUTES_UNAVAILABLE_MESSAGE)

        merged, duplicates = merge_unique(departure_page.routes, arrival_page.routes)
        truncated = self._is_truncated(departure_page) or self._is_truncated(arrival_page)
        if truncated:
            logger.warning(
                "Aggregate query for %s '%s' hit the page cap of %d "
                "(departure total %d, arrival total %d); results are incomplete",
                key.kind.value,
                key.value,
                self._page_cap,
                departure_page.total,
                arrival_page.total,
            )

        logger.debug(
            "Merged %d departure + %d arrival routes for %s, %d duplicates dropped",
            len(departure_page.routes),
            len(arrival_page.routes),
            key.value,
            duplicates,
        )

        return FetchResult.success(
            merged,
            truncated=truncated,
            quarantined=departure_page.quarantined + arrival_page.quarantined,
        )

    def _is_truncated(self, page: RoutePage) -> bool:
        returned = len(page.routes) + page.quarantined
        if not page.total_reported:
            return returned >= self._page_cap
        return page.total > returned

    async def _fetch_both(
        self, departure_params: Dict[str, Any], arrival_params: Dict[str, Any]
    ) -> Tuple[RoutePage, RoutePage]:
        """
        Run both directional calls concurrently, all-or-nothing.

        If one call fails the other is cancelled and the failure is raised.
        If this coroutine is cancelled, both calls are cancelled.
        """
        departure = asyncio.ensure_future(self._provider.list_routes(departure_params))
        arrival = asyncio.ensure_future(self._provider.list_routes(arrival_params))
        tasks = (departure, arrival)

        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            for task in done:
                error = task.exception()
                if error is not None:
                    raise error
            return departure.result(), arrival.result()
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.debug("Cancelled %d outstanding directional call(s)", len(pending))
                await asyncio.gather(*pending, return_exceptions=True)
