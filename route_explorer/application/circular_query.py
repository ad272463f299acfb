"""
Circular route query use case.

Requires an airline; forwards the remaining filters to the listing API,
re-applies the duration bounds client-side, and pages the result locally
(fetch-all) or as a single page (limited).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from route_explorer.application.outcome import QueryOutcome
from route_explorer.config import ExplorerConfig, QueryConfig
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.ports.listing_provider import RouteListingProvider
from route_explorer.schemas.filters import CircularFilterState
from route_explorer.schemas.results import FetchResult
from route_explorer.services.client_filters import filter_by_duration
from route_explorer.services.pagination import MaterializedPagination

logger = logging.getLogger(__name__)

AIRLINE_REQUIRED_MESSAGE = "Airline selection is required"
CIRCULAR_UNAVAILABLE_MESSAGE = "Failed to load circular routes"


class CircularRouteQueryEngine:
    """Executes circular-route queries."""

    def __init__(
        self,
        provider: RouteListingProvider,
        config: QueryConfig = ExplorerConfig.query,
    ) -> None:
        self._provider = provider
        self._config = config

    def build_params(self, filters: CircularFilterState) -> Dict[str, Any]:
        """
        Listing parameters for ``filters``.

        ``airline_id`` wins over ``airline_name``. Duration bounds are sent
        only when they narrow the default range.
        """
        params: Dict[str, Any] = {}
        if filters.airline_id is not None:
            params["airline_id"] = filters.airline_id
        else:
            params["airline_name"] = filters.airline_name

        if filters.start_airport:
            params["start_airport"] = filters.start_airport
        if filters.contains_airport:
            params["contains_airport"] = filters.contains_airport
        if filters.pattern_type and filters.pattern_type != "both":
            params["pattern_type"] = filters.pattern_type

        if filters.duration_range is not None:
            low, high = filters.duration_range
            if high < self._config.max_circular_duration:
                params["max_duration"] = high
            if low > self._config.min_duration:
                params["min_duration"] = low

        if filters.fetch_all:
            params["all"] = True
        else:
            params["limit"] = filters.limit
        return params

    async def run(
        self, filters: CircularFilterState, page_size: Optional[int] = None
    ) -> QueryOutcome:
        """
        Run ``filters``.

        Args:
            filters: Circular-route filter snapshot.
            page_size: Page size for fetch-all results; defaults to config.

        Returns:
            QueryOutcome. INVALID (no request sent) if no airline is selected.
        """
        if not filters.has_airline:
            return QueryOutcome(filters, FetchResult.invalid(AIRLINE_REQUIRED_MESSAGE))

        try:
            batch = await self._provider.list_circular_routes(self.build_params(filters))
        except ListingUnavailableError as e:
            logger.error("Circular route listing failed: %s", e)
            message = CIRCULAR_UNAVAILABLE_MESSAGE
            if isinstance(e.payload, dict) and e.payload.get("error"):
                message = str(e.payload["error"])
            return QueryOutcome(filters, FetchResult.unavailable(message))

        routes = filter_by_duration(batch.records, filters.duration_range)
        result = FetchResult.success(routes, quarantined=len(batch.quarantined))

        if filters.fetch_all:
            size = page_size or self._config.circular_page_size
        else:
            size = max(filters.limit, 1)
        pagination = MaterializedPagination(items=routes, page=1, page_size=size)
        return QueryOutcome(filters, result, pagination)
