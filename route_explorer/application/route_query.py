"""
Route query use case.

Runs a FilterState against the listing API in the right discipline:

- direct mode: one call, server-delegated pagination;
- aggregate mode: DirectionalAggregator, client-side filters, then
  client-materialized pagination.

Listing failures are converted to an UNAVAILABLE FetchResult here and
never raised to the view.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from route_explorer.application.outcome import QueryOutcome
from route_explorer.config import ExplorerConfig, QueryConfig
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.ports.listing_provider import RouteListingProvider
from route_explorer.schemas.filters import DurationRange, FilterState, QueryMode
from route_explorer.schemas.results import FetchResult
from route_explorer.services.aggregator import (
    ROUTES_UNAVAILABLE_MESSAGE,
    DirectionalAggregator,
)
from route_explorer.services.client_filters import apply_client_filters
from route_explorer.services.pagination import (
    MaterializedPagination,
    ServerPagination,
    initial_pagination,
)

logger = logging.getLogger(__name__)


class RouteQueryEngine:
    """
    Executes route queries and page changes.

    Example:
        engine = RouteQueryEngine(HttpListingClient())
        outcome = await engine.run(decode(params))
        outcome = await engine.go_to_page(outcome, 2)
    """

    def __init__(
        self,
        provider: RouteListingProvider,
        config: QueryConfig = ExplorerConfig.query,
    ) -> None:
        self._provider = provider
        self._config = config
        self._aggregator = DirectionalAggregator(provider, page_cap=config.aggregate_page_cap)

    @property
    def aggregator(self) -> DirectionalAggregator:
        return self._aggregator

    def effective_duration_range(self, filters: FilterState) -> DurationRange:
        """The user's range, or the full slider range when untouched."""
        if filters.duration_range is not None:
            return filters.duration_range
        return (self._config.min_duration, self._config.max_route_duration)

    def direct_params(self, filters: FilterState, pagination: ServerPagination) -> Dict[str, Any]:
        """Listing parameters for a direct-mode call."""
        low, high = self.effective_duration_range(filters)
        return {
            **filters.direct_params(),
            "min_duration": low,
            "max_duration": high,
            **pagination.to_params(),
        }

    async def run(self, filters: FilterState) -> QueryOutcome:
        """
        Run ``filters`` from the first page.

        Every run starts fresh, including a resubmission of unchanged
        filters; only ``go_to_page`` keeps a position.

        Returns:
            QueryOutcome; ``pagination`` is None if the query failed.
        """
        page_size = self._config.page_limit
        if filters.mode is QueryMode.AGGREGATE:
            return await self._run_aggregate(filters, page_size)
        return await self._run_direct(filters, initial_pagination(filters.mode, page_size))

    async def go_to_page(self, outcome: QueryOutcome, page: int) -> QueryOutcome:
        """
        Move ``outcome`` to a one-based ``page`` (clamped).

        Client-materialized results are re-sliced without a network call;
        server-paginated results re-issue the same call at the new offset.
        """
        pagination = outcome.pagination
        if isinstance(pagination, MaterializedPagination):
            return outcome.with_pagination(pagination.for_page(page))
        if isinstance(pagination, ServerPagination):
            return await self._run_direct(outcome.filters, pagination.for_page(page))
        return await self.run(outcome.filters)

    async def _run_direct(
        self, filters: FilterState, pagination: ServerPagination
    ) -> QueryOutcome:
        if pagination.total and pagination.is_beyond_total:
            pagination = pagination.clamped()

        try:
            page = await self._provider.list_routes(self.direct_params(filters, pagination))
            pagination = pagination.with_total(page.total)

            if not page.routes and pagination.offset > 0 and pagination.is_beyond_total:
                pagination = pagination.clamped()
                logger.info(
                    "Offset past total %d, clamping to offset %d",
                    pagination.total,
                    pagination.offset,
                )
                page = await self._provider.list_routes(
                    self.direct_params(filters, pagination)
                )
                pagination = pagination.with_total(page.total)
        except ListingUnavailableError as e:
            logger.error("Route listing failed: %s", e)
            return QueryOutcome(filters, FetchResult.unavailable(ROUTES_UNAVAILABLE_MESSAGE))

        result = FetchResult.success(
            page.routes, total=page.total, quarantined=page.quarantined
        )
        return QueryOutcome(filters, result, pagination)

    async def _run_aggregate(self, filters: FilterState, page_size: int) -> QueryOutcome:
        fetched = await self._aggregator.collect(
            filters.aggregate_key, airline_name=filters.airline_name
        )
        if fetched.is_error:
            return QueryOutcome(filters, fetched)

        routes = apply_client_filters(
            fetched.records,
            airline_name=filters.airline_name,
            duration_range=self.effective_duration_range(filters),
        )
        result = FetchResult.success(
            routes, truncated=fetched.truncated, quarantined=fetched.quarantined
        )
        pagination = MaterializedPagination(items=routes, page=1, page_size=page_size)
        return QueryOutcome(filters, result, pagination)
