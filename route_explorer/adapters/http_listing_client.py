"""
HTTP Listing Client - reads routes and reference data from the listing API.

Implements RouteListingProvider over httpx. Every response is parsed into
typed records at this boundary; malformed entries are quarantined.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from route_explorer.adapters.http_base import JsonHttpClient
from route_explorer.config import ApiConfig, ExplorerConfig
from route_explorer.exceptions import ListingUnavailableError
from route_explorer.ports.listing_provider import RouteListingProvider, RoutePage
from route_explorer.schemas.parsing import ParsedBatch, parse_records
from route_explorer.schemas.reference import AirlineRecord, AirportRecord, CountryRecord
from route_explorer.schemas.route import CircularRouteRecord, RouteRecord

logger = logging.getLogger(__name__)


class HttpListingClient(JsonHttpClient, RouteListingProvider):
    """
    Listing API client.

    Example:
        async with HttpListingClient() as client:
            page = await client.list_routes({"departure_iata": "LHR", "limit": 20})
    """

    _error_cls = ListingUnavailableError
    _service_name = "Listing API"

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ApiConfig] = None,
    ) -> None:
        config = config or ExplorerConfig.api
        super().__init__(base_url or config.listing_url, config)

    @property
    def name(self) -> str:
        return "HTTP listing API"

    async def _get_collection(
        self, path: str, key: str, params: Optional[Mapping[str, Any]] = None
    ) -> tuple:
        data = await self._request_json("GET", path, params=params)
        if not isinstance(data, dict):
            self._raise(200, f"Unexpected response shape from {path}")
        items = data.get(key) or []
        if not isinstance(items, list):
            self._raise(200, f"Expected a list under '{key}' from {path}")
        return data, items

    async def list_routes(self, params: Mapping[str, Any]) -> RoutePage:
        data, items = await self._get_collection("/routes", "routes", params)
        batch = parse_records(RouteRecord, items)

        pagination = data.get("pagination") or {}
        total, total_reported = len(items), False
        if "total" in pagination:
            try:
                total, total_reported = int(pagination["total"]), True
            except (TypeError, ValueError):
                logger.warning("Unusable pagination total %r", pagination["total"])

        return RoutePage(
            routes=batch.records,
            total=max(0, total),
            quarantined=len(batch.quarantined),
            total_reported=total_reported,
        )

    async def list_circular_routes(self, params: Mapping[str, Any]) -> ParsedBatch:
        _, items = await self._get_collection("/circular-routes", "results", params)
        return parse_records(CircularRouteRecord, items)

    async def list_airports(self, params: Optional[Mapping[str, Any]] = None) -> tuple:
        _, items = await self._get_collection("/airports", "airports", params)
        return parse_records(AirportRecord, items).records

    async def list_airlines(self) -> tuple:
        _, items = await self._get_collection("/airlines", "airlines")
        return parse_records(AirlineRecord, items).records

    async def list_countries(self) -> tuple:
        _, items = await self._get_collection("/countries", "countries")
        return parse_records(CountryRecord, items).records
