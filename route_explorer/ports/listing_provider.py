"""
Route Listing Provider port interface.

Defines the abstract contract for the remote listing API (routes,
circular routes, airports, airlines, countries). Implementations parse
responses into typed records before returning them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from route_explorer.schemas.parsing import ParsedBatch


@dataclass(frozen=True)
class RoutePage:
    """
    One page of routes from a single listing call.

    Attributes:
        routes: Parsed RouteRecord instances, in API order.
        total: Total number of matching routes reported by the API.
        quarantined: Number of malformed entries dropped while parsing.
        total_reported: False when the API sent no usable total and
            ``total`` is only the item count of this page.
    """

    routes: tuple
    total: int
    quarantined: int = 0
    total_reported: bool = True


class RouteListingProvider(ABC):
    """
    Abstract interface for the remote listing API.

    All methods are read-only. Any failure (network, timeout, non-2xx,
    undecodable body) is raised as ListingUnavailableError; converting it
    into a FetchResult is the caller's job.

    Implementations:
    - HttpListingClient: httpx client for the HTTP listing API
    - In-memory fakes in tests
    """

    @abstractmethod
    async def list_routes(self, params: Mapping[str, Any]) -> RoutePage:
        """
        Return one page of routes.

        Args:
            params: Listing parameters (departure_iata, arrival_iata,
                departure_country, arrival_country, airline_name,
                min_duration, max_duration, limit, offset).

        Returns:
            RoutePage with the parsed routes and the reported total.

        Raises:
            ListingUnavailableError: If the listing API call fails.
        """
        ...

    @abstractmethod
    async def list_circular_routes(self, params: Mapping[str, Any]) -> ParsedBatch:
        """
        Return circular routes (CircularRouteRecord) for one airline.

        Args:
            params: airline_id or airline_name, plus optional start_airport,
                contains_airport, pattern_type, min_duration, max_duration,
                and either limit or all.

        Raises:
            ListingUnavailableError: If the listing API call fails.
        """
        ...

    @abstractmethod
    async def list_airports(self, params: Optional[Mapping[str, Any]] = None) -> tuple:
        """Return AirportRecord instances, optionally filtered by country/continent."""
        ...

    @abstractmethod
    async def list_airlines(self) -> tuple:
        """Return all AirlineRecord instances."""
        ...

    @abstractmethod
    async def list_countries(self) -> tuple:
        """Return all CountryRecord instances."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this provider."""
        ...
