"""
Pytest fixtures shared by the route explorer tests.

Provides record builders and an in-memory listing provider that records
its calls and can be made slow or failing per direction.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional

import pytest

from route_explorer.exceptions import ListingUnavailableError
from route_explorer.ports.listing_provider import RouteListingProvider, RoutePage
from route_explorer.schemas.parsing import ParsedBatch
from route_explorer.schemas.route import CircularRouteRecord, RouteRecord


class FakeListingProvider(RouteListingProvider):
    """
    In-memory RouteListingProvider.

    Attributes:
        routes: Records served by list_routes, filtered like the real API.
        circular: Records served by list_circular_routes (unfiltered).
        calls: (method, params) for every call, in call order.
        delays: Parameter name -> seconds to sleep when that parameter is sent.
        fail_on: Parameter names whose presence makes list_routes fail.
        cancelled: Params of list_routes calls that were cancelled mid-flight.
        circular_error: Raised by list_circular_routes when set.
    """

    def __init__(self) -> None:
        self.routes: List[RouteRecord] = []
        self.circular: List[CircularRouteRecord] = []
        self.calls: List[tuple] = []
        self.delays: Dict[str, float] = {}
        self.fail_on: set = set()
        self.cancelled: List[dict] = []
        self.circular_error: Optional[ListingUnavailableError] = None
        self.reported_total: Optional[int] = None

    @property
    def name(self) -> str:
        return "fake"

    def route_calls(self) -> List[dict]:
        return [params for method, params in self.calls if method == "routes"]

    @staticmethod
    def _matches(route: RouteRecord, params: Mapping[str, Any]) -> bool:
        for field in ("departure_iata", "arrival_iata", "departure_country", "arrival_country"):
            if params.get(field) and getattr(route, field) != params[field]:
                return False
        airline = params.get("airline_name")
        if airline and airline.casefold() not in route.airline_name.casefold():
            return False
        if "min_duration" in params and route.duration_minutes < int(params["min_duration"]):
            return False
        if "max_duration" in params and route.duration_minutes > int(params["max_duration"]):
            return False
        return True

    async def list_routes(self, params: Mapping[str, Any]) -> RoutePage:
        params = dict(params)
        self.calls.append(("routes", params))

        delay = max((self.delays[k] for k in params if k in self.delays), default=0)
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(params)
            raise

        if any(key in params for key in self.fail_on):
            raise ListingUnavailableError(500, "Listing API returned status code 500")

        matches = [route for route in self.routes if self._matches(route, params)]
        offset = int(params.get("offset", 0))
        limit = int(params.get("limit", len(matches) or 1))
        total = len(matches) if self.reported_total is None else self.reported_total
        return RoutePage(routes=tuple(matches[offset : offset + limit]), total=total)

    async def list_circular_routes(self, params: Mapping[str, Any]) -> ParsedBatch:
        self.calls.append(("circular", dict(params)))
        if self.circular_error is not None:
            raise self.circular_error
        return ParsedBatch(records=tuple(self.circular))

    async def list_airports(self, params: Optional[Mapping[str, Any]] = None) -> tuple:
        self.calls.append(("airports", dict(params or {})))
        return ()

    async def list_airlines(self) -> tuple:
        self.calls.append(("airlines", {}))
        return ()

    async def list_countries(self) -> tuple:
        self.calls.append(("countries", {}))
        return ()


@pytest.fixture
def anyio_backend():
    """Use only asyncio backend (trio not installed)."""
    return "asyncio"


@pytest.fixture
def fake_provider() -> FakeListingProvider:
    """Empty in-memory listing provider."""
    return FakeListingProvider()


@pytest.fixture
def make_route() -> Callable[..., RouteRecord]:
    """Builder for RouteRecord with sensible defaults."""

    def _make(
        route_id: int,
        departure_iata: str = "LHR",
        arrival_iata: str = "JFK",
        airline_id: Optional[int] = 1,
        airline_name: str = "British Airways",
        duration_minutes: int = 420,
        **extra: Any,
    ) -> RouteRecord:
        return RouteRecord(
            route_id=route_id,
            departure_iata=departure_iata,
            arrival_iata=arrival_iata,
            airline_id=airline_id,
            airline_name=airline_name,
            duration_minutes=duration_minutes,
            **extra,
        )

    return _make


@pytest.fixture
def make_circular() -> Callable[..., CircularRouteRecord]:
    """Builder for CircularRouteRecord from a list of airports."""

    def _make(
        airports: List[str],
        total_duration_minutes: int = 600,
        pattern_type: str = "triangle",
        airline_id: int = 1,
    ) -> CircularRouteRecord:
        return CircularRouteRecord(
            airline_id=airline_id,
            pattern_type=pattern_type,
            start_airport=airports[0],
            airports=airports,
            total_duration_minutes=total_duration_minutes,
            stops_count=len(airports) - 1,
        )

    return _make


@pytest.fixture
def route_payload() -> dict:
    """A valid /routes entry as the listing API sends it."""
    return {
        "route_id": 1,
        "airline_id": 10,
        "airline_name": "British Airways",
        "airline_iata": "BA",
        "departure_iata": "lhr",
        "departure_city": "London",
        "departure_country": "United Kingdom",
        "arrival_iata": "JFK",
        "arrival_city": "New York",
        "arrival_country": "United States",
        "duration_min": 480,
        "distance_km": 5540.0,
    }
