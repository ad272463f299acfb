"""
Filter state types.

Immutable snapshots of the route and circular-route search forms. A
FilterState is threaded explicitly through the query layer; the URL is
only one serialization target for it (see services.query_codec).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

DurationRange = Tuple[int, int]


class QueryMode(Enum):
    """How a route query is delegated to the listing API."""

    DIRECT = "direct"
    """Departure/arrival/country filters forwarded whole to one call."""

    AGGREGATE = "aggregate"
    """One airport or country matched as either endpoint (two calls merged)."""


class AggregateKind(Enum):
    """Kind of value an aggregate query matches against both endpoints."""

    AIRPORT = "airport"
    COUNTRY = "country"


@dataclass(frozen=True)
class AggregateKey:
    """
    Aggregate-mode key: an airport IATA code or a country name.

    Attributes:
        kind: Whether ``value`` is an airport code or a country name.
        value: The airport IATA code or the country name.
    """

    kind: AggregateKind
    value: str

    @property
    def departure_param(self) -> str:
        """Listing API parameter binding the key to the departure role."""
        if self.kind is AggregateKind.AIRPORT:
            return "departure_iata"
        return "departure_country"

    @property
    def arrival_param(self) -> str:
        """Listing API parameter binding the key to the arrival role."""
        if self.kind is AggregateKind.AIRPORT:
            return "arrival_iata"
        return "arrival_country"

    @property
    def url_param(self) -> str:
        """Reserved query-string key carrying this aggregate key."""
        if self.kind is AggregateKind.AIRPORT:
            return "airport_iata"
        return "country"


@dataclass(frozen=True)
class FilterState:
    """
    Snapshot of the route search form.

    In aggregate mode the direct endpoint fields are empty and
    ``aggregate_key`` is set; in direct mode ``aggregate_key`` is None.
    ``duration_range`` is None until the user has touched the range control.
    """

    aggregate_key: Optional[AggregateKey] = None
    departure_iata: str = ""
    arrival_iata: str = ""
    departure_country: str = ""
    arrival_country: str = ""
    airline_name: str = ""
    duration_range: Optional[DurationRange] = None

    @property
    def mode(self) -> QueryMode:
        if self.aggregate_key is not None:
            return QueryMode.AGGREGATE
        return QueryMode.DIRECT

    def direct_params(self) -> dict:
        """Non-empty direct-mode fields as listing API parameters."""
        params = {
            "airline_name": self.airline_name,
            "departure_iata": self.departure_iata,
            "arrival_iata": self.arrival_iata,
            "departure_country": self.departure_country,
            "arrival_country": self.arrival_country,
        }
        return {key: value for key, value in params.items() if value}


@dataclass(frozen=True)
class CircularFilterState:
    """
    Snapshot of the circular-route search form.

    ``pattern_type`` is ``"both"``, ``"triangle"`` or ``"arrow"``.
    When ``fetch_all`` is set ``limit`` is ignored and the whole result
    set is paged client-side.
    """

    airline_id: Optional[int] = None
    airline_name: str = ""
    start_airport: str = ""
    contains_airport: str = ""
    pattern_type: str = "both"
    duration_range: Optional[DurationRange] = None
    limit: int = 20
    fetch_all: bool = False

    @property
    def has_airline(self) -> bool:
        return self.airline_id is not None or bool(self.airline_name)


PATTERN_TYPE_CHOICES = ("both", "triangle", "arrow")

DEFAULT_FILTERS = FilterState()
DEFAULT_CIRCULAR_FILTERS = CircularFilterState()

__all__ = [
    "AggregateKey",
    "AggregateKind",
    "CircularFilterState",
    "DEFAULT_CIRCULAR_FILTERS",
    "DEFAULT_FILTERS",
    "DurationRange",
    "FilterState",
    "PATTERN_TYPE_CHOICES",
    "QueryMode",
]
