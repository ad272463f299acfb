"""
Route record schemas using Pydantic.

Defines the typed records parsed from the listing API. Payloads are
validated once at the ingestion boundary; everything downstream
(merge, filter, paginate) works on these immutable records only.
"""

from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _upper_iata(value: str) -> str:
    return value.strip().upper()


class RouteRecord(BaseModel):
    """
    One directed flight route operated by one airline.

    The listing API reports the duration as ``duration_min``; it is
    exposed here as ``duration_minutes``.
    """

    model_config = _RECORD_CONFIG

    route_id: int = Field(..., ge=0)
    airline_id: Optional[int] = None
    airline_name: str = ""
    airline_iata: Optional[str] = None
    departure_iata: str = Field(..., min_length=3, max_length=3)
    arrival_iata: str = Field(..., min_length=3, max_length=3)
    departure_city: str = ""
    departure_country: str = ""
    arrival_city: str = ""
    arrival_country: str = ""
    duration_minutes: int = Field(..., ge=0, alias="duration_min")
    distance_km: float = Field(0.0, ge=0)

    @field_validator(
        "airline_name",
        "departure_city",
        "departure_country",
        "arrival_city",
        "arrival_country",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("departure_iata", "arrival_iata", mode="before")
    @classmethod
    def _normalize_iata(cls, value):
        return _upper_iata(value) if isinstance(value, str) else value

    @property
    def identity_key(self) -> Tuple[int, Union[int, str]]:
        """
        Key used to decide whether two fetched records are the same route.

        ``route_id`` is not assumed unique across airlines, so the airline
        (by id, falling back to name) is part of the key.
        """
        airline = self.airline_id if self.airline_id is not None else self.airline_name
        return (self.route_id, airline)


class PatternType(str, Enum):
    """Shape of a circular route."""

    TRIANGLE = "triangle"
    ARROW = "arrow"


class Segment(BaseModel):
    """One directed leg of a circular route."""

    model_config = _RECORD_CONFIG

    segment_order: int = Field(..., ge=1)
    route_id: Optional[int] = None
    departure_iata: str = Field(..., min_length=3, max_length=3)
    departure_name: str = ""
    departure_city: str = ""
    departure_country: str = ""
    arrival_iata: str = Field(..., min_length=3, max_length=3)
    arrival_name: str = ""
    arrival_city: str = ""
    arrival_country: str = ""
    distance_km: float = Field(0.0, ge=0)
    duration_minutes: int = Field(..., ge=0, alias="duration_min")

    @field_validator(
        "departure_name",
        "departure_city",
        "departure_country",
        "arrival_name",
        "arrival_city",
        "arrival_country",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("departure_iata", "arrival_iata", mode="before")
    @classmethod
    def _normalize_iata(cls, value):
        return _upper_iata(value) if isinstance(value, str) else value


class CircularRouteRecord(BaseModel):
    """A closed multi-leg pattern flown by one airline."""

    model_config = _RECORD_CONFIG

    airline_id: Optional[int] = None
    pattern_type: PatternType
    route_pattern: str = ""
    start_airport: str = Field(..., min_length=3, max_length=3)
    airports: Tuple[str, ...] = ()
    route_ids: Tuple[int, ...] = ()
    total_distance_km: float = Field(0.0, ge=0)
    total_duration_minutes: int = Field(..., ge=0, alias="total_duration_min")
    stops_count: int = Field(0, ge=0)
    segments: Tuple[Segment, ...] = ()

    @field_validator("pattern_type", mode="before")
    @classmethod
    def _lower_pattern(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("start_airport", mode="before")
    @classmethod
    def _normalize_start(cls, value):
        return _upper_iata(value) if isinstance(value, str) else value

    @model_validator(mode="before")
    @classmethod
    def _default_route_pattern(cls, data):
        if isinstance(data, dict) and not data.get("route_pattern") and data.get("airports"):
            data = {**data, "route_pattern": " → ".join(str(a) for a in data["airports"])}
        return data

    @property
    def duration_minutes(self) -> int:
        """Total duration, so duration filters apply to both record kinds."""
        return self.total_duration_minutes

    @property
    def ordered_segments(self) -> List[Segment]:
        """Segments in traversal order (``segment_order`` ascending)."""
        return sorted(self.segments, key=lambda s: s.segment_order)
