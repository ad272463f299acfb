"""
Schema definitions for Route Explorer.

Pydantic records validated at the ingestion boundary, plus the
immutable filter and result types used by the query layer.
"""

from .filters import (
    DEFAULT_CIRCULAR_FILTERS,
    DEFAULT_FILTERS,
    PATTERN_TYPE_CHOICES,
    AggregateKey,
    AggregateKind,
    CircularFilterState,
    DurationRange,
    FilterState,
    QueryMode,
)
from .parsing import ParsedBatch, parse_records
from .reference import AirlineRecord, AirportRecord, CountryRecord
from .results import FetchResult, QueryStatus
from .route import CircularRouteRecord, PatternType, RouteRecord, Segment
from .schedule import HaulPreferences, HaulWeighting, OperatingHours, ScheduleConfig

__all__ = [
    # Records
    "RouteRecord",
    "Segment",
    "CircularRouteRecord",
    "PatternType",
    "AirportRecord",
    "AirlineRecord",
    "CountryRecord",
    # Parsing
    "ParsedBatch",
    "parse_records",
    # Filters
    "AggregateKey",
    "AggregateKind",
    "CircularFilterState",
    "DurationRange",
    "FilterState",
    "QueryMode",
    "DEFAULT_FILTERS",
    "DEFAULT_CIRCULAR_FILTERS",
    "PATTERN_TYPE_CHOICES",
    # Results
    "FetchResult",
    "QueryStatus",
    # Schedule
    "ScheduleConfig",
    "HaulPreferences",
    "HaulWeighting",
    "OperatingHours",
]
