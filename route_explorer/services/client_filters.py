"""
Client-side filter stage.

Applies filters to already-fetched records when the listing API could not
apply them for this query shape. Pure, deterministic and order-preserving;
works for both RouteRecord and CircularRouteRecord (via ``duration_minutes``).
"""

from typing import Iterable, Optional

from route_explorer.schemas.filters import DurationRange

__all__ = [
    "apply_client_filters",
    "filter_by_airline_name",
    "filter_by_duration",
]


def filter_by_airline_name(records: Iterable, airline_name: str) -> tuple:
    """
    Keep records whose airline name contains ``airline_name``.

    Matching is a case-insensitive substring test. An empty needle keeps
    every record.
    """
    needle = airline_name.strip().casefold()
    if not needle:
        return tuple(records)
    return tuple(r for r in records if needle in (r.airline_name or "").casefold())


def filter_by_duration(records: Iterable, duration_range: Optional[DurationRange]) -> tuple:
    """
    Keep records with ``duration_minutes`` inside the inclusive range.

    ``min > max`` never reaches this stage; the form rejects it.
    """
    if duration_range is None:
        return tuple(records)
    low, high = duration_range
    return tuple(r for r in records if low <= r.duration_minutes <= high)


def apply_client_filters(
    records: Iterable,
    airline_name: str = "",
    duration_range: Optional[DurationRange] = None,
) -> tuple:
    """
    Apply the airline-name and duration filters in sequence.

    Args:
        records: Fetched records (possibly merged from two calls).
        airline_name: Case-insensitive substring; empty disables.
        duration_range: Inclusive ``(min, max)`` minutes; None disables.

    Returns:
        Matching records in input order.
    """
    filtered = filter_by_airline_name(records, airline_name)
    return filter_by_duration(filtered, duration_range)
