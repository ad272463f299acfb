"""
Display formatting helpers shared by the tables and banners.
"""

from typing import Optional

from route_explorer.schemas.filters import AggregateKind, FilterState

__all__ = ["aggregate_banner", "format_distance", "format_duration"]


def format_duration(minutes: Optional[int]) -> str:
    """
    Format minutes as a human-readable duration.

    Examples:
        >>> format_duration(125)
        '2h 5m'
        >>> format_duration(45)
        '45m'
    """
    if minutes is None:
        return "-"
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_distance(km: Optional[float]) -> str:
    """
    Format a distance in kilometres with thousands separators.

    Examples:
        >>> format_distance(1234.4)
        '1,234 km'
    """
    if km is None:
        return "-"
    return f"{round(km):,} km"


def aggregate_banner(filters: FilterState) -> Optional[str]:
    """Message shown while an aggregate (either-endpoint) query is active."""
    key = filters.aggregate_key
    if key is None:
        return None
    if key.kind is AggregateKind.AIRPORT:
        return f"Showing all routes for airport: {key.value} (as origin or destination)"
    return f"Showing all routes for country: {key.value} (as origin or destination)"
