"""
Search suggestion service.

Simple substring matching over the full airport and airline collections,
in collection order (no ranking). Backs the suggestion boxes in the
circular-route and schedule forms.
"""

from typing import Iterable, List

from route_explorer.config import ExplorerConfig, SearchConfig
from route_explorer.schemas.reference import AirlineRecord, AirportRecord

__all__ = ["search_airlines", "search_airports"]


def _matches(query: str, *fields) -> bool:
    return any(query in field.casefold() for field in fields if field)


def search_airports(
    airports: Iterable[AirportRecord],
    query: str,
    config: SearchConfig = ExplorerConfig.search,
) -> List[AirportRecord]:
    """
    Airports whose name, city, IATA code or country contains ``query``.

    Args:
        airports: Full airport collection.
        query: User input; shorter than ``min_query_length`` returns nothing.
        config: Suggestion limits.

    Returns:
        At most ``max_results`` airports with an IATA code.
    """
    needle = query.strip().casefold()
    if len(needle) < config.min_query_length:
        return []

    results: List[AirportRecord] = []
    for airport in airports:
        if not airport.iata:
            continue
        if _matches(needle, airport.name, airport.city_name, airport.iata, airport.country):
            results.append(airport)
            if len(results) >= config.max_results:
                break
    return results


def search_airlines(
    airlines: Iterable[AirlineRecord],
    query: str,
    config: SearchConfig = ExplorerConfig.search,
) -> List[AirlineRecord]:
    """Airlines whose name or IATA code contains ``query`` (at most ``max_results``)."""
    needle = query.strip().casefold()
    if len(needle) < config.min_query_length:
        return []

    results: List[AirlineRecord] = []
    for airline in airlines:
        if _matches(needle, airline.name, airline.iata):
            results.append(airline)
            if len(results) >= config.max_results:
                break
    return results
