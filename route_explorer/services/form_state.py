"""
Form-layer conversion of raw widget values into filter snapshots.

Validation that must block submission (inverted duration range, mixed
either-endpoint and directional fields, schedule constraints) happens
here, before anything reaches the query layer or the network.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from route_explorer.config import ExplorerConfig, QueryConfig
from route_explorer.exceptions import InvalidFilterError
from route_explorer.schemas.filters import (
    PATTERN_TYPE_CHOICES,
    AggregateKey,
    AggregateKind,
    CircularFilterState,
    DurationRange,
    FilterState,
)
from route_explorer.schemas.schedule import ScheduleConfig
from route_explorer.services.query_codec import checked_duration_range

logger = logging.getLogger(__name__)

__all__ = [
    "circular_filters_from_form",
    "route_filters_from_form",
    "schedule_config_from_form",
]


def _text(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    return "" if value is None else str(value).strip()


def _duration_from_form(
    values: Mapping[str, Any],
    previous: Optional[DurationRange],
    lower: int,
    upper: int,
) -> Optional[DurationRange]:
    """
    Duration range from the slider, or None while it is untouched.

    Once set, a range stays set (both bounds) even if moved back to the
    full span, so the URL never holds half a range.
    """
    raw = values.get("duration_range")
    if raw is None:
        return previous
    low, high = int(raw[0]), int(raw[1])
    duration_range = checked_duration_range(low, high, lower, upper)
    if previous is None and duration_range == (lower, upper):
        return None
    return duration_range


def route_filters_from_form(
    values: Mapping[str, Any],
    previous: FilterState,
    config: QueryConfig = ExplorerConfig.query,
) -> FilterState:
    """
    Build a FilterState from the route search form.

    ``either_airport`` / ``either_country`` select aggregate mode and may
    not be combined with the departure/arrival fields.

    Raises:
        InvalidFilterError: On mixed modes or an invalid duration range.
    """
    airline_name = _text(values, "airline_name")
    duration_range = _duration_from_form(
        values, previous.duration_range, config.min_duration, config.max_route_duration
    )

    either_airport = _text(values, "either_airport").upper()
    either_country = _text(values, "either_country")
    direct = {
        "departure_iata": _text(values, "departure_iata").upper(),
        "arrival_iata": _text(values, "arrival_iata").upper(),
        "departure_country": _text(values, "departure_country"),
        "arrival_country": _text(values, "arrival_country"),
    }

    if either_airport or either_country:
        if any(direct.values()):
            raise InvalidFilterError(
                "either_endpoint",
                "Use either the 'either endpoint' fields or the departure/arrival fields, not both",
            )
        if either_airport and either_country:
            raise InvalidFilterError(
                "either_endpoint", "Choose an airport or a country, not both"
            )
        if either_airport:
            key = AggregateKey(AggregateKind.AIRPORT, either_airport)
        else:
            key = AggregateKey(AggregateKind.COUNTRY, either_country)
        return FilterState(
            aggregate_key=key, airline_name=airline_name, duration_range=duration_range
        )

    return FilterState(airline_name=airline_name, duration_range=duration_range, **direct)


def circular_filters_from_form(
    values: Mapping[str, Any],
    previous: CircularFilterState,
    config: QueryConfig = ExplorerConfig.query,
) -> CircularFilterState:
    """
    Build a CircularFilterState from the circular-route form.

    The airline requirement is not checked here; the query engine reports
    it as an INVALID result so the view can show it like any other error.
    """
    pattern_type = _text(values, "pattern_type") or "both"
    if pattern_type not in PATTERN_TYPE_CHOICES:
        raise InvalidFilterError("pattern_type", f"Unknown pattern type '{pattern_type}'")

    # Set only when the airline was picked from the suggestion list.
    airline_id = values.get("airline_id")

    limit = int(values.get("limit") or config.circular_default_limit)
    if limit <= 0:
        raise InvalidFilterError("limit", "Limit must be positive")

    return CircularFilterState(
        airline_id=int(airline_id) if airline_id is not None else None,
        airline_name=_text(values, "airline_name"),
        start_airport=_text(values, "start_airport").upper(),
        contains_airport=_text(values, "contains_airport").upper(),
        pattern_type=pattern_type,
        duration_range=_duration_from_form(
            values, previous.duration_range, config.min_duration, config.max_circular_duration
        ),
        limit=limit,
        fetch_all=bool(values.get("fetch_all")),
    )


def _split_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def schedule_config_from_form(values: Mapping[str, Any]) -> ScheduleConfig:
    """
    Validate the schedule builder form.

    Raises:
        InvalidFilterError: With the first problem found, phrased for the user.
    """
    form = ExplorerConfig.schedule

    if not values.get("airline_id"):
        raise InvalidFilterError("airline_id", "Please select an airline")
    if not _text(values, "start_airport"):
        raise InvalidFilterError("start_airport", "Please select a start airport")

    days = int(values.get("days") or 0)
    if days < form.min_days or days > form.max_days:
        raise InvalidFilterError(
            "days", f"Days must be between {form.min_days} and {form.max_days}"
        )

    haul_preferences = values.get("haul_preferences") or {}
    if not any(haul_preferences.get(k) for k in ("short", "medium", "long")):
        raise InvalidFilterError("haul_preferences", "At least one haul type must be enabled")

    payload = {
        **values,
        "days": days,
        "preferred_countries": _split_list(values.get("preferred_countries")),
        "preferred_regions": _split_list(values.get("preferred_regions")),
    }
    try:
        return ScheduleConfig.model_validate(payload)
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "config"
        logger.debug("Schedule form rejected: %s", e)
        raise InvalidFilterError(field, f"{field}: {first.get('msg')}") from e
