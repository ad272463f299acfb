"""
Query state codec.

Maps FilterState / CircularFilterState to and from flat query-string
parameters. Works on any ``Mapping[str, str]`` (a plain dict in tests,
``st.query_params`` in the dashboard), so the URL is one serialization
target rather than the source of truth.

Round-trip law: ``decode(encode(state)) == state`` for every state the
forms can produce.
"""

import logging
from typing import Any, Dict, Mapping, MutableMapping, Optional

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

logger = logging.getLogger(__name__)

__all__ = [
    "AUTO_APPLY_KEY",
    "aggregate_link_params",
    "checked_duration_range",
    "consume_auto_apply",
    "decode",
    "decode_circular",
    "encode",
    "encode_circular",
    "write_params",
]

AUTO_APPLY_KEY = "auto_apply"
AIRPORT_KEY = "airport_iata"
COUNTRY_KEY = "country"
MIN_DURATION_KEY = "min_duration"
MAX_DURATION_KEY = "max_duration"


def _text(params: Mapping[str, Any], key: str) -> str:
    value = params.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _int(params: Mapping[str, Any], key: str) -> Optional[int]:
    text = _text(params, key)
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        logger.debug("Ignoring non-integer %s=%r", key, text)
        return None


def _decode_duration_range(
    params: Mapping[str, Any], lower: int, upper: int
) -> Optional[DurationRange]:
    """
    Read the duration pair, clamped to ``[lower, upper]``.

    A missing half falls back to its bound. An inverted pair is dropped.
    """
    raw_min = _int(params, MIN_DURATION_KEY)
    raw_max = _int(params, MAX_DURATION_KEY)
    if raw_min is None and raw_max is None:
        return None

    low = lower if raw_min is None else max(lower, min(raw_min, upper))
    high = upper if raw_max is None else max(lower, min(raw_max, upper))
    if low > high:
        logger.warning("Dropping inverted duration range %d..%d from URL", low, high)
        return None
    return (low, high)


def _encode_duration_range(params: Dict[str, str], duration_range: Optional[DurationRange]) -> None:
    # Both bounds are always written together.
    if duration_range is not None:
        params[MIN_DURATION_KEY] = str(duration_range[0])
        params[MAX_DURATION_KEY] = str(duration_range[1])


def checked_duration_range(
    low: int, high: int, lower: int, upper: int
) -> DurationRange:
    """
    Validate a duration range coming from the form.

    Raises:
        InvalidFilterError: If a bound is outside ``[lower, upper]`` or
            ``low > high``.
    """
    if low < lower or high > upper:
        raise InvalidFilterError(
            "duration_range", f"Duration must be between {lower} and {upper} minutes"
        )
    if low > high:
        raise InvalidFilterError(
            "duration_range", "Minimum duration cannot exceed maximum duration"
        )
    return (low, high)


def decode(params: Mapping[str, Any], config: QueryConfig = ExplorerConfig.query) -> FilterState:
    """
    Build a FilterState from query parameters.

    ``airport_iata`` (or, failing that, ``country``) selects aggregate
    mode; otherwise the direct fields are used. Unknown keys are ignored.
    """
    shared = {
        "airline_name": _text(params, "airline_name"),
        "duration_range": _decode_duration_range(
            params, config.min_duration, config.max_route_duration
        ),
    }

    airport = _text(params, AIRPORT_KEY).upper()
    if airport:
        return FilterState(aggregate_key=AggregateKey(AggregateKind.AIRPORT, airport), **shared)

    country = _text(params, COUNTRY_KEY)
    if country:
        return FilterState(aggregate_key=AggregateKey(AggregateKind.COUNTRY, country), **shared)

    return FilterState(
        departure_iata=_text(params, "departure_iata").upper(),
        arrival_iata=_text(params, "arrival_iata").upper(),
        departure_country=_text(params, "departure_country"),
        arrival_country=_text(params, "arrival_country"),
        **shared,
    )


def encode(state: FilterState) -> Dict[str, str]:
    """Serialize a FilterState, omitting empty and default fields."""
    params: Dict[str, str] = {}
    if state.aggregate_key is not None:
        params[state.aggregate_key.url_param] = state.aggregate_key.value
        if state.airline_name:
            params["airline_name"] = state.airline_name
    else:
        params.update(state.direct_params())

    _encode_duration_range(params, state.duration_range)
    return params


def decode_circular(
    params: Mapping[str, Any], config: QueryConfig = ExplorerConfig.query
) -> CircularFilterState:
    """Build a CircularFilterState from query parameters."""
    pattern_type = _text(params, "pattern_type").lower() or "both"
    if pattern_type not in PATTERN_TYPE_CHOICES:
        logger.debug("Unknown pattern_type %r, using 'both'", pattern_type)
        pattern_type = "both"

    limit = _int(params, "limit")
    if limit is None or limit <= 0:
        limit = config.circular_default_limit

    return CircularFilterState(
        airline_id=_int(params, "airline_id"),
        airline_name=_text(params, "airline_name"),
        start_airport=_text(params, "start_airport").upper(),
        contains_airport=_text(params, "contains_airport").upper(),
        pattern_type=pattern_type,
        duration_range=_decode_duration_range(
            params, config.min_duration, config.max_circular_duration
        ),
        limit=limit,
        fetch_all=_text(params, "all").lower() == "true",
    )


def encode_circular(
    state: CircularFilterState, config: QueryConfig = ExplorerConfig.query
) -> Dict[str, str]:
    """Serialize a CircularFilterState, omitting empty and default fields."""
    params: Dict[str, str] = {}
    if state.airline_id is not None:
        params["airline_id"] = str(state.airline_id)
    for key in ("airline_name", "start_airport", "contains_airport"):
        value = getattr(state, key)
        if value:
            params[key] = value
    if state.pattern_type != "both":
        params["pattern_type"] = state.pattern_type
    _encode_duration_range(params, state.duration_range)
    if state.limit != config.circular_default_limit:
        params["limit"] = str(state.limit)
    if state.fetch_all:
        params["all"] = "true"
    return params


def write_params(
    store: MutableMapping[str, Any], params: Mapping[str, str], auto_apply: bool = False
) -> None:
    """Replace the contents of ``store`` with ``params``."""
    for key in list(store.keys()):
        del store[key]
    for key, value in params.items():
        store[key] = value
    if auto_apply:
        store[AUTO_APPLY_KEY] = "true"


def consume_auto_apply(store: MutableMapping[str, Any]) -> bool:
    """
    Read and strip the one-shot ``auto_apply`` marker.

    Returns True only if the marker was present and set to ``"true"``.
    The key is removed either way, so a reload does not re-trigger.
    """
    if AUTO_APPLY_KEY not in store:
        return False
    value = _text(store, AUTO_APPLY_KEY).lower()
    del store[AUTO_APPLY_KEY]
    return value == "true"


def aggregate_link_params(key: AggregateKey) -> Dict[str, str]:
    """Query parameters that open the routes view in aggregate mode."""
    params = encode(FilterState(aggregate_key=key))
    params[AUTO_APPLY_KEY] = "true"
    return params
