"""
Tests for the query-string codec.

Tests cover:
- Direct and aggregate decoding
- Duration range clamping and rejection
- Round trips through encode/decode
- One-shot auto_apply handling
- Circular-route parameters
"""

import pytest

from route_explorer.exceptions import InvalidFilterError
from route_explorer.schemas.filters import (
    AggregateKey,
    AggregateKind,
    CircularFilterState,
    FilterState,
    QueryMode,
)
from route_explorer.services.query_codec import (
    AUTO_APPLY_KEY,
    aggregate_link_params,
    checked_duration_range,
    consume_auto_apply,
    decode,
    decode_circular,
    encode,
    encode_circular,
    write_params,
)


class TestDecode:
    """Tests for decode()."""

    def test_empty_params_give_default_state(self):
        """No parameters decode to the default, unfiltered state."""
        assert decode({}) == FilterState()

    def test_direct_fields(self):
        """Direct fields are read and IATA codes uppercased."""
        state = decode({"departure_iata": "lhr", "arrival_country": "Spain", "airline_name": "Iberia"})

        assert state.mode is QueryMode.DIRECT
        assert state.departure_iata == "LHR"
        assert state.arrival_country == "Spain"
        assert state.airline_name == "Iberia"

    def test_airport_selects_aggregate_mode(self):
        """airport_iata selects aggregate mode and ignores direct fields."""
        state = decode({"airport_iata": "lhr", "departure_iata": "CDG"})

        assert state.mode is QueryMode.AGGREGATE
        assert state.aggregate_key == AggregateKey(AggregateKind.AIRPORT, "LHR")
        assert state.departure_iata == ""

    def test_airport_wins_over_country(self):
        """When both aggregate keys are present the airport is used."""
        state = decode({"airport_iata": "LHR", "country": "France"})

        assert state.aggregate_key.kind is AggregateKind.AIRPORT

    def test_country_aggregate(self):
        """country alone selects a country aggregate."""
        state = decode({"country": "United Kingdom"})

        assert state.aggregate_key == AggregateKey(AggregateKind.COUNTRY, "United Kingdom")

    def test_unknown_keys_ignored(self):
        """Unrecognised parameters do not affect the state."""
        assert decode({"utm_source": "mail", "auto_apply": "true"}) == FilterState()

    def test_duration_clamped_to_bounds(self):
        """Out-of-range durations are clamped to the slider bounds."""
        state = decode({"min_duration": "-30", "max_duration": "99999"})

        assert state.duration_range == (0, 1440)

    def test_missing_half_falls_back_to_bound(self):
        """A single duration bound pairs with the default for the other."""
        assert decode({"min_duration": "60"}).duration_range == (60, 1440)
        assert decode({"max_duration": "300"}).duration_range == (0, 300)

    def test_inverted_range_dropped(self):
        """min > max is discarded rather than producing an empty query."""
        assert decode({"min_duration": "600", "max_duration": "60"}).duration_range is None

    def test_non_integer_duration_ignored(self):
        """Garbage durations are ignored."""
        assert decode({"min_duration": "abc"}).duration_range is None


class TestEncode:
    """Tests for encode() and round trips."""

    def test_default_state_encodes_to_nothing(self):
        """Empty fields are omitted."""
        assert encode(FilterState()) == {}

    def test_aggregate_encoding(self):
        """Aggregate state writes its reserved key and airline name only."""
        state = FilterState(
            aggregate_key=AggregateKey(AggregateKind.COUNTRY, "Japan"),
            airline_name="ANA",
            duration_range=(60, 600),
        )

        assert encode(state) == {
            "country": "Japan",
            "airline_name": "ANA",
            "min_duration": "60",
            "max_duration": "600",
        }

    @pytest.mark.parametrize(
        "state",
        [
            FilterState(departure_iata="LHR", arrival_iata="JFK"),
            FilterState(departure_country="France", airline_name="Air France", duration_range=(0, 300)),
            FilterState(aggregate_key=AggregateKey(AggregateKind.AIRPORT, "LHR")),
            FilterState(
                aggregate_key=AggregateKey(AggregateKind.COUNTRY, "Italy"),
                duration_range=(120, 1440),
            ),
        ],
    )
    def test_round_trip(self, state: FilterState):
        """decode(encode(state)) reproduces the state."""
        assert decode(encode(state)) == state


class TestAutoApply:
    """Tests for the one-shot auto_apply marker."""

    def test_consumed_once(self):
        """The marker triggers once and is removed from the store."""
        store = {"airport_iata": "LHR", AUTO_APPLY_KEY: "true"}

        assert consume_auto_apply(store) is True
        assert AUTO_APPLY_KEY not in store
        assert consume_auto_apply(store) is False
        assert store == {"airport_iata": "LHR"}

    def test_non_true_value_removed_without_triggering(self):
        """Any other value is stripped but does not trigger."""
        store = {AUTO_APPLY_KEY: "1"}

        assert consume_auto_apply(store) is False
        assert store == {}

    def test_aggregate_link_params(self):
        """Navigation links carry the aggregate key and auto_apply."""
        params = aggregate_link_params(AggregateKey(AggregateKind.AIRPORT, "CDG"))

        assert params == {"airport_iata": "CDG", AUTO_APPLY_KEY: "true"}
        assert decode(params).aggregate_key.value == "CDG"

    def test_write_params_replaces_store(self):
        """write_params clears stale keys before writing."""
        store = {"departure_iata": "LHR", "stale": "1"}

        write_params(store, {"country": "Spain"}, auto_apply=True)

        assert store == {"country": "Spain", AUTO_APPLY_KEY: "true"}


class TestCheckedDurationRange:
    """Tests for form-side duration validation."""

    def test_valid_range(self):
        assert checked_duration_range(0, 1440, 0, 1440) == (0, 1440)

    def test_inverted_range_rejected(self):
        with pytest.raises(InvalidFilterError):
            checked_duration_range(500, 100, 0, 1440)

    def test_out_of_bounds_rejected(self):
        with pytest.raises(InvalidFilterError):
            checked_duration_range(0, 2000, 0, 1440)


class TestCircularCodec:
    """Tests for the circular-route parameters."""

    def test_defaults(self):
        """Empty parameters give the default circular state."""
        assert decode_circular({}) == CircularFilterState()

    def test_decode_fields(self):
        """All circular fields are read and normalised."""
        state = decode_circular(
            {
                "airline_id": "42",
                "start_airport": "lhr",
                "pattern_type": "ARROW",
                "limit": "50",
                "all": "true",
                "max_duration": "2000",
            }
        )

        assert state.airline_id == 42
        assert state.start_airport == "LHR"
        assert state.pattern_type == "arrow"
        assert state.limit == 50
        assert state.fetch_all is True
        assert state.duration_range == (0, 2000)

    def test_invalid_pattern_and_limit_fall_back(self):
        """Unknown pattern and non-positive limit use defaults."""
        state = decode_circular({"pattern_type": "square", "limit": "0"})

        assert state.pattern_type == "both"
        assert state.limit == 20

    def test_encode_omits_defaults(self):
        """Only non-default fields are written."""
        assert encode_circular(CircularFilterState()) == {}

    def test_round_trip(self):
        """decode_circular(encode_circular(state)) reproduces the state."""
        state = CircularFilterState(
            airline_id=7,
            airline_name="KLM",
            contains_airport="AMS",
            pattern_type="triangle",
            duration_range=(60, 3000),
            limit=100,
            fetch_all=True,
        )

        assert decode_circular(encode_circular(state)) == state
