"""
Tests for route record schemas and ingestion-boundary parsing.

Tests cover:
- Alias handling and IATA normalization
- Identity key composition
- Circular route defaults and segment ordering
- Quarantine of malformed payload entries
"""

import pytest
from pydantic import ValidationError

from route_explorer.schemas.parsing import parse_records
from route_explorer.schemas.route import CircularRouteRecord, PatternType, RouteRecord


class TestRouteRecord:
    """Tests for RouteRecord validation."""

    def test_parses_api_payload(self, route_payload: dict):
        """duration_min maps to duration_minutes and IATA codes are uppercased."""
        route = RouteRecord.model_validate(route_payload)

        assert route.duration_minutes == 480
        assert route.departure_iata == "LHR"
        assert route.arrival_city == "New York"

    def test_null_text_fields_become_empty(self, route_payload: dict):
        """Null city/country/airline name become empty strings."""
        route_payload.update(airline_name=None, departure_city=None)

        route = RouteRecord.model_validate(route_payload)

        assert route.airline_name == ""
        assert route.departure_city == ""

    def test_rejects_negative_duration(self, route_payload: dict):
        """Negative durations are invalid."""
        route_payload["duration_min"] = -5

        with pytest.raises(ValidationError):
            RouteRecord.model_validate(route_payload)

    def test_rejects_bad_iata(self, route_payload: dict):
        """IATA codes must be three characters."""
        route_payload["arrival_iata"] = "JFKX"

        with pytest.raises(ValidationError):
            RouteRecord.model_validate(route_payload)

    def test_records_are_immutable(self, route_payload: dict):
        """Parsed records cannot be modified."""
        route = RouteRecord.model_validate(route_payload)

        with pytest.raises(ValidationError):
            route.duration_minutes = 10


class TestIdentityKey:
    """Tests for the composite identity key."""

    def test_same_route_id_different_airlines_are_distinct(self, make_route):
        """route_id alone does not identify a record."""
        first = make_route(1, airline_id=10)
        second = make_route(1, airline_id=20)

        assert first.identity_key != second.identity_key

    def test_falls_back_to_airline_name(self, make_route):
        """Without an airline id, the airline name is part of the key."""
        route = make_route(7, airline_id=None, airline_name="Lufthansa")

        assert route.identity_key == (7, "Lufthansa")


class TestCircularRouteRecord:
    """Tests for CircularRouteRecord."""

    def test_route_pattern_defaults_to_airports(self):
        """Missing route_pattern is built from the airport sequence."""
        record = CircularRouteRecord.model_validate(
            {
                "pattern_type": "Triangle",
                "start_airport": "lhr",
                "airports": ["LHR", "CDG", "AMS", "LHR"],
                "total_duration_min": 300,
            }
        )

        assert record.pattern_type is PatternType.TRIANGLE
        assert record.start_airport == "LHR"
        assert record.route_pattern == "LHR → CDG → AMS → LHR"
        assert record.duration_minutes == 300

    def test_segments_are_ordered(self):
        """ordered_segments sorts by segment_order."""
        record = CircularRouteRecord.model_validate(
            {
                "pattern_type": "arrow",
                "start_airport": "LHR",
                "airports": ["LHR", "CDG", "LHR"],
                "total_duration_min": 140,
                "segments": [
                    {"segment_order": 2, "departure_iata": "CDG", "arrival_iata": "LHR", "duration_min": 70},
                    {"segment_order": 1, "departure_iata": "LHR", "arrival_iata": "CDG", "duration_min": 70},
                ],
            }
        )

        assert [s.segment_order for s in record.ordered_segments] == [1, 2]

    def test_unknown_pattern_type_rejected(self):
        """Only triangle and arrow are valid patterns."""
        with pytest.raises(ValidationError):
            CircularRouteRecord.model_validate(
                {"pattern_type": "square", "start_airport": "LHR", "total_duration_min": 1}
            )


class TestParseRecords:
    """Tests for quarantine during parsing."""

    def test_malformed_entries_are_quarantined(self, route_payload: dict):
        """Invalid entries are set aside; valid ones keep their order."""
        bad = {**route_payload, "route_id": "not-a-number"}
        second = {**route_payload, "route_id": 2}

        batch = parse_records(RouteRecord, [route_payload, bad, second])

        assert [r.route_id for r in batch.records] == [1, 2]
        assert batch.quarantined == (bad,)

    def test_none_payload_gives_empty_batch(self):
        """A missing list parses to nothing."""
        batch = parse_records(RouteRecord, None)

        assert batch.records == ()
        assert batch.quarantined == ()
