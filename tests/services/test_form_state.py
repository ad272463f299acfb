"""
Tests for form-to-filter conversion.

Tests cover:
- Route form: direct and either-endpoint modes, mixed-mode rejection
- Duration range handling (untouched, set, inverted)
- Circular form validation
- Schedule builder validation messages
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
from route_explorer.services.form_state import (
    circular_filters_from_form,
    route_filters_from_form,
    schedule_config_from_form,
)


@pytest.fixture
def schedule_values() -> dict:
    """A complete, valid schedule builder submission."""
    return {
        "airline_id": 5,
        "airline_name": "British Airways",
        "start_airport": "lhr",
        "days": 3,
        "haul_preferences": {"short": True, "medium": False, "long": True},
        "operating_hours": {"start": "06:00", "end": "23:00"},
        "preferred_countries": "France, Spain,",
    }


class TestRouteFiltersFromForm:
    """Tests for route_filters_from_form()."""

    def test_direct_fields(self):
        filters = route_filters_from_form(
            {"departure_iata": " lhr ", "arrival_country": "Spain"}, FilterState()
        )

        assert filters.mode is QueryMode.DIRECT
        assert filters.departure_iata == "LHR"
        assert filters.arrival_country == "Spain"

    def test_either_airport_selects_aggregate(self):
        filters = route_filters_from_form(
            {"either_airport": "cdg", "airline_name": "Air"}, FilterState()
        )

        assert filters.aggregate_key == AggregateKey(AggregateKind.AIRPORT, "CDG")
        assert filters.airline_name == "Air"

    def test_mixing_modes_rejected(self):
        """Either-endpoint fields cannot be combined with directional ones."""
        with pytest.raises(InvalidFilterError):
            route_filters_from_form(
                {"either_airport": "LHR", "departure_iata": "CDG"}, FilterState()
            )

    def test_airport_and_country_rejected(self):
        with pytest.raises(InvalidFilterError):
            route_filters_from_form(
                {"either_airport": "LHR", "either_country": "France"}, FilterState()
            )

    def test_untouched_full_range_stays_unset(self):
        """Submitting the full slider range leaves the duration unset."""
        filters = route_filters_from_form({"duration_range": (0, 1440)}, FilterState())

        assert filters.duration_range is None

    def test_narrowed_range_is_set(self):
        filters = route_filters_from_form({"duration_range": (60, 300)}, FilterState())

        assert filters.duration_range == (60, 300)

    def test_set_range_stays_set_at_full_span(self):
        """Once set, moving back to the full span keeps both bounds."""
        previous = FilterState(duration_range=(60, 300))

        filters = route_filters_from_form({"duration_range": (0, 1440)}, previous)

        assert filters.duration_range == (0, 1440)

    def test_inverted_range_rejected(self):
        """min > max blocks submission."""
        with pytest.raises(InvalidFilterError):
            route_filters_from_form({"duration_range": (600, 60)}, FilterState())


class TestCircularFiltersFromForm:
    """Tests for circular_filters_from_form()."""

    def test_reads_fields(self):
        filters = circular_filters_from_form(
            {
                "airline_id": 9,
                "airline_name": "KLM",
                "start_airport": "ams",
                "pattern_type": "arrow",
                "limit": 50,
                "fetch_all": True,
            },
            CircularFilterState(),
        )

        assert filters.airline_id == 9
        assert filters.start_airport == "AMS"
        assert filters.pattern_type == "arrow"
        assert filters.limit == 50
        assert filters.fetch_all is True

    def test_unknown_pattern_rejected(self):
        with pytest.raises(InvalidFilterError):
            circular_filters_from_form({"pattern_type": "loop"}, CircularFilterState())

    def test_negative_limit_rejected(self):
        with pytest.raises(InvalidFilterError):
            circular_filters_from_form({"limit": -1}, CircularFilterState())

    def test_duration_bound_is_three_days(self):
        filters = circular_filters_from_form(
            {"duration_range": (0, 4000)}, CircularFilterState()
        )

        assert filters.duration_range == (0, 4000)


class TestScheduleConfigFromForm:
    """Tests for schedule_config_from_form()."""

    def test_valid_submission(self, schedule_values):
        config = schedule_config_from_form(schedule_values)

        assert config.start_airport == "LHR"
        assert config.preferred_countries == ["France", "Spain"]
        assert config.haul_preferences.medium is False

    def test_airline_required(self, schedule_values):
        schedule_values["airline_id"] = None

        with pytest.raises(InvalidFilterError, match="Please select an airline"):
            schedule_config_from_form(schedule_values)

    def test_start_airport_required(self, schedule_values):
        schedule_values["start_airport"] = ""

        with pytest.raises(InvalidFilterError, match="Please select a start airport"):
            schedule_config_from_form(schedule_values)

    @pytest.mark.parametrize("days", [0, 31])
    def test_days_bounds(self, schedule_values, days):
        schedule_values["days"] = days

        with pytest.raises(InvalidFilterError, match="Days must be between 1 and 30"):
            schedule_config_from_form(schedule_values)

    def test_haul_type_required(self, schedule_values):
        schedule_values["haul_preferences"] = {"short": False, "medium": False, "long": False}

        with pytest.raises(InvalidFilterError, match="At least one haul type"):
            schedule_config_from_form(schedule_values)

    def test_bad_operating_hours(self, schedule_values):
        """Pydantic errors surface as InvalidFilterError."""
        schedule_values["operating_hours"] = {"start": "25:00", "end": "23:00"}

        with pytest.raises(InvalidFilterError):
            schedule_config_from_form(schedule_values)
