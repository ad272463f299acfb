"""
Tests for DirectionalAggregator.

Tests cover:
- Merge and de-duplication by identity key
- Both directional calls and their parameters
- All-or-nothing failure handling
- Cancellation of the outstanding call
- Truncation flagging at the page cap
"""

import pytest

from route_explorer.ports.listing_provider import RoutePage
from route_explorer.schemas.filters import AggregateKey, AggregateKind
from route_explorer.schemas.results import QueryStatus
from route_explorer.services.aggregator import (
    ROUTES_UNAVAILABLE_MESSAGE,
    DirectionalAggregator,
    merge_unique,
)

LHR = AggregateKey(AggregateKind.AIRPORT, "LHR")


@pytest.fixture
def lhr_routes(fake_provider, make_route):
    """Routes 1-3 depart LHR; route 4 arrives at LHR."""
    departing = [
        make_route(1, "LHR", "JFK"),
        make_route(2, "LHR", "CDG"),
        make_route(3, "LHR", "DXB"),
    ]
    arriving = [make_route(4, "AMS", "LHR")]
    fake_provider.routes = departing + arriving
    return fake_provider


class TestMergeUnique:
    """Tests for merge_unique()."""

    def test_first_occurrence_wins(self, make_route):
        """Duplicates keep the first record's position and content."""
        a = make_route(1, duration_minutes=100)
        b = make_route(2)
        a_again = make_route(1, duration_minutes=999)

        merged, duplicates = merge_unique([a, b], [a_again])

        assert merged == (a, b)
        assert duplicates == 1

    def test_same_route_id_different_airline_kept(self, make_route):
        """Records differing only in airline are both kept."""
        merged, duplicates = merge_unique(
            [make_route(1, airline_id=1)], [make_route(1, airline_id=2)]
        )

        assert len(merged) == 2
        assert duplicates == 0

    def test_idempotent(self, make_route):
        """Merging a merged set with itself changes nothing."""
        routes = [make_route(i) for i in range(5)]
        merged, _ = merge_unique(routes)

        again, duplicates = merge_unique(merged, merged)

        assert again == merged
        assert duplicates == len(merged)


class TestCollect:
    """Tests for DirectionalAggregator.collect()."""

    @pytest.mark.anyio
    async def test_merges_both_directions(self, fake_provider, make_route):
        """Departure results come first, arrivals follow, duplicates dropped."""
        uk, other = "United Kingdom", "Elsewhere"
        fake_provider.routes = [
            make_route(1, "LHR", "JFK", departure_country=uk, arrival_country=other),
            make_route(2, "LHR", "CDG", departure_country=uk, arrival_country=other),
            make_route(3, "LHR", "MAN", departure_country=uk, arrival_country=uk),
            make_route(4, "AMS", "LHR", departure_country=other, arrival_country=uk),
        ]
        aggregator = DirectionalAggregator(fake_provider)

        result = await aggregator.collect(AggregateKey(AggregateKind.COUNTRY, uk))

        assert result.status is QueryStatus.OK
        assert [r.route_id for r in result.records] == [1, 2, 3, 4]
        assert result.truncated is False

    @pytest.mark.anyio
    async def test_every_record_touches_the_key(self, lhr_routes, make_route):
        """Only routes with LHR at either end are returned."""
        lhr_routes.routes.append(make_route(9, "CDG", "AMS"))
        aggregator = DirectionalAggregator(lhr_routes)

        result = await aggregator.collect(LHR)

        assert all("LHR" in (r.departure_iata, r.arrival_iata) for r in result.records)
        assert 9 not in [r.route_id for r in result.records]

    @pytest.mark.anyio
    async def test_issues_both_directional_calls(self, lhr_routes):
        """One call binds departure, the other arrival, both with the cap."""
        aggregator = DirectionalAggregator(lhr_routes, page_cap=100)

        await aggregator.collect(LHR, airline_name="British")

        calls = lhr_routes.route_calls()
        assert len(calls) == 2
        assert {"departure_iata": "LHR", "limit": 100, "offset": 0, "airline_name": "British"} in calls
        assert {"arrival_iata": "LHR", "limit": 100, "offset": 0, "airline_name": "British"} in calls

    @pytest.mark.anyio
    async def test_country_key_uses_country_params(self, fake_provider):
        """Country keys bind departure_country and arrival_country."""
        aggregator = DirectionalAggregator(fake_provider)

        await aggregator.collect(AggregateKey(AggregateKind.COUNTRY, "Spain"))

        keys = sorted(next(iter(set(c) - {"limit", "offset"})) for c in fake_provider.route_calls())
        assert keys == ["arrival_country", "departure_country"]

    @pytest.mark.anyio
    async def test_empty_result(self, fake_provider):
        """No matches in either direction is EMPTY, not an error."""
        result = await DirectionalAggregator(fake_provider).collect(LHR)

        assert result.status is QueryStatus.EMPTY
        assert result.records == ()

    @pytest.mark.anyio
    async def test_one_failure_fails_whole_query(self, lhr_routes):
        """A failed direction yields UNAVAILABLE with no partial records."""
        lhr_routes.fail_on = {"arrival_iata"}

        result = await DirectionalAggregator(lhr_routes).collect(LHR)

        assert result.status is QueryStatus.UNAVAILABLE
        assert result.records == ()
        assert result.error_message == ROUTES_UNAVAILABLE_MESSAGE

    @pytest.mark.anyio
    async def test_failure_cancels_slower_call(self, lhr_routes):
        """When one call fails, the other call still in flight is cancelled."""
        lhr_routes.fail_on = {"departure_iata"}
        lhr_routes.delays = {"arrival_iata": 5.0}

        result = await DirectionalAggregator(lhr_routes).collect(LHR)

        assert result.status is QueryStatus.UNAVAILABLE
        assert lhr_routes.cancelled == [{"arrival_iata": "LHR", "limit": 100, "offset": 0}]

    @pytest.mark.anyio
    async def test_truncation_flagged_when_total_exceeds_page_cap(self, fake_provider, make_route):
        """Five matching departures against a cap of 3 leave two behind."""
        fake_provider.routes = [make_route(i, "LHR", "JFK") for i in range(5)]

        result = await DirectionalAggregator(fake_provider, page_cap=3).collect(LHR)

        assert result.truncated is True
        assert len(result.records) == 3

    @pytest.mark.anyio
    async def test_total_equal_to_page_cap_is_complete(self, fake_provider, make_route):
        """A direction whose total exactly fills the cap is not truncated."""
        fake_provider.routes = [make_route(i, "LHR", "JFK") for i in range(5)]

        result = await DirectionalAggregator(fake_provider, page_cap=5).collect(LHR)

        assert result.truncated is False
        assert len(result.records) == 5

    @pytest.mark.anyio
    async def test_full_page_without_total_is_truncated(self, fake_provider, make_route):
        """With no reported total, a full page is the only hint."""
        routes = tuple(make_route(i, "LHR", "JFK") for i in range(3))

        async def scripted(params):
            if "departure_iata" in params:
                return RoutePage(routes=routes, total=3, total_reported=False)
            return RoutePage(routes=(), total=0, total_reported=False)

        fake_provider.list_routes = scripted

        result = await DirectionalAggregator(fake_provider, page_cap=3).collect(LHR)

        assert result.truncated is True

    @pytest.mark.anyio
    async def test_truncation_flagged_when_total_exceeds_returned(self, lhr_routes):
        """A reported total larger than what came back marks truncation."""
        lhr_routes.reported_total = 500

        result = await DirectionalAggregator(lhr_routes).collect(LHR)

        assert result.truncated is True

    def test_rejects_non_positive_cap(self, fake_provider):
        with pytest.raises(ValueError):
            DirectionalAggregator(fake_provider, page_cap=0)


class TestSharedRoute:
    """A route returned by both directional calls."""

    @pytest.mark.anyio
    async def test_shared_route_counted_once(self, fake_provider, make_route):
        """[1, 2, 3] departing plus [3, 4] arriving merge to [1, 2, 3, 4]."""
        r1, r2, r3, r4 = (make_route(i) for i in (1, 2, 3, 4))
        pages = {
            "departure_iata": RoutePage(routes=(r1, r2, r3), total=3),
            "arrival_iata": RoutePage(routes=(r3, r4), total=2),
        }

        async def scripted(params):
            return pages["departure_iata" if "departure_iata" in params else "arrival_iata"]

        fake_provider.list_routes = scripted

        result = await DirectionalAggregator(fake_provider).collect(LHR)

        assert [r.route_id for r in result.records] == [1, 2, 3, 4]
        assert result.total == 4
