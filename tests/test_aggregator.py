"""Tests for ClientAggregator."""

import pytest

from launchfeed.client import AggregateState, ClientAggregator, PageRequest
from launchfeed.data import FilterSet, LaunchRecord, ResultPage


def _launch(flight_number: int, name: str | None = None) -> LaunchRecord:
    return LaunchRecord(
        flight_number=flight_number,
        mission_name=name or f"Mission {flight_number}",
        launch_year="2020",
        launch_date_utc="2020-01-01T00:00:00.000Z",
    )


def _page(*numbers: int, has_more: bool = True, total: int = 100) -> ResultPage:
    return ResultPage(
        launches=tuple(_launch(n) for n in numbers), has_more=has_more, total=total
    )


class TestClientAggregator:
    """Tests for ClientAggregator."""

    @pytest.fixture
    def aggregator(self) -> ClientAggregator:
        aggregator = ClientAggregator(AggregateState())
        aggregator.reset(FilterSet())
        return aggregator

    def test_reset_clears_state(self, aggregator: ClientAggregator) -> None:
        request = aggregator.next_request(3)
        aggregator.merge(request, _page(1, 2, 3))

        aggregator.reset(FilterSet(year="2019"))
        state = aggregator.state
        assert state.collection == []
        assert state.seen_flight_numbers == set()
        assert state.cursor == 0
        assert state.has_more is True
        assert state.active_filters == FilterSet(year="2019")
        assert state.started is True

    def test_reset_bumps_generation(self, aggregator: ClientAggregator) -> None:
        before = aggregator.state.generation
        aggregator.reset(FilterSet())
        assert aggregator.state.generation == before + 1

    def test_next_request(self, aggregator: ClientAggregator) -> None:
        aggregator.reset(FilterSet(search="star"))
        request = aggregator.next_request(10)
        assert request == PageRequest(
            generation=aggregator.state.generation,
            filters=FilterSet(search="star"),
            offset=0,
            limit=10,
        )

    def test_overlapping_pages_merge_without_duplicates(
        self, aggregator: ClientAggregator
    ) -> None:
        aggregator.merge(aggregator.next_request(3), _page(1, 2, 3))
        added = aggregator.merge(aggregator.next_request(3), _page(3, 4, 5, has_more=False))

        numbers = [launch.flight_number for launch in aggregator.state.collection]
        assert numbers == [1, 2, 3, 4, 5]
        assert [launch.flight_number for launch in added] == [4, 5]
        assert aggregator.state.has_more is False

    def test_first_merged_record_is_kept(self, aggregator: ClientAggregator) -> None:
        first = _launch(3, "CRS-3")
        aggregator.merge(aggregator.next_request(1), ResultPage(launches=(first,), has_more=True))
        later = _launch(3, "CRS-3 (drifted)")
        aggregator.merge(aggregator.next_request(1), ResultPage(launches=(later,), has_more=True))
        assert aggregator.state.collection == [first]

    def test_cursor_advances_by_requested_limit(self, aggregator: ClientAggregator) -> None:
        aggregator.merge(aggregator.next_request(3), _page(1, 2, 3))
        assert aggregator.state.cursor == 3

        # Only one new record survives, cursor still moves by the full limit
        aggregator.merge(aggregator.next_request(3), _page(2, 3, 4))
        assert aggregator.state.cursor == 6
        assert len(aggregator.state.collection) == 4

    def test_short_final_page_advances_by_limit(self, aggregator: ClientAggregator) -> None:
        aggregator.merge(aggregator.next_request(10), _page(1, 2, has_more=False))
        assert aggregator.state.cursor == 10

    def test_stale_generation_dropped(self, aggregator: ClientAggregator) -> None:
        stale = aggregator.next_request(3)
        aggregator.reset(FilterSet(year="2019"))
        added = aggregator.merge(stale, _page(1, 2, 3))
        assert added == []
        assert aggregator.state.collection == []
        assert aggregator.state.cursor == 0
        assert aggregator.state.has_more is True

    def test_stale_offset_dropped(self, aggregator: ClientAggregator) -> None:
        request = aggregator.next_request(3)
        aggregator.merge(request, _page(1, 2, 3))
        # Same request delivered twice
        assert aggregator.merge(request, _page(1, 2, 3)) == []
        assert aggregator.state.cursor == 3

    def test_is_current(self, aggregator: ClientAggregator) -> None:
        request = aggregator.next_request(5)
        assert aggregator.is_current(request)
        aggregator.reset(FilterSet())
        assert not aggregator.is_current(request)
