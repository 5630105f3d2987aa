"""Incremental, duplicate-free merge of result pages."""

import logging

from launchfeed.client.state import AggregateState, PageRequest
from launchfeed.data import FilterSet, LaunchRecord, ResultPage

logger = logging.getLogger(__name__)


class ClientAggregator:
    """Folds successive result pages into an ``AggregateState``.

    Pages can overlap when the upstream drifts between requests, so every
    record is checked against the flight numbers already collected before it
    is appended.
    """

    def __init__(self, state: AggregateState) -> None:
        self._state = state

    @property
    def state(self) -> AggregateState:
        return self._state

    def reset(self, filters: FilterSet) -> None:
        """Start over for a new filter set and invalidate in-flight requests."""
        state = self._state
        state.active_filters = filters
        state.collection = []
        state.seen_flight_numbers = set()
        state.cursor = 0
        state.has_more = True
        state.generation += 1
        state.started = True

    def next_request(self, limit: int) -> PageRequest:
        """Describe the request for the page at the current cursor."""
        state = self._state
        return PageRequest(
            generation=state.generation,
            filters=state.active_filters,
            offset=state.cursor,
            limit=limit,
        )

    def is_current(self, request: PageRequest) -> bool:
        """Whether a response to ``request`` may still be merged."""
        state = self._state
        return (
            request.generation == state.generation
            and request.filters == state.active_filters
            and request.offset == state.cursor
        )

    def merge(self, request: PageRequest, page: ResultPage) -> list[LaunchRecord]:
        """Merge a page into the collection.

        The cursor advances by the requested limit, not by the number of
        records merged, so suppressed duplicates do not shift later offsets.

        Returns:
            The records that were appended. Empty if the response is stale.
        """
        if not self.is_current(request):
            logger.debug(
                "Dropping stale page (generation %d, offset %d)", request.generation, request.offset
            )
            return []

        state = self._state
        added: list[LaunchRecord] = []
        for launch in page.launches:
            if launch.flight_number in state.seen_flight_numbers:
                continue
            state.seen_flight_numbers.add(launch.flight_number)
            added.append(launch)

        state.collection.extend(added)
        state.cursor += request.limit
        state.has_more = page.has_more

        skipped = len(page.launches) - len(added)
        if skipped:
            logger.debug("Suppressed %d duplicate launches at offset %d", skipped, request.offset)
        return added
