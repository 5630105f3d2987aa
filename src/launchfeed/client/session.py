"""Infinite-scroll session over the launch query endpoint."""

import logging
from dataclasses import replace
from typing import Protocol

from launchfeed.client.aggregator import ClientAggregator
from launchfeed.client.debounce import DEFAULT_DEBOUNCE_SECONDS, DebounceToken, Debouncer
from launchfeed.client.projection import group_by_year
from launchfeed.client.state import AggregateState, FetchStatus, PageRequest
from launchfeed.client.state_machine import FetchStateMachine
from launchfeed.data import FilterSet, LaunchRecord, LaunchStatus, ResultPage, YearGroup
from launchfeed.errors import LaunchFeedError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_SCROLL_THRESHOLD_PX = 100


class PageFetcher(Protocol):
    """Interface for anything that can fetch one result page."""

    async def fetch_page(self, filters: FilterSet, offset: int, limit: int) -> ResultPage:
        """Fetch the page ``[offset, offset + limit)`` for ``filters``.

        Raises:
            LaunchFeedError: If the page cannot be fetched.
        """
        ...


def is_near_bottom(
    scroll_top: float,
    viewport_height: float,
    scroll_height: float,
    threshold: float = DEFAULT_SCROLL_THRESHOLD_PX,
) -> bool:
    """Whether the viewport is within ``threshold`` of the end of the content."""
    return scroll_top + viewport_height >= scroll_height - threshold


class ScrollSession:
    """Client-side driver that assembles a complete, deduplicated launch list.

    The session is the single writer of its ``AggregateState``: filter changes
    reset it, scroll triggers request the next page through the fetch state
    machine, and each response is merged only if it still belongs to the
    current filter generation and cursor.

    Args:
        fetcher: Page source, usually a ``LaunchesClient``.
        page_size: ``limit`` sent with every page request.
        debounce_seconds: Quiet period for search input.
        scroll_threshold_px: Distance from the bottom that triggers a load.
        state: Optional pre-existing state to drive.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        scroll_threshold_px: float = DEFAULT_SCROLL_THRESHOLD_PX,
        state: AggregateState | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._fetcher = fetcher
        self._page_size = page_size
        self._scroll_threshold = scroll_threshold_px
        self._state = state if state is not None else AggregateState()
        self._aggregator = ClientAggregator(self._state)
        self._machine = FetchStateMachine(self._state)
        self._search_debouncer: Debouncer[str] = Debouncer(
            self._apply_search, delay_seconds=debounce_seconds
        )
        self._groups_key: tuple[int, int] | None = None
        self._groups: list[YearGroup] = []

    @property
    def state(self) -> AggregateState:
        return self._state

    @property
    def status(self) -> FetchStatus:
        return self._state.fetch_status

    @property
    def filters(self) -> FilterSet:
        return self._state.active_filters

    @property
    def launches(self) -> tuple[LaunchRecord, ...]:
        return tuple(self._state.collection)

    @property
    def has_more(self) -> bool:
        return self._state.has_more

    @property
    def groups(self) -> list[YearGroup]:
        """Year projection of the collection, rebuilt when the collection changes."""
        key = (self._state.generation, len(self._state.collection))
        if key != self._groups_key:
            self._groups = group_by_year(self._state.collection)
            self._groups_key = key
        return self._groups

    async def start(self) -> None:
        """Load the first page for the current filters."""
        await self._reload(self._state.active_filters)

    def set_search_input(self, text: str) -> DebounceToken:
        """Debounce a search edit; only the last edit in the window is applied."""
        return self._search_debouncer.schedule(text)

    async def set_year(self, year: str | int | None) -> bool:
        """Apply a year filter (empty or None clears it)."""
        year_value = "" if year is None else str(year)
        return await self.apply_filters(replace(self._state.active_filters, year=year_value))

    async def set_status(self, status: str | LaunchStatus | None) -> bool:
        """Apply a status filter (empty or None clears it).

        Raises:
            UnsupportedStatusValue: If the status is not a known value.
        """
        parsed = LaunchStatus.parse(status)
        return await self.apply_filters(replace(self._state.active_filters, status=parsed))

    async def clear_filters(self) -> bool:
        """Drop every filter, including a pending search edit."""
        self._search_debouncer.cancel()
        return await self.apply_filters(FilterSet())

    async def apply_filters(self, filters: FilterSet) -> bool:
        """Reset the collection and load the first page for ``filters``.

        Re-applying the active filters is a no-op, except after an error,
        where it is the way to recover.

        Returns:
            True if a reload happened.
        """
        state = self._state
        if (
            state.started
            and filters == state.active_filters
            and state.fetch_status is not FetchStatus.ERROR
        ):
            return False
        await self._reload(filters)
        return True

    async def load_more(self) -> bool:
        """Scroll trigger: fetch the next page if the state machine allows it.

        Returns:
            True if a page request was issued.
        """
        if not self._state.started:
            # Nothing loaded yet; the first page comes from start() or a filter change.
            return False
        if not self._machine.request_more():
            return False
        await self._fetch(self._aggregator.next_request(self._page_size))
        return True

    async def on_scroll(
        self, scroll_top: float, viewport_height: float, scroll_height: float
    ) -> bool:
        """Handle a scroll event; loads more when close to the bottom."""
        if not is_near_bottom(scroll_top, viewport_height, scroll_height, self._scroll_threshold):
            return False
        return await self.load_more()

    async def wait_idle(self) -> None:
        """Wait for pending debounced search edits to be applied."""
        await self._search_debouncer.wait()

    async def _apply_search(self, text: str) -> None:
        await self.apply_filters(replace(self._state.active_filters, search=text))

    async def _reload(self, filters: FilterSet) -> None:
        self._aggregator.reset(filters)
        self._machine.filter_changed()
        await self._fetch(self._aggregator.next_request(self._page_size))

    async def _fetch(self, request: PageRequest) -> None:
        try:
            page = await self._fetcher.fetch_page(request.filters, request.offset, request.limit)
        except LaunchFeedError as e:
            if not self._aggregator.is_current(request):
                logger.debug("Ignoring failure of stale request at offset %d: %s", request.offset, e)
                return
            logger.warning("Loading launches at offset %d failed: %s", request.offset, e)
            self._machine.failed()
            return

        if not self._aggregator.is_current(request):
            logger.debug(
                "Ignoring stale response (generation %d, offset %d)",
                request.generation,
                request.offset,
            )
            return

        added = self._aggregator.merge(request, page)
        self._machine.succeeded(page.has_more)
        logger.info(
            "Loaded %d launches at offset %d (%d total, has_more=%s)",
            len(added),
            request.offset,
            len(self._state.collection),
            page.has_more,
        )
