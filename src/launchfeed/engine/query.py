"""Query engine: normalize, filter, sort and paginate launch snapshots."""

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from launchfeed.data import FilterSet, LaunchRecord, QueryParameters, ResultPage
from launchfeed.engine.filters import filter_launches
from launchfeed.engine.normalize import deduplicate_launches
from launchfeed.engine.paginate import paginate
from launchfeed.engine.sorting import sort_launches
from launchfeed.run_logger import RunLogger, RunRecord
from launchfeed.source.base import LaunchSource

logger = logging.getLogger(__name__)


@dataclass
class _CachedView:
    launches: list[LaunchRecord]
    built_at: float


class QueryEngine:
    """Answers paginated launch queries over an upstream snapshot.

    Flow per query:
    1. Read the upstream snapshot (skipped on a fresh cached view)
    2. Drop duplicate flight numbers, first occurrence wins
    3. Apply the search/year/status filters
    4. Sort by year, then launch date, newest first
    5. Cut the requested page

    Steps 1-4 produce a view that is cached per distinct ``FilterSet`` for
    ``snapshot_ttl_seconds``, so every page of one paging session is cut from
    the same sequence and ``total`` cannot drift mid-scroll. A TTL of 0
    disables caching and re-reads the upstream on every query.
    Concurrent queries for the same filters share a single upstream read.

    Args:
        source: Upstream launch reader.
        snapshot_ttl_seconds: How long a filtered, sorted view stays valid.
        max_cached_views: Maximum number of filter combinations kept.
        run_logger: Optional RunLogger for per-query stage traces.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        source: LaunchSource,
        *,
        snapshot_ttl_seconds: float = 300.0,
        max_cached_views: int = 64,
        run_logger: RunLogger | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = snapshot_ttl_seconds
        self._max_views = max_cached_views
        self._run_logger = run_logger
        self._clock = clock
        self._views: OrderedDict[FilterSet, _CachedView] = OrderedDict()
        self._building: dict[FilterSet, asyncio.Task[list[LaunchRecord]]] = {}

    @property
    def cached_views(self) -> int:
        """Number of filter combinations currently cached."""
        return len(self._views)

    def invalidate(self) -> None:
        """Drop every cached view; the next query re-reads the upstream."""
        self._views.clear()

    async def query(self, params: QueryParameters) -> ResultPage:
        """Run one paginated query.

        Args:
            params: Filters and pagination window.

        Returns:
            The requested page with ``has_more`` and ``total``.

        Raises:
            UpstreamUnavailable: If the upstream snapshot cannot be read.
        """
        record = self._run_logger.start_run("query", params) if self._run_logger else None

        launches, cache_hit = await self._view(params.filters, record)

        t0 = time.monotonic()
        page = paginate(launches, params.offset, params.limit)
        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="paginate",
                component=paginate.__name__,
                input_count=len(launches),
                output_count=len(page.launches),
                duration_seconds=time.monotonic() - t0,
            )
            self._run_logger.finish_run(record, page, cache_hit=cache_hit)

        logger.info(
            "Query %s offset=%d limit=%d -> %d of %d (cache %s)",
            params.filters.as_params() or "{}",
            params.offset,
            params.limit,
            len(page.launches),
            page.total,
            "hit" if cache_hit else "miss",
        )
        return page

    async def available_years(self) -> list[str]:
        """Distinct launch years in the normalized snapshot, newest first.

        Raises:
            UpstreamUnavailable: If the upstream snapshot cannot be read.
        """
        launches, _ = await self._view(FilterSet(), None)
        years: list[str] = []
        for launch in launches:
            if launch.launch_year and launch.launch_year not in years:
                years.append(launch.launch_year)
        return years

    async def _view(
        self, filters: FilterSet, record: RunRecord | None
    ) -> tuple[list[LaunchRecord], bool]:
        """Return the filtered, sorted sequence for ``filters`` and whether it was cached."""
        cached = self._views.get(filters)
        if cached is not None and self._clock() - cached.built_at < self._ttl:
            return (cached.launches, True)

        pending = self._building.get(filters)
        if pending is not None:
            # Another query is already reading the upstream for these filters.
            return (await asyncio.shield(pending), True)

        task = asyncio.ensure_future(self._build(filters, record))
        self._building[filters] = task
        try:
            launches = await task
        finally:
            self._building.pop(filters, None)

        if self._ttl > 0:
            self._views.pop(filters, None)
            self._views[filters] = _CachedView(launches=launches, built_at=self._clock())
            while len(self._views) > self._max_views:
                self._views.popitem(last=False)
        return (launches, False)

    async def _build(self, filters: FilterSet, record: RunRecord | None) -> list[LaunchRecord]:
        t0 = time.monotonic()
        raw = await self._source.fetch_launches()
        self._log_stage(record, "fetch", type(self._source).__name__, 0, len(raw), t0)

        t0 = time.monotonic()
        unique = deduplicate_launches(raw)
        self._log_stage(record, "normalize", deduplicate_launches.__name__, len(raw), len(unique), t0)
        if len(unique) < len(raw):
            logger.debug("Dropped %d duplicate launches", len(raw) - len(unique))

        t0 = time.monotonic()
        matched = filter_launches(unique, filters)
        self._log_stage(record, "filter", filter_launches.__name__, len(unique), len(matched), t0)

        t0 = time.monotonic()
        ordered = sort_launches(matched)
        self._log_stage(record, "sort", sort_launches.__name__, len(matched), len(ordered), t0)
        return ordered

    def _log_stage(
        self,
        record: RunRecord | None,
        stage: str,
        component: str,
        input_count: int,
        output_count: int,
        started: float,
    ) -> None:
        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage=stage,
                component=component,
                input_count=input_count,
                output_count=output_count,
                duration_seconds=time.monotonic() - started,
            )
