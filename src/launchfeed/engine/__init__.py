"""Query/aggregation engine over launch snapshots."""

from launchfeed.engine.filters import (
    filter_launches,
    matches,
    matches_search,
    matches_status,
    matches_year,
)
from launchfeed.engine.normalize import deduplicate_launches
from launchfeed.engine.paginate import paginate
from launchfeed.engine.query import QueryEngine
from launchfeed.engine.sorting import sort_key, sort_launches

__all__ = [
    "QueryEngine",
    "deduplicate_launches",
    "filter_launches",
    "matches",
    "matches_search",
    "matches_status",
    "matches_year",
    "paginate",
    "sort_key",
    "sort_launches",
]
