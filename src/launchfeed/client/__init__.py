"""Client side: incremental aggregation of paged launch results."""

from launchfeed.client.aggregator import ClientAggregator
from launchfeed.client.debounce import DebounceToken, Debouncer
from launchfeed.client.http import DEFAULT_BASE_URL, LaunchesClient
from launchfeed.client.projection import group_by_year
from launchfeed.client.session import PageFetcher, ScrollSession, is_near_bottom
from launchfeed.client.state import AggregateState, FetchStatus, PageRequest
from launchfeed.client.state_machine import FetchStateMachine

__all__ = [
    "AggregateState",
    "ClientAggregator",
    "DEFAULT_BASE_URL",
    "DebounceToken",
    "Debouncer",
    "FetchStateMachine",
    "FetchStatus",
    "LaunchesClient",
    "PageFetcher",
    "PageRequest",
    "ScrollSession",
    "group_by_year",
    "is_near_bottom",
]
