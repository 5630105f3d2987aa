"""launchfeed: paginated, deduplicated queries over a launch feed, with an infinite-scroll client."""

from launchfeed.api import create_app
from launchfeed.client import (
    AggregateState,
    ClientAggregator,
    Debouncer,
    FetchStateMachine,
    FetchStatus,
    LaunchesClient,
    PageRequest,
    ScrollSession,
    group_by_year,
)
from launchfeed.config import LaunchFeedConfig, create_app_from_config, load_config
from launchfeed.data import (
    FilterSet,
    LaunchLinks,
    LaunchRecord,
    LaunchStatus,
    QueryParameters,
    ResultPage,
    YearGroup,
)
from launchfeed.engine import (
    QueryEngine,
    deduplicate_launches,
    filter_launches,
    paginate,
    sort_launches,
)
from launchfeed.errors import (
    InvalidQueryError,
    InvalidTransitionError,
    LaunchFeedError,
    MalformedResponse,
    PageFetchError,
    UnsupportedStatusValue,
    UpstreamUnavailable,
)
from launchfeed.run_logger import RunLogger
from launchfeed.source import (
    FileLaunchSource,
    LaunchSource,
    SpaceXLaunchSource,
    StaticLaunchSource,
)

__all__ = [
    # Models
    "FilterSet",
    "LaunchLinks",
    "LaunchRecord",
    "LaunchStatus",
    "QueryParameters",
    "ResultPage",
    "YearGroup",
    # Errors
    "InvalidQueryError",
    "InvalidTransitionError",
    "LaunchFeedError",
    "MalformedResponse",
    "PageFetchError",
    "UnsupportedStatusValue",
    "UpstreamUnavailable",
    # Engine
    "QueryEngine",
    "deduplicate_launches",
    "filter_launches",
    "paginate",
    "sort_launches",
    # Protocols
    "LaunchSource",
    # Sources
    "FileLaunchSource",
    "SpaceXLaunchSource",
    "StaticLaunchSource",
    # Client
    "AggregateState",
    "ClientAggregator",
    "Debouncer",
    "FetchStateMachine",
    "FetchStatus",
    "LaunchesClient",
    "PageRequest",
    "ScrollSession",
    "group_by_year",
    # API
    "create_app",
    # Logging
    "RunLogger",
    # Config
    "LaunchFeedConfig",
    "create_app_from_config",
    "load_config",
]
