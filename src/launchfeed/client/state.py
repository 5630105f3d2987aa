"""Session-scoped client state for incremental launch loading."""

from dataclasses import dataclass, field
from enum import StrEnum

from launchfeed.data import FilterSet, LaunchRecord


class FetchStatus(StrEnum):
    """States of the page-fetch state machine."""

    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    LOADING_MORE = "loading_more"
    ERROR = "error"
    EXHAUSTED = "exhausted"

    @property
    def is_loading(self) -> bool:
        return self in (FetchStatus.LOADING_INITIAL, FetchStatus.LOADING_MORE)


@dataclass
class AggregateState:
    """Everything a scrolling client has accumulated for one filter set.

    Mutated only through ``ClientAggregator`` (collection, cursor, has_more,
    active_filters, generation) and ``FetchStateMachine`` (fetch_status).

    ``generation`` increases on every reset; responses to requests issued
    under an older generation are stale.
    """

    active_filters: FilterSet = field(default_factory=FilterSet)
    collection: list[LaunchRecord] = field(default_factory=list)
    seen_flight_numbers: set[int] = field(default_factory=set)
    cursor: int = 0
    has_more: bool = True
    fetch_status: FetchStatus = FetchStatus.IDLE
    generation: int = 0
    started: bool = False


@dataclass(frozen=True)
class PageRequest:
    """Identity of one in-flight page request."""

    generation: int
    filters: FilterSet
    offset: int
    limit: int
