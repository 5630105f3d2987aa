"""Fetch state machine guarding when the next page may be requested."""

import logging

from launchfeed.client.state import AggregateState, FetchStatus
from launchfeed.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class FetchStateMachine:
    """Transitions of ``AggregateState.fetch_status``.

    ::

        Idle/Exhausted/Error --filter change--> LoadingInitial
        Idle --scroll (has_more)--> LoadingMore
        LoadingInitial/LoadingMore --success--> Idle | Exhausted
        LoadingInitial/LoadingMore --failure--> Error

    While loading, scroll triggers are ignored. ``Error`` is left only by a
    filter change; there is no automatic retry. A filter change while a load
    is in flight also re-enters ``LoadingInitial``; the caller drops the
    in-flight response as stale.
    """

    def __init__(self, state: AggregateState) -> None:
        self._state = state

    @property
    def status(self) -> FetchStatus:
        return self._state.fetch_status

    def filter_changed(self) -> None:
        """Enter ``LoadingInitial`` for a fresh first page."""
        self._move(FetchStatus.LOADING_INITIAL)

    def request_more(self) -> bool:
        """Handle a scroll trigger.

        Returns:
            True if the machine entered ``LoadingMore`` and the caller should
            fetch the next page; False if the trigger was ignored.
        """
        if self._state.fetch_status is not FetchStatus.IDLE or not self._state.has_more:
            return False
        self._move(FetchStatus.LOADING_MORE)
        return True

    def succeeded(self, has_more: bool) -> None:
        """Finish a load successfully.

        Raises:
            InvalidTransitionError: If no load is in progress.
        """
        self._require_loading("success")
        self._move(FetchStatus.IDLE if has_more else FetchStatus.EXHAUSTED)

    def failed(self) -> None:
        """Finish a load with an error.

        Raises:
            InvalidTransitionError: If no load is in progress.
        """
        self._require_loading("failure")
        self._move(FetchStatus.ERROR)

    def _require_loading(self, event: str) -> None:
        if not self._state.fetch_status.is_loading:
            raise InvalidTransitionError(
                f"Cannot apply {event} in state {self._state.fetch_status.value}"
            )

    def _move(self, target: FetchStatus) -> None:
        logger.debug("Fetch status %s -> %s", self._state.fetch_status.value, target.value)
        self._state.fetch_status = target
