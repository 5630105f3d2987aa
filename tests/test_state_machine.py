"""Tests for FetchStateMachine."""

import pytest

from launchfeed.client import AggregateState, FetchStateMachine, FetchStatus
from launchfeed.errors import InvalidTransitionError


@pytest.fixture
def state() -> AggregateState:
    return AggregateState()


@pytest.fixture
def machine(state: AggregateState) -> FetchStateMachine:
    return FetchStateMachine(state)


def test_starts_idle(machine: FetchStateMachine) -> None:
    assert machine.status is FetchStatus.IDLE


def test_filter_change_enters_loading_initial(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    assert machine.status is FetchStatus.LOADING_INITIAL


def test_initial_success_with_more(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=True)
    assert machine.status is FetchStatus.IDLE


def test_initial_success_without_more(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=False)
    assert machine.status is FetchStatus.EXHAUSTED


def test_initial_failure(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.failed()
    assert machine.status is FetchStatus.ERROR


def test_scroll_from_idle_loads_more(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=True)
    assert machine.request_more() is True
    assert machine.status is FetchStatus.LOADING_MORE

    machine.succeeded(has_more=False)
    assert machine.status is FetchStatus.EXHAUSTED


def test_load_more_failure(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=True)
    machine.request_more()
    machine.failed()
    assert machine.status is FetchStatus.ERROR


def test_scroll_ignored_while_loading(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    assert machine.request_more() is False
    assert machine.status is FetchStatus.LOADING_INITIAL

    machine.succeeded(has_more=True)
    machine.request_more()
    assert machine.request_more() is False
    assert machine.status is FetchStatus.LOADING_MORE


def test_scroll_ignored_without_more(machine: FetchStateMachine, state: AggregateState) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=True)
    state.has_more = False
    assert machine.request_more() is False
    assert machine.status is FetchStatus.IDLE


def test_scroll_ignored_when_exhausted(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=False)
    assert machine.request_more() is False
    assert machine.status is FetchStatus.EXHAUSTED


def test_error_blocks_scroll_until_filter_change(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.failed()
    assert machine.request_more() is False
    assert machine.status is FetchStatus.ERROR

    machine.filter_changed()
    assert machine.status is FetchStatus.LOADING_INITIAL


def test_filter_change_from_exhausted(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=False)
    machine.filter_changed()
    assert machine.status is FetchStatus.LOADING_INITIAL


def test_success_without_load_is_invalid(machine: FetchStateMachine) -> None:
    with pytest.raises(InvalidTransitionError, match="success in state idle"):
        machine.succeeded(has_more=True)


def test_failure_without_load_is_invalid(machine: FetchStateMachine) -> None:
    machine.filter_changed()
    machine.succeeded(has_more=False)
    with pytest.raises(InvalidTransitionError, match="failure in state exhausted"):
        machine.failed()


def test_is_loading() -> None:
    assert FetchStatus.LOADING_INITIAL.is_loading
    assert FetchStatus.LOADING_MORE.is_loading
    assert not FetchStatus.IDLE.is_loading
    assert not FetchStatus.ERROR.is_loading
    assert not FetchStatus.EXHAUSTED.is_loading
