"""Cancellable debounce for bursty client input."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from itertools import count
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DEBOUNCE_SECONDS = 0.5


class DebounceToken:
    """Handle for one scheduled trigger.

    A token is invalidated when a newer trigger is scheduled or the
    debouncer is cancelled before the delay elapses. Once fired, it can no
    longer be cancelled.
    """

    _ids = count(1)

    def __init__(self) -> None:
        self.id = next(self._ids)
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.fired


class Debouncer(Generic[T]):
    """Run ``callback`` with the last value seen in a quiet window.

    Each ``schedule`` call invalidates the previous pending token and starts
    a fresh delay. Callbacks that already fired keep running; only their
    result ordering is the caller's concern.

    Args:
        callback: Coroutine function invoked with the surviving value.
        delay_seconds: Quiet period before firing.
    """

    def __init__(
        self,
        callback: Callable[[T], Awaitable[None]],
        *,
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._callback = callback
        self._delay = delay_seconds
        self._token: DebounceToken | None = None
        self._timer: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """Whether a trigger is waiting for its delay to elapse."""
        return self._token is not None and self._token.pending

    def schedule(self, value: T) -> DebounceToken:
        """Schedule ``value``, replacing any pending trigger."""
        self.cancel()
        token = DebounceToken()
        self._token = token
        task = asyncio.get_running_loop().create_task(self._fire(token, value))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return token

    def cancel(self) -> None:
        """Invalidate the pending trigger, if any."""
        token = self._token
        if token is None or not token.pending:
            return
        token.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    async def wait(self) -> None:
        """Wait for every scheduled trigger to fire or be cancelled."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def _fire(self, token: DebounceToken, value: T) -> None:
        await asyncio.sleep(self._delay)
        if token.cancelled:
            return
        token.fired = True
        await self._callback(value)

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed: %s", exc, exc_info=exc)
