from __future__ import annotations

import asyncio
import contextlib
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_DELAY = 0.3


class Debouncer(Generic[T]):
    """Coalesce rapid pushes into one committed value after ``delay`` seconds of quiet."""

    def __init__(self, callback: Callable[[T], Awaitable[None]], *, delay: float = DEFAULT_DELAY) -> None:
        self._callback = callback
        self.delay = delay
        self._timer: asyncio.Task | None = None
        self._last: asyncio.Task | None = None

    def push(self, value: T) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._commit_later(value))
        self._last = self._timer

    def cancel(self) -> None:
        # only a sleeping timer is cancelled; a commit already running finishes
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def drain(self) -> None:
        """Wait for the latest scheduled commit, if any."""

        if self._last is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._last

    async def _commit_later(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        await self._callback(value)
