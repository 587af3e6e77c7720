"""Clock and timer abstractions the scheduler is driven by.

The scheduler never reads wall-clock time or arms callbacks directly: it
goes through a :class:`Clock` and a :class:`Timer`, so both can be swapped
for the deterministic pair in :mod:`pacer.testing`.
"""

import time
from asyncio import AbstractEventLoop, TimerHandle, get_running_loop
from collections.abc import Callable
from typing import Any, Protocol


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> float:
        """Return the current instant; never decreases between calls."""


class Timer(Protocol):
    """Arms a single delayed callback and can cancel it."""

    def arm(self, delay: float, callback: Callable[[], None]) -> Any:
        """Schedule *callback* to run once after *delay* and return a handle."""

    def disarm(self, handle: Any) -> None:
        """Cancel *handle*; no-op if it already fired or was disarmed."""


class MonotonicClock:
    """Clock backed by :func:`time.monotonic`, in seconds."""

    __slots__ = ()

    def now(self) -> float:
        return time.monotonic()


class LoopTimer:
    """Timer backed by the asyncio event loop's ``call_later``.

    The loop is resolved from the running loop on first use unless one is
    given explicitly. Callbacks run on the loop's thread, and anything they
    raise is reported through the loop's exception handler.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> AbstractEventLoop:
        if self._loop is None:
            self._loop = get_running_loop()
        return self._loop

    def arm(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return self._get_loop().call_later(max(delay, 0.0), callback)

    def disarm(self, handle: TimerHandle) -> None:
        handle.cancel()
