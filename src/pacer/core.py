"""Core Scheduler class: the invocation-timing state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from pacer.config import PacerConfig
from pacer.timing import LoopTimer, MonotonicClock

if TYPE_CHECKING:
    from collections.abc import Callable

    from pacer.timing import Clock, Timer

logger = logging.getLogger(__name__)


class PendingCall(NamedTuple):
    """Arguments of a scheduled call not yet consumed by an invocation."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any]


@dataclass(slots=True)
class InvocationState:
    timer_handle: Any = None
    last_call_time: float | None = None
    last_invoke_time: float = 0.0
    pending: PendingCall | None = None
    last_result: Any = None


class Scheduler:
    """Debounce/throttle engine for a single function.

    How it works:
        - Every call records its arguments and time. A call invokes
          synchronously only on a leading edge with ``leading`` enabled, or
          when ``max_wait`` has elapsed while a window is still open.
        - Otherwise a timer is armed for ``wait``. When it fires, the
          scheduler either runs the trailing edge or re-arms for whatever
          is left of the quiet window, capped by what is left of
          ``max_wait``.
        - At most one timer is outstanding; arming always disarms first.

    Example::

        wait=3, max_wait=5

        t=0 call("a")   -> leading edge, arm timer (3)
        t=2 call("b")   -> window still open
        t=3 timer fires -> 1 since last call, re-arm for 2
        t=5 timer fires -> quiet for 3, invoke("b")

    Args:
        func: The function to rate-limit. Must be synchronous.
        config: Timing configuration; defaults to ``PacerConfig()``.
        clock: Source of the current instant.
        timer: Delayed-callback primitive. Defaults to the running asyncio
            loop, resolved the first time a timer is armed.

    Exceptions raised by *func* propagate unchanged out of whichever call
    triggered the invocation, after the scheduler's own bookkeeping is done.
    """

    __slots__ = ("_clock", "_config", "_func", "_state", "_timer")

    def __init__(
        self,
        func: Callable[..., Any],
        config: PacerConfig | None = None,
        *,
        clock: Clock | None = None,
        timer: Timer | None = None,
    ) -> None:
        self._func = func
        self._config = config or PacerConfig()
        self._clock: Clock = clock or MonotonicClock()
        self._timer: Timer = timer or LoopTimer()
        self._state = InvocationState()

    @property
    def config(self) -> PacerConfig:
        return self._config

    @property
    def last_result(self) -> Any:
        """Return value of the most recent invocation, or None."""
        return self._state.last_result

    def schedule(self, *args: Any, **kwargs: Any) -> Any:
        """Record a call and invoke now, later, or not at all.

        Returns the new result if the function was invoked synchronously,
        otherwise the result of the most recent invocation.
        """
        state = self._state
        now = self._clock.now()
        invoking = self._should_invoke(now)

        state.pending = PendingCall(args, kwargs)
        state.last_call_time = now

        if invoking:
            if state.timer_handle is None:
                return self._leading_edge(now)

            if self._config.max_wait is not None:
                # Forced: invoke even though a window is open, then start a
                # fresh one. A call landing in the new window still gets a
                # trailing invocation of its own.
                logger.debug("max_wait reached, forcing invocation at %s", now)
                self._arm(self._config.wait)
                return self._invoke(now)

        if state.timer_handle is None:
            self._arm(self._config.wait)

        return state.last_result

    __call__ = schedule

    def cancel(self) -> None:
        """Drop any pending invocation and return to the at-rest state."""
        state = self._state
        if state.timer_handle is not None:
            logger.debug("cancelling pending invocation")
        self._disarm()
        state.last_call_time = None
        state.last_invoke_time = 0.0
        state.pending = None

    def flush(self) -> Any:
        """Invoke a pending call immediately and return the latest result."""
        state = self._state
        if state.timer_handle is None:
            return state.last_result

        now = self._clock.now()
        self._disarm()
        if state.pending is not None:
            logger.debug("flushing pending invocation at %s", now)
            return self._invoke(now)
        return state.last_result

    def is_pending(self) -> bool:
        return self._state.timer_handle is not None

    def _should_invoke(self, now: float) -> bool:
        state = self._state
        if state.last_call_time is None:
            return True

        if now - state.last_call_time >= self._config.wait:
            return True

        max_wait = self._config.max_wait
        return max_wait is not None and now - state.last_invoke_time >= max_wait

    def _invoke(self, now: float) -> Any:
        state = self._state
        call = state.pending
        assert call is not None
        state.pending = None
        state.last_invoke_time = now
        state.last_result = self._func(*call.args, **call.kwargs)
        return state.last_result

    def _leading_edge(self, now: float) -> Any:
        self._state.last_invoke_time = now
        self._arm(self._config.wait)
        if self._config.leading:
            logger.debug("leading edge invocation at %s", now)
            return self._invoke(now)
        return self._state.last_result

    def _trailing_edge(self, now: float) -> Any:
        state = self._state
        state.timer_handle = None
        if self._config.trailing and state.pending is not None:
            logger.debug("trailing edge invocation at %s", now)
            return self._invoke(now)
        state.pending = None
        return state.last_result

    def _timer_expired(self) -> None:
        now = self._clock.now()
        if self._should_invoke(now):
            self._trailing_edge(now)
            return

        delay = self._remaining_wait(now)
        logger.debug("window still open at %s, re-arming for %s", now, delay)
        self._arm(delay)

    def _remaining_wait(self, now: float) -> float:
        state = self._state
        assert state.last_call_time is not None
        remaining = self._config.wait - (now - state.last_call_time)
        if self._config.max_wait is not None:
            remaining = min(remaining, self._config.max_wait - (now - state.last_invoke_time))
        return max(remaining, 0)

    def _arm(self, delay: float) -> None:
        self._disarm()
        self._state.timer_handle = self._timer.arm(delay, self._timer_expired)

    def _disarm(self) -> None:
        handle = self._state.timer_handle
        if handle is not None:
            self._timer.disarm(handle)
            self._state.timer_handle = None

    def __repr__(self) -> str:
        return (
            f"Scheduler(wait={self._config.wait}, "
            f"max_wait={self._config.max_wait}, "
            f"mode={self._config.mode.value}, "
            f"pending={self.is_pending()})"
        )
