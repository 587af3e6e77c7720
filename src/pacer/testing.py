"""Deterministic clock/timer pair for driving schedulers without real waits."""

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field


class VirtualClock:
    """Manually advanced clock.

    Units are whatever the test chooses; integer ticks keep window
    arithmetic exact.
    """

    __slots__ = ("_now",)

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, delta: float) -> None:
        """Move the clock forward by *delta* without firing any timers."""
        self.advance_to(self._now + delta)

    def advance_to(self, instant: float) -> None:
        if instant < self._now:
            raise ValueError(f"clock cannot move backwards ({instant} < {self._now})")
        self._now = instant


@dataclass(order=True, slots=True)
class VirtualHandle:
    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)


class VirtualTimer:
    """Heap-backed timer that only fires when explicitly advanced.

    How it works:
        - ``arm`` records a deadline of ``clock.now() + delay``.
        - ``advance`` pops due handles in deadline order (ties in arm
          order), moves the clock to each deadline and runs the callback.
        - Callbacks armed while advancing fire in the same pass if they
          fall due before the target.

    Example::

        clock = VirtualClock()
        timer = VirtualTimer(clock)
        timer.arm(300, fire)
        timer.advance(299)   -> nothing
        timer.advance(1)     -> fire() runs, clock.now() == 300
    """

    __slots__ = ("_heap", "_seq", "clock")

    def __init__(self, clock: VirtualClock | None = None) -> None:
        self.clock = clock or VirtualClock()
        self._heap: list[VirtualHandle] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        """Number of armed handles that have neither fired nor been disarmed."""
        return sum(1 for h in self._heap if not h.cancelled)

    def arm(self, delay: float, callback: Callable[[], None]) -> VirtualHandle:
        handle = VirtualHandle(self.clock.now() + max(delay, 0), next(self._seq), callback)
        heapq.heappush(self._heap, handle)
        return handle

    def disarm(self, handle: VirtualHandle) -> None:
        handle.cancelled = True

    def advance(self, delta: float) -> None:
        """Advance the clock by *delta*, firing every callback that falls due."""
        target = self.clock.now() + delta
        while self._heap and self._heap[0].deadline <= target:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            # A clock advanced on its own may already be past the deadline.
            self.clock.advance_to(max(handle.deadline, self.clock.now()))
            handle.fired = True
            handle.callback()
        self.clock.advance_to(target)

    def run_all(self) -> None:
        """Fire callbacks until no armed handles remain."""
        while self._heap:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self.clock.advance_to(max(handle.deadline, self.clock.now()))
            handle.fired = True
            handle.callback()
