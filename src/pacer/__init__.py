"""Pacer: debounce and throttle engine for Python.

Rate-limits calls to a function against a stream of trigger events,
with configurable leading/trailing edges and a hard ``max_wait`` ceiling.

Basic usage:

    from pacer import PacerConfig, Scheduler

    scheduler = Scheduler(save, PacerConfig(wait=0.5, max_wait=2.0))

    scheduler("draft 1")
    scheduler("draft 2")   # save("draft 2") runs once things go quiet
    scheduler.flush()      # ...or right now

Decorator usage:

    from pacer import debounce, throttle

    @debounce(wait=0.3)
    def search(query: str) -> None: ...

    @throttle(wait=0.1)
    def on_scroll(offset: int) -> None: ...
"""

from pacer.binding import Controls, PacedCallback
from pacer.config import Mode, PacerConfig, normalize_config
from pacer.core import Scheduler
from pacer.decorator import debounce, throttle
from pacer.errors import ConfigurationError, InvocationError, PacerError
from pacer.timing import Clock, LoopTimer, MonotonicClock, Timer

__all__ = [
    "Clock",
    "ConfigurationError",
    "Controls",
    "InvocationError",
    "LoopTimer",
    "Mode",
    "MonotonicClock",
    "PacedCallback",
    "PacerConfig",
    "PacerError",
    "Scheduler",
    "Timer",
    "debounce",
    "normalize_config",
    "throttle",
]

__version__ = "0.1.0"
