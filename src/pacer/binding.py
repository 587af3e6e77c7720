"""Lifecycle binding that keeps one Scheduler alive across repeated setup calls.

Frameworks that re-run their setup code (render functions, reloaded
handlers, per-request wiring) would otherwise build a fresh scheduler on
every pass and lose pending calls. :class:`PacedCallback` gives the
scheduler a stable identity instead:

    paced = PacedCallback(on_change, 0.3)

    def render(handler):
        run = paced.bind(handler, 0.3)   # same Scheduler while options match
        run("value")

    paced.close()                        # teardown: nothing fires afterwards
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NamedTuple

from pacer.config import PacerConfig, normalize_config
from pacer.core import Scheduler

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pacer.timing import Clock, Timer

logger = logging.getLogger(__name__)


class Controls(NamedTuple):
    """Named-method view of a scheduler."""

    run: Callable[..., Any]
    cancel: Callable[[], None]
    flush: Callable[[], Any]
    is_pending: Callable[[], bool]


class PacedCallback:
    """Stable scheduler whose target function can change between calls.

    The scheduler never holds *func* directly: it invokes a trampoline that
    reads the latest function at call time, so swapping functions neither
    rebuilds the scheduler nor disturbs an armed timer. Only a change in the
    normalized configuration replaces the scheduler, and the old one is
    cancelled first.

    Args:
        func: The function to rate-limit.
        options: Anything :func:`normalize_config` accepts.
        clock: Clock passed to every scheduler this binding builds.
        timer: Timer passed to every scheduler this binding builds.
    """

    __slots__ = ("_clock", "_closed", "_config", "_func", "_scheduler", "_timer")

    def __init__(
        self,
        func: Callable[..., Any],
        options: float | PacerConfig | Mapping[str, Any] | None = None,
        *,
        clock: Clock | None = None,
        timer: Timer | None = None,
    ) -> None:
        self._func = func
        self._clock = clock
        self._timer = timer
        self._config = normalize_config(options)
        self._scheduler = self._build()
        self._closed = False

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def config(self) -> PacerConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def bind(
        self,
        func: Callable[..., Any],
        options: float | PacerConfig | Mapping[str, Any] | None = None,
    ) -> Scheduler:
        """Point at *func* and return the scheduler for *options*.

        Returns the same scheduler as the previous call unless the options
        differ field by field.
        """
        self._ensure_open()
        self._func = func
        config = normalize_config(options)
        if config != self._config:
            logger.debug("options changed from %s to %s, rebuilding scheduler", self._config, config)
            self._scheduler.cancel()
            self._config = config
            self._scheduler = self._build()
        return self._scheduler

    def controls(self) -> Controls:
        scheduler = self._scheduler
        return Controls(
            run=scheduler.schedule,
            cancel=scheduler.cancel,
            flush=scheduler.flush,
            is_pending=scheduler.is_pending,
        )

    def close(self) -> None:
        """Cancel whatever is pending; later ``bind`` calls are rejected."""
        if self._closed:
            return
        self._closed = True
        self._scheduler.cancel()
        logger.debug("binding closed")

    def _build(self) -> Scheduler:
        return Scheduler(self._call_latest, self._config, clock=self._clock, timer=self._timer)

    def _call_latest(self, *args: Any, **kwargs: Any) -> Any:
        return self._func(*args, **kwargs)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("PacedCallback is closed")

    def __enter__(self) -> PacedCallback:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    async def __aenter__(self) -> PacedCallback:
        return self

    async def __aexit__(self, *_: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PacedCallback(config={self._config}, closed={self._closed})"
