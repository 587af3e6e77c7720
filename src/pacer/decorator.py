"""Decorator API for applying debounce/throttle behavior to functions."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast, overload

from pacer.config import Mode, PacerConfig
from pacer.core import Scheduler
from pacer.timing import Clock, Timer

F = TypeVar("F", bound=Callable[..., Any])


def _wrap(fn: F, config: PacerConfig, clock: Clock | None, timer: Timer | None, name: str) -> F:
    if inspect.iscoroutinefunction(fn):
        raise TypeError(f"@{name} only supports synchronous functions.")

    scheduler = Scheduler(fn, config, clock=clock, timer=timer)

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return scheduler.schedule(*args, **kwargs)

    wrapper.scheduler = scheduler  # type: ignore[attr-defined]
    wrapper.cancel = scheduler.cancel  # type: ignore[attr-defined]
    wrapper.flush = scheduler.flush  # type: ignore[attr-defined]
    wrapper.is_pending = scheduler.is_pending  # type: ignore[attr-defined]

    return cast("F", wrapper)


@overload
def debounce(
    func: F,
    /,
) -> F: ...


@overload
def debounce(
    *,
    wait: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> Callable[[F], F]: ...


def debounce(
    func: F | None = None,
    /,
    *,
    wait: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> F | Callable[[F], F]:
    """Decorator that delays calls to a function until they go quiet.

    Calling the decorated function records the call and returns the result
    of the most recent invocation (or the fresh one, when it runs
    synchronously on a leading or forced edge). The original function runs
    with the arguments of the latest call once ``wait`` passes without a
    new call.

    Args:
        func: The function to decorate (when used without parentheses).
        wait: Quiet period, in the clock's units (seconds by default).
        leading: Also invoke at the start of a burst.
        trailing: Invoke once the burst goes quiet.
        max_wait: Ceiling on how long an invocation may be deferred, or
            None for no limit.
        clock: Clock override, mainly for tests.
        timer: Timer override; the running asyncio loop by default.

    Examples:
    ```python
        @debounce(wait=0.3)
        def search(query: str) -> None:
            ...

        search("a")
        search("ab")   # only "ab" is searched, 0.3s later
        search.flush() # or right now
    ```
    """
    config = PacerConfig(
        wait=wait,
        mode=Mode.DEBOUNCE,
        leading=leading,
        trailing=trailing,
        max_wait=max_wait,
    )

    def decorator(fn: F) -> F:
        return _wrap(fn, config, clock, timer, "debounce")

    if func is not None:
        return decorator(func)

    return decorator


@overload
def throttle(
    func: F,
    /,
) -> F: ...


@overload
def throttle(
    *,
    wait: float = 0.0,
    leading: bool = True,
    trailing: bool = True,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> Callable[[F], F]: ...


def throttle(
    func: F | None = None,
    /,
    *,
    wait: float = 0.0,
    leading: bool = True,
    trailing: bool = True,
    clock: Clock | None = None,
    timer: Timer | None = None,
) -> F | Callable[[F], F]:
    """Decorator that invokes a function at most once per ``wait`` window.

    A throttle is a debounce whose ``max_wait`` equals ``wait``: calls that
    keep arriving cannot defer invocation past the window.

    Args:
        func: The function to decorate (when used without parentheses).
        wait: Window length, in the clock's units (seconds by default).
        leading: Invoke on the first call of a window.
        trailing: Invoke with the latest arguments when a window closes.
        clock: Clock override, mainly for tests.
        timer: Timer override; the running asyncio loop by default.
    """
    config = PacerConfig(
        wait=wait,
        mode=Mode.THROTTLE,
        leading=leading,
        trailing=trailing,
        max_wait=wait,
    )

    def decorator(fn: F) -> F:
        return _wrap(fn, config, clock, timer, "throttle")

    if func is not None:
        return decorator(func)

    return decorator
