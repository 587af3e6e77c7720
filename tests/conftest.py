"""Shared fixtures for pacer tests."""

import pytest

from pacer.config import PacerConfig
from pacer.core import Scheduler
from pacer.testing import VirtualClock, VirtualTimer


class Recorder:
    """Callable that records every invocation and returns a running count."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple, dict]] = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return len(self.calls)

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def last_args(self) -> tuple:
        return self.calls[-1][0]


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def timer(clock):
    return VirtualTimer(clock)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_scheduler(recorder, clock, timer):
    def factory(**options) -> Scheduler:
        return Scheduler(recorder, PacerConfig(**options), clock=clock, timer=timer)

    return factory
