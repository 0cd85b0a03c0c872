"""Shared fixtures for pacer tests."""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import Mock

import pytest

from pacer.scheduler import Scheduler


@dataclass(order=True)
class ManualTimer:
    when: float
    seq: int
    callback: Any = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Virtual clock: time only moves when a test calls :meth:`advance`."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._timers: list[ManualTimer] = []
        self._seq = itertools.count()
        self.spawned: list[Any] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms, callback):
        timer = ManualTimer(self._now + delay_ms, next(self._seq), callback)
        heapq.heappush(self._timers, timer)
        return timer

    def spawn(self, awaitable) -> None:
        self.spawned.append(awaitable)

    @property
    def active_timers(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, ms: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self._now + ms
        while self._timers and self._timers[0].when <= target:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self._now = timer.when
            timer.callback()
        self._now = target

    def advance_to(self, when: float) -> None:
        self.advance(when - self._now)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def fn():
    return Mock(return_value=None)
