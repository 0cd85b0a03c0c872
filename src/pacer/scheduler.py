"""Clock and timer sources that limiters schedule their deferred calls on."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol

from pacer._sync import get_shared_loop

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pacer._sync import _EventLoopThread

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Supplies a monotonic millisecond clock and cancellable timers.

    All times and delays are milliseconds.
    """

    __slots__ = ()

    @abstractmethod
    def now(self) -> float:
        """Current monotonic time in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run *callback* once after *delay_ms* and return a cancellable handle."""

    @abstractmethod
    def spawn(self, awaitable: Awaitable[Any]) -> None:
        """Run *awaitable* in the background without waiting for it."""

    @property
    def usable(self) -> bool:
        """Whether timers can still be scheduled here."""
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LoopScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop.

    The loop is resolved lazily from the running loop on first use unless one
    is passed in. Tasks created by :meth:`spawn` are referenced until they
    finish so they are not garbage collected mid-flight.
    """

    __slots__ = ("_loop", "_tasks")

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Future[Any]] = set()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def usable(self) -> bool:
        return self._loop is None or not self._loop.is_closed()

    def now(self) -> float:
        return self._get_loop().time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(delay_ms / 1000.0, callback)

    def spawn(self, awaitable: Awaitable[Any]) -> None:
        task = asyncio.ensure_future(awaitable, loop=self._get_loop())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


class ThreadScheduler(Scheduler):
    """Scheduler for synchronous callers, backed by a background loop thread.

    Deferred callbacks run on the background thread, not the caller's.
    """

    __slots__ = ("_runner",)

    def __init__(self, runner: _EventLoopThread | None = None) -> None:
        self._runner = runner

    def _get_runner(self) -> _EventLoopThread:
        if self._runner is None:
            self._runner = get_shared_loop()
        return self._runner

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle:
        return self._get_runner().call_later(delay_ms / 1000.0, callback)

    def spawn(self, awaitable: Awaitable[Any]) -> None:
        self._get_runner().submit(_await(awaitable))


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def resolve_scheduler() -> Scheduler:
    """Pick a scheduler for the current context.

    Inside a running event loop timers go on that loop; anywhere else they go
    on the shared background loop thread.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop, using background timer thread")
        return ThreadScheduler()
    return LoopScheduler(loop)
