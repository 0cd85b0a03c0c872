"""Abstract base class that all rate limiters build on."""

from __future__ import annotations

import inspect
import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pacer.config import EdgeOptions, validate_wait
from pacer.scheduler import resolve_scheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from pacer.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

#: Positional and keyword arguments of one call, kept for a later invocation.
CallArgs = tuple[tuple[Any, ...], dict[str, Any]]


class BaseLimiter(ABC):
    """Base class for debouncers and throttlers.

    A limiter wraps *callback* and decides, for every call it receives,
    whether to invoke the callback now, later, or not at all. It owns at
    most one pending timer: scheduling a new one always cancels the
    previous one first.

    State is guarded by a lock so that timers firing on the background
    loop thread and calls from the caller's thread stay serialized. The
    callback itself always runs outside the lock.

    Args:
        callback: The function to rate-limit. Its return value is discarded;
                  awaitables it returns are scheduled as background tasks.
        wait_ms: Delay or window in milliseconds. Must be >= 0.
        options: Edge options for the edge-aware variants.
        scheduler: Clock/timer source. Resolved from the calling context on
                   first use when omitted.
    """

    __slots__ = (
        "_callback",
        "_generation",
        "_injected",
        "_last_args",
        "_last_time",
        "_lock",
        "_scheduler",
        "_timer",
        "options",
        "wait_ms",
    )

    def __init__(
        self,
        callback: Callable[..., Any],
        wait_ms: float,
        options: EdgeOptions | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        self._callback = callback
        self.wait_ms = validate_wait(wait_ms)
        self.options = options
        self._scheduler = scheduler
        self._injected = scheduler is not None
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._last_time: float | None = None
        self._last_args: CallArgs = ((), {})
        self._lock = threading.Lock()

    @property
    def callback(self) -> Callable[..., Any]:
        return self._callback

    @property
    def scheduler(self) -> Scheduler:
        if self._scheduler is None or (not self._injected and not self._scheduler.usable):
            self._scheduler = resolve_scheduler()
        return self._scheduler

    @property
    def pending(self) -> bool:
        """Whether a deferred invocation is currently scheduled."""
        return self._timer is not None

    @property
    def last_time(self) -> float | None:
        """Timestamp (ms) the current delay/window is measured from, if any."""
        return self._last_time

    @abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> None:
        """Register a call; the callback may run now, later, or not at all."""

    def _now(self) -> float:
        return self.scheduler.now()

    def _schedule(self, delay_ms: float, on_expire: Callable[[], CallArgs | None]) -> None:
        """Replace the pending timer with one firing after *delay_ms*.

        *on_expire* runs under the lock when the timer fires and returns the
        arguments to invoke the callback with, or ``None`` to skip it.
        Must be called with the lock held.
        """
        self._clear_timer()
        generation = self._generation
        self._timer = self.scheduler.call_later(
            max(delay_ms, 0.0), lambda: self._expire(generation, on_expire)
        )
        logger.debug("%r scheduled timer in %.3fms", self, delay_ms)

    def _clear_timer(self) -> bool:
        """Cancel the pending timer, if any. Must be called with the lock held."""
        self._generation += 1
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def _expire(self, generation: int, on_expire: Callable[[], CallArgs | None]) -> None:
        with self._lock:
            # A timer cancelled from another thread may still get here.
            if generation != self._generation:
                return
            self._timer = None
            self._generation += 1
            args = on_expire()
        if args is not None:
            logger.debug("%r trailing invocation", self)
            self._invoke(args)

    def _invoke(self, args: CallArgs) -> None:
        positional, keywords = args
        result = self._callback(*positional, **keywords)
        if inspect.isawaitable(result):
            self.scheduler.spawn(result)

    def __repr__(self) -> str:
        name = getattr(self._callback, "__qualname__", self._callback)
        return (
            f"{type(self).__name__}(callback={name!r}, "
            f"wait_ms={self.wait_ms}, options={self.options})"
        )
