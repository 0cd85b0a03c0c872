"""Throttle limiters: run the callback at most once per window."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pacer.config import EdgeOptions
from pacer.limiters.base import BaseLimiter, CallArgs

if TYPE_CHECKING:
    from collections.abc import Callable

    from pacer.scheduler import Scheduler

logger = logging.getLogger(__name__)


class Throttler(BaseLimiter):
    """Leading-edge throttle with one trailing call per burst.

    How it works:
        - The first call after an idle window runs immediately.
        - Calls inside the window replace a single trailing timer set for
          the end of the window. When it fires, the window restarts at the
          time of the call that scheduled it.

    Example::

        limit_ms=1000

        t=0     f("a")  -> callback("a")
        t=10    f("b")  -> trailing timer for t=1000
        t=500   f("c")  -> trailing timer for t=1000 (replaces "b")
        t=1000  timer   -> callback("c"), window starts at t=500
    """

    __slots__ = ()

    def __init__(
        self,
        callback: Callable[..., Any],
        limit_ms: float,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(callback, limit_ms, scheduler=scheduler)

    @property
    def limit_ms(self) -> float:
        return self.wait_ms

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        captured: CallArgs = (args, kwargs)
        with self._lock:
            now = self._now()
            last = self._last_time
            self._last_args = captured
            immediate = last is None or now - last >= self.wait_ms
            if immediate:
                self._last_time = now
            else:
                self._schedule(
                    self.wait_ms - (now - last), lambda: self._on_expire(now, captured)
                )

        if immediate:
            self._invoke(captured)

    def _on_expire(self, call_time: float, captured: CallArgs) -> CallArgs:
        self._last_time = call_time
        return captured


class EdgeThrottler(BaseLimiter):
    """Throttle with configurable leading and trailing edges.

    - The very first call runs immediately, whatever the edges say.
    - Any call arriving once the window has fully elapsed runs immediately.
    - ``trailing``: calls inside the window schedule one invocation at the
      window's end, using whatever arguments were most recent when it fires.
    - Without ``trailing`` calls inside the window are dropped.

    With ``leading`` the first call runs as the leading edge and its own
    window stays open to a trailing call, so with ``trailing`` too a single
    call runs twice. :meth:`flush` runs a pending trailing invocation right
    away.
    """

    __slots__ = ()

    options: EdgeOptions

    def __init__(
        self,
        callback: Callable[..., Any],
        limit_ms: float,
        options: EdgeOptions | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(callback, limit_ms, options or EdgeOptions(), scheduler=scheduler)

    @property
    def limit_ms(self) -> float:
        return self.wait_ms

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        captured: CallArgs = (args, kwargs)
        calls: list[CallArgs] = []
        with self._lock:
            now = self._now()
            if self._last_time is None and self.options.leading:
                self._last_time = now
                calls.append(captured)

            # Nothing has run yet: the window is already open.
            if self._last_time is None:
                remaining = 0.0
            else:
                remaining = self.wait_ms - (now - self._last_time)

            if remaining <= 0:
                self._clear_timer()
                self._last_time = now
                calls.append(captured)
            elif self.options.trailing:
                self._schedule(remaining, self._on_expire)
            elif not calls:
                logger.debug("%r dropped call, %.3fms left in window", self, remaining)

            self._last_args = captured

        for call in calls:
            self._invoke(call)

    def flush(self) -> None:
        """Run the pending trailing invocation now. No-op when nothing is pending.

        The window restarts at the flush, so the next call inside
        ``limit_ms`` of it is throttled.
        """
        with self._lock:
            if not self._clear_timer():
                return
            self._last_time = self._now()
            captured = self._last_args
        logger.debug("%r flushed", self)
        self._invoke(captured)

    def _on_expire(self) -> CallArgs:
        self._last_time = self._now()
        return self._last_args
