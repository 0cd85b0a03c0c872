"""Debounce limiters: run the callback once calls have stopped arriving."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pacer.config import EdgeOptions
from pacer.limiters.base import BaseLimiter, CallArgs

if TYPE_CHECKING:
    from collections.abc import Callable

    from pacer.scheduler import Scheduler

logger = logging.getLogger(__name__)


class TrailingDebouncer(BaseLimiter):
    """Trailing-edge debounce.

    How it works:
        - Each call cancels the pending timer and starts a new one.
        - When a timer survives ``delay_ms`` without being replaced, the
          callback runs with the arguments of the call that started it.

    Example::

        delay_ms=500

        t=0    f("a")   -> start timer (500ms)
        t=100  f("b")   -> reset timer
        t=200  f("c")   -> reset timer
        t=700  timer    -> callback("c")
    """

    __slots__ = ()

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_ms: float,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(callback, delay_ms, scheduler=scheduler)

    @property
    def delay_ms(self) -> float:
        return self.wait_ms

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        captured: CallArgs = (args, kwargs)
        with self._lock:
            self._last_args = captured
            self._schedule(self.wait_ms, lambda: captured)


class EdgeDebouncer(BaseLimiter):
    """Debounce with configurable leading and trailing edges.

    A burst is a run of calls each arriving less than ``delay_ms`` after the
    previous one. With ``leading`` the first call of a burst invokes the
    callback immediately; with ``trailing`` the callback runs once more
    ``delay_ms`` after the last call. A single call with both edges enabled
    therefore invokes the callback twice. With neither edge nothing ever
    runs.

    :meth:`cancel` drops the pending trailing invocation.
    """

    __slots__ = ()

    options: EdgeOptions

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_ms: float,
        options: EdgeOptions | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(callback, delay_ms, options or EdgeOptions(), scheduler=scheduler)

    @property
    def delay_ms(self) -> float:
        return self.wait_ms

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        captured: CallArgs = (args, kwargs)
        with self._lock:
            now = self._now()
            last = self._last_time
            leading = self.options.leading and (last is None or now - last >= self.wait_ms)
            self._last_time = now
            self._last_args = captured
            self._clear_timer()
            generation = self._generation

        # A raising leading call leaves no timer behind.
        if leading:
            logger.debug("%r leading invocation", self)
            self._invoke(captured)

        with self._lock:
            # Skip if another call or cancel() got in while the callback ran.
            if self._generation == generation:
                self._schedule(self.wait_ms, lambda: self._on_expire(captured))

    def cancel(self) -> None:
        """Drop the pending invocation, if any. The burst clock is kept."""
        with self._lock:
            cancelled = self._clear_timer()
        if cancelled:
            logger.debug("%r cancelled", self)

    def _on_expire(self, captured: CallArgs) -> CallArgs | None:
        return captured if self.options.trailing else None
