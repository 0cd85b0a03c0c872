"""pacer: debounce and throttle wrappers for Python callables.

Wraps any callable so that bursts of calls are collapsed (debounce) or
spread out to at most one per window (throttle). Timers run on the current
asyncio event loop, or on a background loop thread when called from plain
synchronous code.

Basic usage:

    from pacer import EdgeOptions, make_debounced, make_throttled

    save = make_debounced(write_to_disk, 500)
    save(doc)
    save(doc)  # write_to_disk(doc) runs once, 500ms after this call

    scroll = make_throttled(redraw, 100, EdgeOptions(leading=True, trailing=True))
    scroll(pos)
    scroll.flush()

Decorator usage:

    from pacer import debounce

    @debounce(delay_ms=250)
    def on_change(value):
        ...
"""

from pacer.config import EdgeOptions, LimiterConfig, Policy
from pacer.core import make_debounced, make_throttled
from pacer.decorator import debounce, throttle
from pacer.limiters.base import BaseLimiter
from pacer.limiters.debounce import EdgeDebouncer, TrailingDebouncer
from pacer.limiters.registry import build_limiter
from pacer.limiters.throttle import EdgeThrottler, Throttler
from pacer.scheduler import LoopScheduler, Scheduler, ThreadScheduler, resolve_scheduler

__all__ = [
    "BaseLimiter",
    "EdgeDebouncer",
    "EdgeOptions",
    "EdgeThrottler",
    "LimiterConfig",
    "LoopScheduler",
    "Policy",
    "Scheduler",
    "ThreadScheduler",
    "Throttler",
    "TrailingDebouncer",
    "build_limiter",
    "debounce",
    "make_debounced",
    "make_throttled",
    "resolve_scheduler",
    "throttle",
]

__version__ = "0.1.0"
