from pacer.limiters.base import BaseLimiter
from pacer.limiters.debounce import EdgeDebouncer, TrailingDebouncer
from pacer.limiters.registry import build_limiter
from pacer.limiters.throttle import EdgeThrottler, Throttler

__all__ = [
    "BaseLimiter",
    "EdgeDebouncer",
    "EdgeThrottler",
    "Throttler",
    "TrailingDebouncer",
    "build_limiter",
]
