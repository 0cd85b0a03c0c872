"""Factory functions, the main entry point for the library."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pacer.config import EdgeOptions, LimiterConfig, Policy, coerce_options, validate_wait
from pacer.limiters.base import BaseLimiter
from pacer.limiters.registry import build_limiter
from pacer.scheduler import Scheduler


def make_debounced(
    callback: Callable[..., Any],
    delay_ms: float,
    options: EdgeOptions | Mapping[str, bool] | None = None,
    *,
    scheduler: Scheduler | None = None,
) -> BaseLimiter:
    """Wrap *callback* so it only runs after calls stop for *delay_ms*.

    Without *options* this returns a :class:`TrailingDebouncer`. With
    options it returns an :class:`EdgeDebouncer`, which also has
    ``cancel()``.

    Args:
        callback: The function to debounce.
        delay_ms: Quiet period in milliseconds.
        options: ``EdgeOptions`` or a ``{"leading": ..., "trailing": ...}``
                 mapping. Unspecified edges are off.
        scheduler: Clock/timer source. Defaults to the running event loop,
                   or a background loop thread when there is none.
    """
    config = LimiterConfig(
        wait_ms=validate_wait(delay_ms, "delay_ms"),
        policy=Policy.DEBOUNCE,
        options=coerce_options(options),
    )
    return build_limiter(callback, config, scheduler)


def make_throttled(
    callback: Callable[..., Any],
    limit_ms: float,
    options: EdgeOptions | Mapping[str, bool] | None = None,
    *,
    scheduler: Scheduler | None = None,
) -> BaseLimiter:
    """Wrap *callback* so it runs at most once per *limit_ms* window.

    Without *options* this returns a :class:`Throttler`. With options it
    returns an :class:`EdgeThrottler`, which also has ``flush()``.
    """
    config = LimiterConfig(
        wait_ms=validate_wait(limit_ms, "limit_ms"),
        policy=Policy.THROTTLE,
        options=coerce_options(options),
    )
    return build_limiter(callback, config, scheduler)
