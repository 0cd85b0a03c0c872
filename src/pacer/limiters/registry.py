"""Maps each ``Policy`` enum member to a callable that builds a ``BaseLimiter``.

When you add a new policy:

1. Add a variant to the ``Policy`` enum in ``config.py``.
2. Add an entry to ``REGISTRY`` pointing to a factory function that
   constructs the concrete limiter from a :class:`LimiterConfig`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pacer.config import LimiterConfig, Policy
from pacer.limiters.base import BaseLimiter
from pacer.limiters.debounce import EdgeDebouncer, TrailingDebouncer
from pacer.limiters.throttle import EdgeThrottler, Throttler
from pacer.scheduler import Scheduler

LimiterFactory = Callable[[Callable[..., Any], LimiterConfig, Scheduler | None], BaseLimiter]


def _debouncer(
    callback: Callable[..., Any], cfg: LimiterConfig, scheduler: Scheduler | None
) -> BaseLimiter:
    if cfg.options is None:
        return TrailingDebouncer(callback, cfg.wait_ms, scheduler=scheduler)
    return EdgeDebouncer(callback, cfg.wait_ms, cfg.options, scheduler=scheduler)


def _throttler(
    callback: Callable[..., Any], cfg: LimiterConfig, scheduler: Scheduler | None
) -> BaseLimiter:
    if cfg.options is None:
        return Throttler(callback, cfg.wait_ms, scheduler=scheduler)
    return EdgeThrottler(callback, cfg.wait_ms, cfg.options, scheduler=scheduler)


REGISTRY: dict[Policy, LimiterFactory] = {
    Policy.DEBOUNCE: _debouncer,
    Policy.THROTTLE: _throttler,
}


def build_limiter(
    callback: Callable[..., Any],
    config: LimiterConfig,
    scheduler: Scheduler | None = None,
) -> BaseLimiter:
    """Resolve *config.policy* to a concrete ``BaseLimiter`` wrapping *callback*."""
    factory = REGISTRY.get(config.policy)
    if not factory:
        raise ValueError(
            f"Unknown policy: {config.policy!r}. Registered: {', '.join(p.value for p in REGISTRY)}"
        )
    return factory(callback, config, scheduler)
