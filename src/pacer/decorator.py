"""Decorator API for applying debounce/throttle behavior to functions."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast, overload

from pacer.config import EdgeOptions, LimiterConfig, Policy
from pacer.limiters.registry import build_limiter
from pacer.scheduler import Scheduler

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_WAIT_MS = 100.0

_CONTROLS = ("cancel", "flush")


def _edge_options(leading: bool | None, trailing: bool | None) -> EdgeOptions | None:
    if leading is None and trailing is None:
        return None
    return EdgeOptions(leading=bool(leading), trailing=bool(trailing))


def _limit(
    func: F | None,
    config: LimiterConfig,
    scheduler: Scheduler | None,
) -> F | Callable[[F], F]:
    def decorator(fn: F) -> F:
        limiter = build_limiter(fn, config, scheduler)

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            limiter(*args, **kwargs)

        wrapper.limiter = limiter  # type: ignore[attr-defined]
        for name in _CONTROLS:
            if hasattr(limiter, name):
                setattr(wrapper, name, getattr(limiter, name))

        return cast("F", wrapper)

    if func is not None:
        return decorator(func)

    return decorator


@overload
def debounce(
    func: F,
    /,
) -> F: ...


@overload
def debounce(
    *,
    delay_ms: float = DEFAULT_WAIT_MS,
    leading: bool | None = None,
    trailing: bool | None = None,
    scheduler: Scheduler | None = None,
) -> Callable[[F], F]: ...


def debounce(
    func: F | None = None,
    /,
    *,
    delay_ms: float = DEFAULT_WAIT_MS,
    leading: bool | None = None,
    trailing: bool | None = None,
    scheduler: Scheduler | None = None,
) -> F | Callable[[F], F]:
    """Decorator that debounces calls to a function.

    Calls return ``None`` immediately; the function itself runs once calls
    have stopped for *delay_ms*. Decorated methods receive ``self`` as
    usual, and all instances share one debounce state.

    Passing neither *leading* nor *trailing* builds a plain trailing
    debounce. Passing either builds the edge-aware variant (the other edge
    defaults to off) and exposes ``cancel()`` on the decorated function.

    Args:
        func: The function to decorate (when used without parentheses).
        delay_ms: Quiet period in milliseconds.
        leading: Run on the first call of a burst.
        trailing: Run after the burst has ended.
        scheduler: Clock/timer source; resolved on first call when omitted.

    Examples:
    ```python
        @debounce(delay_ms=250)
        def save(document):
            ...

        @debounce(delay_ms=250, leading=True, trailing=True)
        def refresh(view):
            ...

        refresh.cancel()
    ```
    """
    config = LimiterConfig(
        wait_ms=delay_ms,
        policy=Policy.DEBOUNCE,
        options=_edge_options(leading, trailing),
    )
    return _limit(func, config, scheduler)


@overload
def throttle(
    func: F,
    /,
) -> F: ...


@overload
def throttle(
    *,
    limit_ms: float = DEFAULT_WAIT_MS,
    leading: bool | None = None,
    trailing: bool | None = None,
    scheduler: Scheduler | None = None,
) -> Callable[[F], F]: ...


def throttle(
    func: F | None = None,
    /,
    *,
    limit_ms: float = DEFAULT_WAIT_MS,
    leading: bool | None = None,
    trailing: bool | None = None,
    scheduler: Scheduler | None = None,
) -> F | Callable[[F], F]:
    """Decorator that lets a function run at most once per *limit_ms*.

    Passing either *leading* or *trailing* builds the edge-aware variant and
    exposes ``flush()`` on the decorated function.
    """
    config = LimiterConfig(
        wait_ms=limit_ms,
        policy=Policy.THROTTLE,
        options=_edge_options(leading, trailing),
    )
    return _limit(func, config, scheduler)
