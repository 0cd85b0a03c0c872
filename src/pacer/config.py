"""Configuration types for the pacer library."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real


class Policy(StrEnum):
    """Available rate-limiting policies.

    DEBOUNCE: Defer the call until no new call has arrived for ``wait_ms``.
    THROTTLE: Run the call at most once per ``wait_ms`` window.
    """

    DEBOUNCE = "debounce"
    THROTTLE = "throttle"


@dataclass(frozen=True, slots=True)
class EdgeOptions:
    """Which edges of a burst trigger an invocation.

    Attributes:
        leading: Invoke immediately on the first call of a burst/window.
        trailing: Invoke once more when the delay/window elapses.

    Both default to ``False``; an ``EdgeOptions()`` with no edge enabled
    never invokes the callback.
    """

    leading: bool = False
    trailing: bool = False


def coerce_options(options: EdgeOptions | Mapping[str, bool] | None) -> EdgeOptions | None:
    """Accept ``EdgeOptions``, a ``{"leading": ..., "trailing": ...}`` mapping, or None."""
    if options is None or isinstance(options, EdgeOptions):
        return options
    if isinstance(options, Mapping):
        unknown = set(options) - {"leading", "trailing"}
        if unknown:
            raise TypeError(f"Unknown edge options: {', '.join(sorted(unknown))}")
        return EdgeOptions(**options)
    raise TypeError(f"options must be EdgeOptions or a mapping, got {type(options).__name__}")


def validate_wait(value: object, name: str = "wait_ms") -> float:
    """Return *value* as a float, rejecting anything that is not a usable delay."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")

    wait = float(value)
    if math.isnan(wait) or math.isinf(wait):
        raise ValueError(f"{name} must be finite, got {value}")
    if wait < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return wait


@dataclass(frozen=True, slots=True)
class LimiterConfig:
    """Configuration for a single rate-limited wrapper.

    Attributes:
        wait_ms: Debounce delay or throttle window in milliseconds.
                 ``0`` defers to the next event loop iteration.
        policy: Whether to debounce or throttle.
        options: Edge behaviour. ``None`` selects the basic variant, which
                 has no ``cancel``/``flush`` control.
    """

    wait_ms: float = 0.0
    policy: Policy = Policy.DEBOUNCE
    options: EdgeOptions | None = None

    def __post_init__(self) -> None:
        validate_wait(self.wait_ms)

        if self.options is not None and not isinstance(self.options, EdgeOptions):
            raise TypeError(
                f"options must be EdgeOptions or None, got {type(self.options).__name__}"
            )
