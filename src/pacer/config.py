"""Configuration types for the pacer library."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any

from pacer.errors import ConfigurationError


class Mode(StrEnum):
    """Rate-limiting policy a configuration was built for.

    DEBOUNCE: Delay invocation until calls have gone quiet for ``wait``.
    THROTTLE: Invoke at most once per ``wait`` window.

    The mode is informational: behavior is fully determined by
    ``leading``, ``trailing`` and ``max_wait``.
    """

    DEBOUNCE = "debounce"
    THROTTLE = "throttle"


@dataclass(frozen=True, slots=True)
class PacerConfig:
    """Configuration for a Scheduler instance.

    Attributes:
        wait: Quiet/rate window, in the clock's units (seconds for the
              default monotonic clock).
        mode: The policy this configuration describes.
        leading: Invoke on the leading edge of a burst.
        trailing: Invoke on the trailing edge once the burst goes quiet.
        max_wait: Hard ceiling on how long an invocation may be deferred,
                  measured from the last actual invocation. None means no
                  ceiling.
    """

    wait: float = 0.0
    mode: Mode = Mode.DEBOUNCE
    leading: bool = False
    trailing: bool = True
    max_wait: float | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "mode", Mode(self.mode))
        except ValueError:
            raise ConfigurationError(
                f"Unknown mode: {self.mode!r}. Expected one of: {', '.join(m.value for m in Mode)}"
            ) from None

        _check_duration("wait", self.wait)
        if self.max_wait is not None:
            _check_duration("max_wait", self.max_wait)

        if self.wait < 0:
            raise ConfigurationError(f"wait must be non-negative, got {self.wait}")

        if self.max_wait is not None and self.max_wait < self.wait:
            raise ConfigurationError(f"max_wait ({self.max_wait}) must be >= wait ({self.wait})")


def _check_duration(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


_FIELD_NAMES = frozenset(f.name for f in fields(PacerConfig))


def normalize_config(options: "float | PacerConfig | Mapping[str, Any] | None" = None) -> PacerConfig:
    """Coerce the accepted option shapes into a :class:`PacerConfig`.

    A bare number is shorthand for ``PacerConfig(wait=number)``; a mapping
    supplies any subset of the config fields. ``None`` yields the defaults.
    """
    if options is None:
        return PacerConfig()
    if isinstance(options, PacerConfig):
        return options
    if isinstance(options, bool):
        raise ConfigurationError(f"Unsupported options: {options!r}")
    if isinstance(options, int | float):
        return PacerConfig(wait=options)
    if isinstance(options, Mapping):
        unknown = set(options) - _FIELD_NAMES
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return PacerConfig(**options)
    raise ConfigurationError(f"Unsupported options: {options!r}")
