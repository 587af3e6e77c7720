"""Exception types for the pacer library."""


class PacerError(Exception):
    """Base exception for this package."""


class ConfigurationError(PacerError, ValueError):
    """Invalid scheduler configuration; raised before any instance exists."""


class InvocationError(PacerError):
    """Failure of an underlying function invoked by a scheduler.

    The engine itself never raises this: whatever the underlying function
    raises propagates unchanged. Adapters that want a single exception type
    for callback failures can chain into it with ``raise ... from exc``.
    """


__all__ = [
    "ConfigurationError",
    "InvocationError",
    "PacerError",
]
