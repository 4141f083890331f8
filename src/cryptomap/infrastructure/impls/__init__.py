"""Default infrastructure implementations."""

from .system import AsyncioSleeper, SystemClock  # noqa: F401

__all__ = [
    "AsyncioSleeper",
    "SystemClock",
]
