"""Infrastructure abstraction ports."""

from .system import IClock, ISleeper  # noqa: F401

__all__ = [
    "IClock",
    "ISleeper",
]
