"""Default implementations of infrastructure abstractions."""

import asyncio
from datetime import datetime

from cryptomap.common.utils.date_utils import utc_now
from cryptomap.infrastructure.ports.system import IClock, ISleeper


class SystemClock(IClock):
    """Default implementation using system time."""

    def utcnow(self) -> datetime:
        """Get current UTC time."""
        return utc_now()


class AsyncioSleeper(ISleeper):
    """Default implementation backed by asyncio.sleep."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
