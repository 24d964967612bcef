import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Keeps a minimum spacing between requests sent to one platform.

    A single instance is shared by every account of the platform, so checks
    for different streamers still queue behind the same gate.
    """

    def __init__(self, min_interval: float = 3.0,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_request(self) -> Optional[float]:
        return self._last_request

    async def wait(self) -> float:
        """Suspend until the next request may go out; returns the dispatch time"""
        async with self._lock:
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug(f"Rate limit: waiting {delay:.2f}s before next request")
                    await self._sleep(delay)
            self._last_request = self._clock()
            return self._last_request
