"""
Rate-limit retry for Attio API calls.
Waits until the instant the server names in Retry-After, then tries again.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

from attio_crm.core.exceptions import RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MIN_DELAY_SECONDS = 0.1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateLimitRetrier:
    """
    Retries a coroutine on ``RateLimitError`` only.

    Any other error propagates on the first attempt. A 429 means Attio did not
    process the request, so replaying it is safe for every HTTP method.
    """

    def __init__(
        self,
        max_retries: int = 5,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._sleep = sleep
        self._clock = clock

    def delay_for(self, error: RateLimitError, attempt: int) -> float:
        """Seconds to wait before the next attempt (at least 100 ms, at most ``max_delay``)."""
        if error.retry_after is not None:
            delay = (error.retry_after - self._clock()).total_seconds()
        else:
            # No Retry-After header: fall back to exponential backoff
            delay = self.base_delay * (2 ** attempt)
        return min(max(delay, MIN_DELAY_SECONDS), self.max_delay)

    async def execute_with_backoff(
        self,
        func: Callable[..., Awaitable[T]],
        *args,
        description: Optional[str] = None,
        **kwargs
    ) -> T:
        attempt = 0
        while True:
            try:
                return await func(*args, **kwargs)
            except RateLimitError as e:
                if attempt >= self.max_retries:
                    logger.error(
                        f"[Attio HTTP] Rate limit retries exhausted after {self.max_retries} attempts"
                        + (f" for {description}" if description else "")
                    )
                    raise
                delay = self.delay_for(e, attempt)
                attempt += 1
                logger.warning(
                    f"[Attio HTTP] Rate limited on attempt {attempt}/{self.max_retries + 1}"
                    + (f" for {description}" if description else "")
                    + f". Waiting {delay:.2f} seconds before retry..."
                )
                await self._sleep(delay)
