"""
Readiness Waiting

Architectural Intent:
- The platform is eventually consistent right after a mutation (restart,
  deployment trigger), so a few read paths wait before querying
- pause(): a single fixed delay, never a loop
- wait_until(): explicit readiness poll, bounded retry with exponential
  backoff against a status predicate (tenacity)

Design Decisions:
- Remote errors raised by the poll are never retried here
- When attempts run out, the last observed value is returned, not an error
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class ReadinessWaiter:
    def __init__(
        self,
        delay_seconds: float = 5.0,
        max_attempts: int = 6,
        backoff_min: float = 1.0,
        backoff_max: float = 10.0,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.delay_seconds = delay_seconds
        self.max_attempts = max_attempts
        self.backoff_min = backoff_min
        self.backoff_max = backoff_max
        self._sleep = sleep or asyncio.sleep

    async def pause(self) -> None:
        if self.delay_seconds > 0:
            logger.debug("Waiting %.1fs for platform state to settle", self.delay_seconds)
            await self._sleep(self.delay_seconds)

    async def wait_until(
        self,
        poll: Callable[[], Awaitable[Any]],
        is_ready: Callable[[Any], bool],
    ) -> Any:
        """Call poll until is_ready(result) or attempts run out; return the last result."""

        def _log_retry(retry_state: Any) -> None:
            logger.debug(
                "Not ready after attempt %d, retrying", retry_state.attempt_number
            )

        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.backoff_min, min=self.backoff_min, max=self.backoff_max
            ),
            retry=retry_if_result(lambda result: not is_ready(result)),
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
            before_sleep=_log_retry,
        )
        return await retrying(poll)
