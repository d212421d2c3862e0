"""Bounded, fixed-delay retry of fetch rounds.

Architecture:
    A fetch round either succeeds as a whole or is repeated as a whole.
    The controller runs the round operation up to ``max_attempts`` times,
    waiting ``delay_seconds`` between attempts. Only transient failures
    (TransportError, ResponseError) are retried; anything else propagates
    on the first occurrence.

    The wait between attempts is awaited, so cancelling the consuming task
    interrupts it. An optional ``stop_event`` ends the wait early with
    RetryAbortedError, which lets a caller abort a stuck traversal without
    cancelling its task.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ...config import DEFAULT_DELAY_SECONDS, DEFAULT_MAX_ATTEMPTS
from ...core.exceptions import FatalRoundError, ResponseError, RetryAbortedError, TransportError
from .definitions import PaginationPolicy
from .telemetry import log_attempt, log_retry_wait, log_round_failed, log_transient_failure

T = TypeVar("T")

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (TransportError, ResponseError)


class RetryController:
    """Runs one logical fetch operation with bounded retries."""

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        """Initialize retry controller.

        Args:
            max_attempts: Total attempts per operation (>= 1)
            delay_seconds: Fixed wait between attempts
            sleep: Awaitable used for the wait (injectable for tests)
            stop_event: Event that aborts a pending wait when set
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._max_attempts = max_attempts
        self._delay_seconds = delay_seconds
        self._sleep = sleep
        self._stop_event = stop_event

    @classmethod
    def from_policy(
        cls,
        policy: PaginationPolicy,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        stop_event: asyncio.Event | None = None,
    ) -> RetryController:
        return cls(
            policy.max_attempts,
            policy.delay_seconds,
            sleep=sleep,
            stop_event=stop_event,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or the attempts run out.

        Args:
            operation: Zero-argument coroutine function performing one attempt

        Returns:
            Whatever the first successful attempt returned

        Raises:
            FatalRoundError: If every attempt failed transiently
            RetryAbortedError: If the stop event was set during a wait
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except TRANSIENT_ERRORS as e:
                code = getattr(e, "code", 0)
                log_transient_failure(e, code)
                if attempt >= self._max_attempts:
                    log_round_failed(e, code)
                    raise FatalRoundError(
                        f"Fetch round failed after {attempt} attempts: {e}",
                        attempts=attempt,
                        last_error=e,
                    ) from e

            log_retry_wait(self._delay_seconds)
            await self._wait(attempt)
            attempt += 1
            log_attempt(attempt, self._max_attempts)

    async def _wait(self, attempt: int) -> None:
        """Wait before the next attempt, ending early if the stop event fires."""
        if self._stop_event is None:
            await self._sleep(self._delay_seconds)
            return

        if self._stop_event.is_set():
            raise RetryAbortedError(f"Retry aborted after attempt {attempt}", attempt=attempt)

        sleeper = asyncio.ensure_future(self._sleep(self._delay_seconds))
        stopper = asyncio.ensure_future(self._stop_event.wait())
        try:
            done, _ = await asyncio.wait({sleeper, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, stopper):
                if not task.done():
                    task.cancel()
            await asyncio.gather(sleeper, stopper, return_exceptions=True)

        if stopper in done:
            raise RetryAbortedError(f"Retry aborted after attempt {attempt}", attempt=attempt)
