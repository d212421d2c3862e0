"""Unit tests for RetryController."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from simaland.api.core import (
    ContractError,
    FatalRoundError,
    ResponseError,
    RetryAbortedError,
    TransportError,
)
from simaland.api.runtime.pagination import PaginationPolicy, RetryController

RETRY_LOGGER = "simaland.api.runtime.pagination.telemetry"


class FlakyOperation:
    """Operation that fails a fixed number of times before succeeding."""

    def __init__(self, failures: list[Exception], result: object = "ok") -> None:
        self.failures = list(failures)
        self.result = result
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.result


class TestRetryController:
    """Test attempt counting, waits and error propagation."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self):
        sleep = AsyncMock()
        controller = RetryController(3, 5, sleep=sleep)
        operation = FlakyOperation([])

        assert await controller.run(operation) == "ok"
        assert operation.calls == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self):
        sleep = AsyncMock()
        controller = RetryController(5, 2.5, sleep=sleep)
        operation = FlakyOperation(
            [TransportError("reset"), ResponseError("HTTP 503", status_code=503)]
        )

        assert await controller.run(operation) == "ok"
        assert operation.calls == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(2.5)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts", [1, 2, 4])
    async def test_exactly_max_attempts_then_fatal(self, max_attempts):
        """K attempts and K-1 waits, then FatalRoundError chained to the last error."""
        sleep = AsyncMock()
        controller = RetryController(max_attempts, 1, sleep=sleep)
        errors = [TransportError(f"timeout {i}") for i in range(max_attempts)]
        operation = FlakyOperation(list(errors))

        with pytest.raises(FatalRoundError) as exc_info:
            await controller.run(operation)

        assert operation.calls == max_attempts
        assert sleep.await_count == max_attempts - 1
        assert exc_info.value.attempts == max_attempts
        assert exc_info.value.last_error is errors[-1]
        assert exc_info.value.__cause__ is errors[-1]

    @pytest.mark.asyncio
    async def test_fatal_error_keeps_status_code(self):
        controller = RetryController(1, 0, sleep=AsyncMock())
        operation = FlakyOperation([ResponseError("HTTP 500", status_code=500)])

        with pytest.raises(FatalRoundError) as exc_info:
            await controller.run(operation)

        assert exc_info.value.code == 500

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [ContractError("bad request"), KeyError("x"), ValueError("y")])
    async def test_non_transient_errors_are_not_retried(self, error):
        sleep = AsyncMock()
        controller = RetryController(5, 1, sleep=sleep)
        operation = FlakyOperation([error])

        with pytest.raises(type(error)):
            await controller.run(operation)

        assert operation.calls == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_attempt_counter_resets_per_run(self):
        sleep = AsyncMock()
        controller = RetryController(2, 0, sleep=sleep)

        assert await controller.run(FlakyOperation([TransportError("a")])) == "ok"
        assert await controller.run(FlakyOperation([TransportError("b")])) == "ok"

    @pytest.mark.asyncio
    async def test_log_events(self, caplog):
        caplog.set_level(logging.INFO, logger=RETRY_LOGGER)
        controller = RetryController(2, 30, sleep=AsyncMock())
        operation = FlakyOperation(
            [
                ResponseError("HTTP 502", status_code=502),
                ResponseError("HTTP 503", status_code=503),
            ]
        )

        with pytest.raises(FatalRoundError):
            await controller.run(operation)

        records = [(r.levelname, r.getMessage()) for r in caplog.records]
        assert records == [
            ("WARNING", "HTTP 502"),
            ("INFO", "Waiting 30s before retry"),
            ("INFO", "Attempt 2 of 2"),
            ("WARNING", "HTTP 503"),
            ("ERROR", "HTTP 503"),
        ]
        assert caplog.records[0].code == 502
        assert caplog.records[-1].code == 503

    def test_from_policy(self):
        controller = RetryController.from_policy(PaginationPolicy(max_attempts=7))
        assert controller.max_attempts == 7

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            RetryController(0, 1)
        with pytest.raises(ValueError):
            RetryController(1, -1)


class TestRetryAbort:
    """Test interrupting the wait between attempts."""

    @pytest.mark.asyncio
    async def test_stop_event_interrupts_wait(self):
        stop_event = asyncio.Event()
        controller = RetryController(5, 60, stop_event=stop_event)
        operation = FlakyOperation([TransportError("down")] * 5)

        task = asyncio.create_task(controller.run(operation))
        await asyncio.sleep(0.05)
        stop_event.set()

        with pytest.raises(RetryAbortedError) as exc_info:
            await asyncio.wait_for(task, timeout=1.0)

        assert exc_info.value.attempt == 1
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_already_set_event_aborts_immediately(self):
        stop_event = asyncio.Event()
        stop_event.set()
        sleep = AsyncMock()
        controller = RetryController(5, 60, sleep=sleep, stop_event=stop_event)

        with pytest.raises(RetryAbortedError):
            await controller.run(FlakyOperation([TransportError("down")]))

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unset_event_lets_wait_finish(self):
        stop_event = asyncio.Event()
        sleep = AsyncMock()
        controller = RetryController(3, 60, sleep=sleep, stop_event=stop_event)

        assert await controller.run(FlakyOperation([TransportError("down")])) == "ok"
        sleep.assert_awaited_once_with(60)

    @pytest.mark.asyncio
    async def test_task_cancellation_interrupts_wait(self):
        controller = RetryController(5, 60)
        task = asyncio.create_task(controller.run(FlakyOperation([TransportError("down")] * 5)))
        await asyncio.sleep(0.05)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
