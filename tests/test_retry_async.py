"""Tests for the async retry executor.

Coroutines are driven with asyncio.run so no async pytest plugin is needed.
"""

from __future__ import annotations

import asyncio
import time

import pytest

from licensechain.errors import RetryCancelledError, RetryExhaustedError
from licensechain.resilience.retry import RetryPolicy, execute_with_retry_async


class AsyncFlakyOperation:
    def __init__(self, failures: int, result: str = "ok") -> None:
        self.failures = failures
        self.result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise TimeoutError(f"failure #{self.calls}")
        return self.result


class TestExecuteWithRetryAsync:
    def test_fails_twice_then_succeeds(self) -> None:
        waits: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            waits.append(seconds)

        op = AsyncFlakyOperation(failures=2)
        policy = RetryPolicy(max_attempts=3, initial_delay=0.1, backoff_multiplier=2)

        result = asyncio.run(execute_with_retry_async(op, policy, sleep=fake_sleep))

        assert result == "ok"
        assert op.calls == 3
        assert waits == pytest.approx([0.1, 0.2])

    def test_exhausted(self) -> None:
        async def fake_sleep(seconds: float) -> None:
            return None

        op = AsyncFlakyOperation(failures=100)

        with pytest.raises(RetryExhaustedError) as exc_info:
            asyncio.run(
                execute_with_retry_async(op, RetryPolicy(max_attempts=4), sleep=fake_sleep)
            )

        assert op.calls == 4
        assert exc_info.value.attempts == 4
        assert isinstance(exc_info.value.last_failure, TimeoutError)

    def test_wait_does_not_block_other_tasks(self) -> None:
        ticks: list[float] = []

        async def ticker() -> None:
            for _ in range(5):
                ticks.append(time.monotonic())
                await asyncio.sleep(0.01)

        async def main() -> str:
            op = AsyncFlakyOperation(failures=1)
            policy = RetryPolicy(max_attempts=2, initial_delay=0.1)
            result, _ = await asyncio.gather(execute_with_retry_async(op, policy), ticker())
            return result

        assert asyncio.run(main()) == "ok"
        assert len(ticks) == 5

    def test_cancel_event_during_wait(self) -> None:
        async def main() -> None:
            event = asyncio.Event()
            op = AsyncFlakyOperation(failures=100)
            policy = RetryPolicy(max_attempts=5, initial_delay=30.0)
            asyncio.get_running_loop().call_later(0.05, event.set)
            await execute_with_retry_async(op, policy, cancel_event=event)

        start = time.monotonic()
        with pytest.raises(RetryCancelledError) as exc_info:
            asyncio.run(main())

        assert time.monotonic() - start < 5.0
        assert exc_info.value.attempts == 1

    def test_unset_cancel_event_still_retries(self) -> None:
        async def main() -> str:
            event = asyncio.Event()
            op = AsyncFlakyOperation(failures=1)
            return await execute_with_retry_async(
                op, RetryPolicy(max_attempts=2, initial_delay=0.01), cancel_event=event
            )

        assert asyncio.run(main()) == "ok"

    def test_task_cancellation_propagates(self) -> None:
        async def main() -> None:
            op = AsyncFlakyOperation(failures=100)
            task = asyncio.create_task(
                execute_with_retry_async(op, RetryPolicy(max_attempts=5, initial_delay=30.0))
            )
            await asyncio.sleep(0.05)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(main())


class TestRetryAfterHintAsync:
    def test_hint_extends_wait(self) -> None:
        waits: list[float] = []
        calls = 0

        class Throttled(Exception):
            retry_after = 3.0

        async def op() -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise Throttled()
            return "ok"

        async def fake_sleep(delay: float) -> None:
            waits.append(delay)

        policy = RetryPolicy(max_attempts=2, initial_delay=0.1)
        assert asyncio.run(execute_with_retry_async(op, policy, sleep=fake_sleep)) == "ok"
        assert waits == [3.0]
