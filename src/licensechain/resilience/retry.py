"""Retry with exponential backoff.

Runs a zero-argument operation until it succeeds or the policy is exhausted:

- attempt 1 runs immediately
- after failed attempt N (N < max_attempts) wait initial_delay * multiplier^(N-1)
- a failure carrying a numeric ``retry_after`` (seconds) waits at least that long
- no wait after the final failed attempt
- exhaustion raises RetryExhaustedError chained from the last failure

Backoff schedule (initial_delay=1s, multiplier=2, max_attempts=5):
  Attempt 1: immediate
  Attempt 2: after 1s
  Attempt 3: after 2s
  Attempt 4: after 4s
  Attempt 5: after 8s

The sync executor blocks the calling thread between attempts; the async
executor suspends the calling task only. Both accept an optional event that
cancels the loop while it is waiting, raising RetryCancelledError.

Stateless: policies are immutable and each call keeps its own counters.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Final, TypeVar

from licensechain.errors import ConfigurationError, RetryCancelledError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS: Final[int] = 3
DEFAULT_INITIAL_DELAY_SECONDS: Final[float] = 1.0
DEFAULT_BACKOFF_MULTIPLIER: Final[float] = 2.0
JITTER_FRACTION: Final[float] = 0.1


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration (immutable).

    Attributes:
        max_attempts: Total attempts including the first one (>= 1).
        initial_delay: Seconds to wait after the first failure (> 0).
        backoff_multiplier: Factor applied to the delay after each wait (>= 1).
        max_delay: Optional cap on a single wait, in seconds.
        jitter: If True, add up to 10% random delay to each wait.
        retry_on: Exception types treated as retryable failures. Anything else
            propagates from the attempt that raised it.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    max_delay: float | None = None
    jitter: bool = False
    retry_on: tuple[type[BaseException], ...] = (Exception,)

    def __post_init__(self) -> None:
        """Validate policy values."""
        if (
            isinstance(self.max_attempts, bool)
            or not isinstance(self.max_attempts, int)
            or self.max_attempts < 1
        ):
            raise ConfigurationError(
                f"max_attempts must be an integer >= 1, got {self.max_attempts!r}"
            )
        # Written positively so NaN fails every check.
        if not (math.isfinite(self.initial_delay) and self.initial_delay > 0):
            raise ConfigurationError(
                f"initial_delay must be a finite number > 0, got {self.initial_delay!r}"
            )
        if not (math.isfinite(self.backoff_multiplier) and self.backoff_multiplier >= 1):
            raise ConfigurationError(
                "backoff_multiplier must be a finite number >= 1, "
                f"got {self.backoff_multiplier!r}"
            )
        if self.max_delay is not None and not (
            math.isfinite(self.max_delay) and self.max_delay > 0
        ):
            raise ConfigurationError(
                f"max_delay must be a finite number > 0, got {self.max_delay!r}"
            )
        if not self.retry_on:
            raise ConfigurationError("retry_on must name at least one exception type")


def compute_backoff_delay(policy: RetryPolicy, retry_index: int) -> float:
    """Compute the wait before retry number ``retry_index + 1``.

    Args:
        policy: Retry policy.
        retry_index: Zero-based index of the retry (0 = wait after first failure).

    Returns:
        Delay in seconds; 0.0 for a negative index.

    Example:
        >>> policy = RetryPolicy(max_attempts=4, initial_delay=0.1)
        >>> [compute_backoff_delay(policy, i) for i in range(3)]
        [0.1, 0.2, 0.4]
    """
    if retry_index < 0:
        return 0.0

    delay = policy.initial_delay * (policy.backoff_multiplier**retry_index)
    if policy.max_delay is not None:
        delay = min(delay, policy.max_delay)

    if policy.jitter:
        delay += delay * JITTER_FRACTION * random.random()

    return delay


def get_retry_schedule(policy: RetryPolicy) -> list[float]:
    """List the waits between attempts (``max_attempts - 1`` entries).

    Jitter is ignored so the schedule is deterministic.
    """
    if policy.jitter:
        policy = RetryPolicy(
            max_attempts=policy.max_attempts,
            initial_delay=policy.initial_delay,
            backoff_multiplier=policy.backoff_multiplier,
            max_delay=policy.max_delay,
            retry_on=policy.retry_on,
        )
    return [compute_backoff_delay(policy, i) for i in range(policy.max_attempts - 1)]


def _delay_after_failure(policy: RetryPolicy, retry_index: int, failure: BaseException) -> float:
    """Backoff delay, raised to the failure's ``retry_after`` hint when it has one.

    A server-provided hint (e.g. RateLimitError from a 429 with Retry-After)
    is a lower bound on the wait and is not capped by ``max_delay``.
    """
    delay = compute_backoff_delay(policy, retry_index)
    retry_after = getattr(failure, "retry_after", None)
    if (
        isinstance(retry_after, int | float)
        and not isinstance(retry_after, bool)
        and math.isfinite(retry_after)
        and retry_after > delay
    ):
        return float(retry_after)
    return delay


def execute_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    *,
    cancel_event: threading.Event | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation`` with retries, blocking the thread between attempts.

    Args:
        operation: Zero-argument callable. A raised exception matching
            ``policy.retry_on`` counts as a failed attempt.
        policy: Retry policy.
        cancel_event: Optional event; if set while waiting, the loop stops.
        sleep: Wait function used when no cancel_event is given.

    Returns:
        The operation's return value.

    Raises:
        RetryExhaustedError: All attempts failed.
        RetryCancelledError: cancel_event was set during a wait.
    """
    attempt = 1
    while True:
        try:
            return operation()
        except policy.retry_on as exc:
            last_failure = exc

        if attempt >= policy.max_attempts:
            logger.error("Retry exhausted after %d attempt(s): %r", attempt, last_failure)
            raise RetryExhaustedError(attempt, last_failure) from last_failure

        delay = _delay_after_failure(policy, attempt - 1, last_failure)
        logger.warning(
            "Attempt %d/%d failed (%s); retrying in %.3fs",
            attempt,
            policy.max_attempts,
            type(last_failure).__name__,
            delay,
        )

        if cancel_event is not None:
            if cancel_event.wait(delay):
                raise RetryCancelledError(attempt, last_failure) from last_failure
        else:
            sleep(delay)

        attempt += 1


async def _wait_or_cancel(delay: float, cancel_event: asyncio.Event) -> bool:
    """Wait up to ``delay`` seconds; return True if the event fired first."""
    if cancel_event.is_set():
        return True
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except TimeoutError:
        return False
    return True


async def execute_with_retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    cancel_event: asyncio.Event | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Async counterpart of execute_with_retry.

    The calling task is suspended during waits; other tasks keep running.
    ``asyncio.CancelledError`` from the task itself is never swallowed.

    Raises:
        RetryExhaustedError: All attempts failed.
        RetryCancelledError: cancel_event was set during a wait.
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except policy.retry_on as exc:
            last_failure = exc

        if attempt >= policy.max_attempts:
            logger.error("Retry exhausted after %d attempt(s): %r", attempt, last_failure)
            raise RetryExhaustedError(attempt, last_failure) from last_failure

        delay = _delay_after_failure(policy, attempt - 1, last_failure)
        logger.warning(
            "Attempt %d/%d failed (%s); retrying in %.3fs",
            attempt,
            policy.max_attempts,
            type(last_failure).__name__,
            delay,
        )

        if cancel_event is not None:
            if await _wait_or_cancel(delay, cancel_event):
                raise RetryCancelledError(attempt, last_failure) from last_failure
        else:
            await sleep(delay)

        attempt += 1
