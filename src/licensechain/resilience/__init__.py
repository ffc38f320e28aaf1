"""Resilience primitives for outbound calls.

Retry with exponential backoff, sync and async, with optional cancellation.
"""

from licensechain.resilience.retry import (
    RetryPolicy,
    compute_backoff_delay,
    execute_with_retry,
    execute_with_retry_async,
    get_retry_schedule,
)

__all__ = [
    "RetryPolicy",
    "compute_backoff_delay",
    "execute_with_retry",
    "execute_with_retry_async",
    "get_retry_schedule",
]
