"""
Retry with bounded exponential backoff.

Main Components:
    - execute_with_retry: Run a coroutine function under a RetryPolicy
    - RetryPolicy: Immutable policy (attempts, delays, predicate)
    - default_should_retry: Retry network errors and 5xx API errors
    - calculate_delay: Deterministic backoff for a failed attempt

Usage:
    >>> from ziptax.retry import RetryPolicy, execute_with_retry
    >>> data = await execute_with_retry(fetch, RetryPolicy(max_attempts=5))
"""

from ziptax.retry.engine import calculate_delay, execute_with_retry
from ziptax.retry.policy import AttemptRecord, RetryPolicy, default_should_retry

__all__ = [
    "AttemptRecord",
    "RetryPolicy",
    "calculate_delay",
    "default_should_retry",
    "execute_with_retry",
]
