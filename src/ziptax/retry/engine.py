"""
Retry engine with bounded exponential backoff.

Runs a zero-argument coroutine function until it returns, the policy's
predicate declines a retry, or max_attempts is reached. Attempts are strictly
sequential and the backoff is an ``asyncio.sleep`` suspension point, so other
tasks keep running while an invocation waits.

Usage:
    result = await execute_with_retry(lambda: client.fetch(), RetryPolicy(max_attempts=5))
"""

import asyncio
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar, Union

import structlog

from ziptax.exceptions import ZiptaxRetryError
from ziptax.retry.policy import AttemptRecord, RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PolicyLike = Union[RetryPolicy, Mapping[str, Any], None]


def resolve_policy(policy: PolicyLike) -> RetryPolicy:
    """Accept a RetryPolicy, a partial mapping of overrides, or None."""
    if isinstance(policy, RetryPolicy):
        return policy
    return RetryPolicy.from_overrides(policy)


def calculate_delay(attempt: int, policy: RetryPolicy) -> float:
    """
    Backoff in milliseconds after failed attempt ``attempt`` (1-based).

    No jitter: the result depends only on the policy and the attempt index.
    Growth too large for a float is clamped to ``max_delay_ms``.
    """
    if policy.initial_delay_ms == 0:
        return 0
    try:
        delay = policy.initial_delay_ms * (policy.backoff_multiplier ** (attempt - 1))
    except OverflowError:
        return policy.max_delay_ms
    return min(delay, policy.max_delay_ms)


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: PolicyLike = None,
) -> T:
    """
    Execute ``operation`` under the given retry policy.

    The error that stops the loop (predicate declined, or last attempt) is
    re-raised unchanged. Cancellation and other BaseExceptions are never
    intercepted.

    Args:
        operation: Zero-argument callable returning an awaitable
        policy: RetryPolicy, partial mapping of policy fields, or None

    Returns:
        The operation's result from the first successful attempt

    Raises:
        Exception: The terminal error raised by ``operation``
        ZiptaxConfigurationError: Invalid policy
        ZiptaxRetryError: The attempt loop ended without a result
    """
    opts = resolve_policy(policy)
    history: list[AttemptRecord] = []
    last_error: Optional[Exception] = None

    for attempt in range(1, opts.max_attempts + 1):
        try:
            result = await operation()
        except Exception as e:
            last_error = e
            is_last_attempt = attempt == opts.max_attempts
            should_retry = opts.should_retry(e, attempt)

            if is_last_attempt or not should_retry:
                history.append(AttemptRecord(attempt=attempt, error=e))
                logger.warning(
                    "Request failed, not retrying",
                    attempt=attempt,
                    max_attempts=opts.max_attempts,
                    error_type=type(e).__name__,
                    error_kind=_kind_of(e),
                    reason="max_attempts" if is_last_attempt else "not_retryable",
                )
                raise

            delay_ms = calculate_delay(attempt, opts)
            history.append(AttemptRecord(attempt=attempt, error=e, delay_ms=delay_ms))
            logger.info(
                f"Retrying after {delay_ms}ms (attempt {attempt + 1}/{opts.max_attempts})",
                attempt=attempt,
                delay_ms=delay_ms,
                error_type=type(e).__name__,
                error_kind=_kind_of(e),
            )
            await asyncio.sleep(delay_ms / 1000)
            continue

        if attempt > 1:
            logger.info("Request succeeded after retry", attempts=attempt)
        return result

    # Should not reach here: the last attempt either returns or raises
    raise ZiptaxRetryError(
        f"Maximum retry attempts ({opts.max_attempts}) exceeded",
        attempts=opts.max_attempts,
        last_error=last_error,
        history=tuple(history),
    )


def _kind_of(error: BaseException) -> Optional[str]:
    kind = getattr(error, "kind", None)
    return kind.value if kind is not None else None
