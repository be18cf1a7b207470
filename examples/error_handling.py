"""
Error handling with the ZipTax SDK.

Branches on ``error.kind`` to decide what to tell the user.

Usage:
    ZIPTAX_API_KEY=your-api-key python examples/error_handling.py
"""

import asyncio
import sys
from typing import Optional

import structlog

from ziptax import ErrorKind, RetryPolicy, ZiptaxClient, ZiptaxError
from ziptax.config import get_settings
from ziptax.logging_config import configure_logging

logger = structlog.get_logger(__name__)

DEFAULT_RATE = 0.0


def describe(error: ZiptaxError) -> str:
    """User-facing message for each error kind."""
    if error.kind == ErrorKind.VALIDATION:
        return f"Invalid input: {error.message}"
    if error.kind == ErrorKind.AUTHENTICATION:
        return "Authentication failed, check your API key"
    if error.kind == ErrorKind.RATE_LIMIT:
        if error.retry_after:
            return f"Rate limited, retry after {error.retry_after} seconds"
        return "Rate limited, try again later"
    if error.kind == ErrorKind.NETWORK:
        return "Network error, check your internet connection"
    if error.kind == ErrorKind.API:
        return f"API error {error.status_code}: {error.message}"
    return f"{type(error).__name__}: {error.message}"


async def rate_or_default(client: ZiptaxClient, address: str) -> float:
    """Graceful degradation: fall back to a default rate on SDK errors."""
    try:
        result = await client.get_sales_tax_by_address(address)
    except ZiptaxError as e:
        logger.warning("Falling back to default rate", reason=describe(e))
        return DEFAULT_RATE
    summaries: Optional[list] = result.get("taxSummaries")
    return summaries[0]["rate"] if summaries else DEFAULT_RATE


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    if not settings.API_KEY:
        logger.error("ZIPTAX_API_KEY is not set")
        return 1

    policy = RetryPolicy(max_attempts=3, initial_delay_ms=1000)
    async with ZiptaxClient(api_key=settings.API_KEY, retry_policy=policy) as client:
        # Validation errors are raised before any request is sent
        try:
            await client.get_sales_tax_by_address("")
        except ZiptaxError as e:
            logger.error("Lookup failed", reason=describe(e), errors=getattr(e, "errors", None))

        # Unreachable host: network errors are retried, then surfaced
        async with ZiptaxClient(
            api_key=settings.API_KEY,
            base_url="https://unreachable.invalid",
            retry_policy=RetryPolicy(max_attempts=2, initial_delay_ms=200),
        ) as offline:
            try:
                await offline.get_account_metrics()
            except ZiptaxError as e:
                logger.error("Lookup failed", reason=describe(e))

        rate = await rate_or_default(client, "200 Spectrum Center Drive, Irvine, CA")
        logger.info("Rate", total_rate=rate)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
