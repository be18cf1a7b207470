"""
Concurrent lookups with the ZipTax SDK.

Each request runs its own retry loop; concurrent requests share nothing but
the connection pool.

Usage:
    ZIPTAX_API_KEY=your-api-key python examples/concurrent_usage.py
"""

import asyncio
import sys

import structlog

from ziptax import RetryPolicy, ZiptaxClient
from ziptax.config import get_settings
from ziptax.logging_config import configure_logging

logger = structlog.get_logger(__name__)

ADDRESSES = [
    "200 Spectrum Center Drive, Irvine, CA 92618",
    "1600 Amphitheatre Parkway, Mountain View, CA 94043",
    "350 Fifth Avenue, New York, NY 10118",
]


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    if not settings.API_KEY:
        logger.error("ZIPTAX_API_KEY is not set")
        return 1

    policy = RetryPolicy(max_attempts=4, initial_delay_ms=500, max_delay_ms=4000)
    async with ZiptaxClient(api_key=settings.API_KEY, retry_policy=policy) as client:
        results = await asyncio.gather(
            *(client.get_sales_tax_by_address(address) for address in ADDRESSES)
        )
        for address, result in zip(ADDRESSES, results):
            summaries = result.get("taxSummaries") or [{}]
            logger.info("Rate", address=address, total_rate=summaries[0].get("rate"))

        usa, canada = await asyncio.gather(
            client.get_sales_tax_by_address("1600 Amphitheatre Parkway, Mountain View, CA"),
            client.get_sales_tax_by_address("301 Front St W, Toronto, ON", country_code="CAN"),
        )
        logger.info(
            "Country comparison",
            usa_rate=(usa.get("taxSummaries") or [{}])[0].get("rate"),
            canada_rate=(canada.get("taxSummaries") or [{}])[0].get("rate"),
        )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
