"""
Basic usage of the ZipTax SDK.

Usage:
    ZIPTAX_API_KEY=your-api-key python examples/basic_usage.py
"""

import asyncio
import sys

import structlog

from ziptax import ZiptaxClient
from ziptax.config import get_settings
from ziptax.logging_config import configure_logging

logger = structlog.get_logger(__name__)


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    if not settings.API_KEY:
        logger.error("ZIPTAX_API_KEY is not set")
        return 1

    async with ZiptaxClient.from_settings(settings) as client:
        rates = await client.get_sales_tax_by_address("200 Spectrum Center Drive, Irvine, CA 92618")
        summary = rates["taxSummaries"][0]
        logger.info(
            "Rates by address",
            normalized_address=rates["addressDetail"]["normalizedAddress"],
            total_rate=summary["rate"],
        )

        geo = await client.get_sales_tax_by_geolocation("33.65253", "-117.74794")
        logger.info("Rates by geolocation", total_rate=geo["taxSummaries"][0]["rate"])

        metrics = await client.get_account_metrics()
        logger.info(
            "Account metrics",
            core_request_count=metrics["core_request_count"],
            core_request_limit=metrics["core_request_limit"],
        )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
