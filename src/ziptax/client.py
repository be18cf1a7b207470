"""
ZipTax API client.

Endpoint methods validate their parameters, then delegate to HTTPClient,
which classifies failures and retries transient ones. Payloads are returned
as decoded JSON (or text when format="xml") without schema parsing.
"""

from typing import Any, Optional

import httpx
import pydantic
import structlog

from ziptax.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    CountryCode,
    ResponseFormat,
    Settings,
    ZiptaxConfig,
    get_settings,
)
from ziptax.exceptions import ZiptaxConfigurationError
from ziptax.http.client import HTTPClient
from ziptax.retry.policy import RetryPolicy
from ziptax.validation import (
    validate_api_key,
    validate_enum,
    validate_max_length,
    validate_pattern,
    validate_required,
)

logger = structlog.get_logger(__name__)

RATES_PATH = "/request/v60/"
ACCOUNT_METRICS_PATH = "/account/v60/metrics"

COUNTRY_CODES = ("USA", "CAN")
RESPONSE_FORMATS = ("json", "xml")
MAX_LOCATION_LENGTH = 100

NUMERIC_PATTERN = r"[0-9]+"
HISTORICAL_PATTERN = r"[0-9]{4}-[0-9]{2}"
POSTAL_CODE_PATTERN = r"[0-9]{5}"


class ZiptaxClient:
    """
    Client for the ZipTax sales tax API (v6.0).

    Usage:
        async with ZiptaxClient(api_key="...") as client:
            rates = await client.get_sales_tax_by_address("200 Spectrum Center Drive, Irvine, CA")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: Optional[RetryPolicy] = None,
        enable_logging: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Create a client.

        Args:
            api_key: ZipTax API key
            base_url: API root URL
            timeout: Request timeout in seconds
            retry_policy: Retry policy for every request (None = defaults)
            enable_logging: Log requests and responses
            transport: Custom httpx transport

        Raises:
            ZiptaxValidationError: Missing or blank API key
            ZiptaxConfigurationError: Invalid timeout or other settings
        """
        validate_api_key(api_key)

        try:
            self.config = ZiptaxConfig(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout,
                retry_policy=retry_policy,
                enable_logging=enable_logging,
            )
        except pydantic.ValidationError as e:
            raise ZiptaxConfigurationError(
                f"Invalid client configuration: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

        self.http_client = HTTPClient(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
            timeout=self.config.timeout,
            retry_policy=self.config.retry_policy,
            enable_logging=self.config.enable_logging,
            transport=transport,
        )

        logger.debug(
            "ZipTax client initialized",
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            enable_logging=self.config.enable_logging,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ZiptaxClient":
        """Build a client from ZIPTAX_* environment settings."""
        config = (settings or get_settings()).client_config()
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            retry_policy=config.retry_policy,
            enable_logging=config.enable_logging,
            transport=transport,
        )

    async def get_sales_tax_by_address(
        self,
        address: str,
        taxability_code: Optional[str] = None,
        country_code: CountryCode = "USA",
        historical: Optional[str] = None,
        format: ResponseFormat = "json",
    ) -> Any:
        """
        Get sales and use tax rate details for an address.

        Args:
            address: Full or partial street address (max 100 chars)
            taxability_code: Product or service code (numeric string)
            country_code: "USA" or "CAN"
            historical: Historical rates month, YYYY-MM
            format: "json" or "xml"
        """
        validate_required(address, "address")
        validate_max_length(address, MAX_LOCATION_LENGTH, "address")

        if taxability_code:
            validate_pattern(taxability_code, NUMERIC_PATTERN, "taxabilityCode", "numeric string")
        if historical:
            validate_pattern(historical, HISTORICAL_PATTERN, "historical", "YYYY-MM format")
        validate_enum(country_code, COUNTRY_CODES, "countryCode")
        validate_enum(format, RESPONSE_FORMATS, "format")

        return await self.http_client.get(
            RATES_PATH,
            params={
                "address": address,
                "taxabilityCode": taxability_code,
                "countryCode": country_code,
                "historical": historical,
                "format": format,
            },
        )

    async def get_sales_tax_by_geolocation(
        self,
        lat: str,
        lng: str,
        country_code: CountryCode = "USA",
        historical: Optional[str] = None,
        format: ResponseFormat = "json",
    ) -> Any:
        """Get sales and use tax rate details for a latitude/longitude pair."""
        validate_required(lat, "lat")
        validate_required(lng, "lng")
        validate_max_length(lat, MAX_LOCATION_LENGTH, "lat")
        validate_max_length(lng, MAX_LOCATION_LENGTH, "lng")

        if historical:
            validate_pattern(historical, HISTORICAL_PATTERN, "historical", "YYYY-MM format")
        validate_enum(country_code, COUNTRY_CODES, "countryCode")
        validate_enum(format, RESPONSE_FORMATS, "format")

        return await self.http_client.get(
            RATES_PATH,
            params={
                "lat": lat,
                "lng": lng,
                "countryCode": country_code,
                "historical": historical,
                "format": format,
            },
        )

    async def get_rates_by_postal_code(
        self,
        postal_code: str,
        format: ResponseFormat = "json",
    ) -> Any:
        """Get tax rates for a 5-digit US postal code."""
        validate_required(postal_code, "postalcode")
        validate_pattern(postal_code, POSTAL_CODE_PATTERN, "postalcode", "5-digit US postal code")
        validate_enum(format, RESPONSE_FORMATS, "format")

        return await self.http_client.get(
            RATES_PATH,
            params={"postalcode": postal_code, "format": format},
        )

    async def get_account_metrics(self, format: Optional[ResponseFormat] = None) -> Any:
        """Get account usage metrics (request counts, limits)."""
        if format is not None:
            validate_enum(format, RESPONSE_FORMATS, "format")
        return await self.http_client.get(
            ACCOUNT_METRICS_PATH,
            params={"format": format} if format else None,
        )

    def get_config(self) -> ZiptaxConfig:
        """Return the client's (frozen) configuration."""
        return self.config

    async def close(self) -> None:
        await self.http_client.close()

    async def __aenter__(self) -> "ZiptaxClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.config.base_url})"
