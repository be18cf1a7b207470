"""
Configuration for the ZipTax SDK.

Two layers:
    - ZiptaxConfig: explicit, frozen per-client configuration
    - Settings: environment-backed values (ZIPTAX_* variables, .env file)
      that can be turned into a ZiptaxConfig

There is no global retry policy. Each client carries its own RetryPolicy
(or None for the defaults), which is passed into the retry engine per call.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ziptax.exceptions import ZiptaxConfigurationError
from ziptax.retry.policy import RetryPolicy

DEFAULT_BASE_URL = "https://api.zip-tax.com"
DEFAULT_TIMEOUT = 30.0  # seconds

CountryCode = Literal["USA", "CAN"]
ResponseFormat = Literal["json", "xml"]


class ZiptaxConfig(BaseModel):
    """
    Resolved client configuration.

    Attributes:
        api_key: ZipTax API key (sent as X-API-Key)
        base_url: API root URL
        timeout: Request timeout in seconds
        retry_policy: Retry policy for every request (None = defaults)
        enable_logging: Log each request and response
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., description="ZipTax API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API root URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    retry_policy: Optional[InstanceOf[RetryPolicy]] = Field(
        default=None, description="Retry policy (None uses RetryPolicy defaults)"
    )
    enable_logging: bool = Field(default=False, description="Log requests and responses")


class Settings(BaseSettings):
    """SDK settings loaded from ZIPTAX_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ZIPTAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === API ===
    API_KEY: str = ""
    BASE_URL: str = DEFAULT_BASE_URL
    TIMEOUT: float = DEFAULT_TIMEOUT  # seconds

    # === Retry ===
    MAX_ATTEMPTS: int = 3
    RETRY_INITIAL_DELAY_MS: float = 1000
    RETRY_MAX_DELAY_MS: float = 10000
    RETRY_BACKOFF_MULTIPLIER: float = 2.0

    # === Logging ===
    ENABLE_LOGGING: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy described by these settings."""
        return RetryPolicy(
            max_attempts=self.MAX_ATTEMPTS,
            initial_delay_ms=self.RETRY_INITIAL_DELAY_MS,
            max_delay_ms=self.RETRY_MAX_DELAY_MS,
            backoff_multiplier=self.RETRY_BACKOFF_MULTIPLIER,
        )

    def client_config(self) -> ZiptaxConfig:
        """
        Build a ZiptaxConfig from these settings.

        Raises:
            ZiptaxConfigurationError: A setting is out of range (e.g. TIMEOUT=0)
        """
        try:
            return ZiptaxConfig(
                api_key=self.API_KEY,
                base_url=self.BASE_URL,
                timeout=self.TIMEOUT,
                retry_policy=self.retry_policy(),
                enable_logging=self.ENABLE_LOGGING,
            )
        except ValidationError as e:
            raise ZiptaxConfigurationError(
                f"Invalid settings: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton, read from the environment on first use."""
    return Settings()
