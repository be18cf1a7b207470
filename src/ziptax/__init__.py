"""
ZipTax Python SDK.

Async client for the ZipTax sales tax rate API with typed errors and
automatic retry of transient failures.

Architecture: ZiptaxClient (validation) -> HTTPClient (httpx) -> retry engine
-> classifier (HTTP failure -> ZiptaxError)
"""

from ziptax.__version__ import __version__
from ziptax.client import ZiptaxClient
from ziptax.config import Settings, ZiptaxConfig
from ziptax.exceptions import (
    ErrorKind,
    ZiptaxAPIError,
    ZiptaxAuthenticationError,
    ZiptaxConfigurationError,
    ZiptaxError,
    ZiptaxNetworkError,
    ZiptaxRateLimitError,
    ZiptaxRetryError,
    ZiptaxValidationError,
)
from ziptax.http.classifier import TransportFailure, classify
from ziptax.retry import RetryPolicy, default_should_retry, execute_with_retry

__all__ = [
    "__version__",
    "ZiptaxClient",
    "ZiptaxConfig",
    "Settings",
    "ErrorKind",
    "ZiptaxError",
    "ZiptaxAPIError",
    "ZiptaxAuthenticationError",
    "ZiptaxRateLimitError",
    "ZiptaxValidationError",
    "ZiptaxNetworkError",
    "ZiptaxRetryError",
    "ZiptaxConfigurationError",
    "TransportFailure",
    "classify",
    "RetryPolicy",
    "default_should_retry",
    "execute_with_retry",
]
