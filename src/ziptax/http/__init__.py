"""
HTTP layer: transport wrapper and failure classification.

Components:
- HTTPClient: httpx-based client that runs each request through the retry engine
- classify: Map any failure onto the ZipTax error taxonomy
- TransportFailure: Transport-neutral failure shape consumed by the classifier
"""

from ziptax.http.classifier import (
    TransportFailure,
    classify,
    classify_failure,
    extract_error_message,
    parse_retry_after,
)
from ziptax.http.client import HTTPClient

__all__ = [
    "HTTPClient",
    "TransportFailure",
    "classify",
    "classify_failure",
    "extract_error_message",
    "parse_retry_after",
]
