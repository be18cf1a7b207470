"""
HTTP failure classification.

Maps a raw transport failure onto exactly one error from the ZipTax
taxonomy. The mapping is pure: no I/O, no logging, no retry decisions.

httpx exceptions are first normalized into a TransportFailure, the
transport-neutral shape the classifier works on:

    httpx.HTTPStatusError  -> has_response=True, status/body/headers set
    httpx.RequestError     -> has_response=False (DNS, refused, timeout, TLS)
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from ziptax.exceptions import (
    ZiptaxAPIError,
    ZiptaxAuthenticationError,
    ZiptaxError,
    ZiptaxNetworkError,
    ZiptaxRateLimitError,
)

AUTHENTICATION_STATUSES = frozenset({401, 403})
RATE_LIMIT_STATUS = 429

_DELTA_SECONDS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class TransportFailure:
    """
    Transport-neutral description of a failed HTTP call.

    Attributes:
        has_response: Whether an HTTP response was received
        status: HTTP status code (when has_response)
        body: Decoded response body: JSON value, text, or None
        headers: Response headers with lower-cased names
        message: Transport error message
        original: The underlying exception, for diagnostics
    """

    has_response: bool
    status: Optional[int] = None
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    message: Optional[str] = None
    original: Optional[BaseException] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", {k.lower(): v for k, v in self.headers.items()})

    @classmethod
    def from_httpx(cls, exc: httpx.HTTPError) -> "TransportFailure":
        """Normalize an httpx exception."""
        if not isinstance(exc, httpx.HTTPStatusError):
            return cls(has_response=False, message=str(exc) or None, original=exc)

        response = exc.response
        return cls(
            has_response=True,
            status=response.status_code,
            body=_decode_body(response),
            headers=dict(response.headers.items()),
            message=str(exc) or None,
            original=exc,
        )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_error_message(body: Any) -> Optional[str]:
    """
    Pull a human-readable message out of a response body.

    A string body is used verbatim. For a mapping, ``message`` is preferred
    over ``error``, each only when it is a string. Nothing else is inspected.
    """
    if isinstance(body, str):
        return body
    if isinstance(body, Mapping):
        message = body.get("message")
        if isinstance(message, str):
            return message
        error = body.get("error")
        if isinstance(error, str):
            return error
    return None


def parse_retry_after(headers: Mapping[str, str]) -> Optional[int]:
    """Return the retry-after header as whole seconds, or None if absent or not an integer."""
    value = headers.get("retry-after")
    if value is None:
        return None
    value = str(value).strip()
    if not _DELTA_SECONDS.fullmatch(value):
        return None
    return int(value)


def classify_failure(failure: TransportFailure) -> ZiptaxError:
    """Classify a normalized transport failure."""
    if not failure.has_response or failure.status is None:
        return ZiptaxNetworkError(
            failure.message or "Network request failed.",
            original_error=failure.original,
        )

    status = failure.status
    message = extract_error_message(failure.body)

    if status in AUTHENTICATION_STATUSES:
        return ZiptaxAuthenticationError(
            message or "Authentication failed. Please check your API key.",
            status_code=status,
            response_body=failure.body,
        )

    if status == RATE_LIMIT_STATUS:
        return ZiptaxRateLimitError(
            message or "Rate limit exceeded.",
            retry_after=parse_retry_after(failure.headers),
            status_code=status,
            response_body=failure.body,
        )

    return ZiptaxAPIError(
        message or f"API request failed with status {status}",
        status_code=status,
        response_body=failure.body,
    )


def classify(raw: Any) -> Exception:
    """
    Classify any failure raised while performing an HTTP call.

    - TransportFailure: classified by status (see classify_failure)
    - httpx.HTTPError: normalized, then classified
    - ZiptaxError: already classified, returned as-is
    - any other exception: passed through unclassified
    - any other value: wrapped in a generic ZiptaxError

    Args:
        raw: The failure value

    Returns:
        An exception ready to be raised
    """
    if isinstance(raw, TransportFailure):
        return classify_failure(raw)
    if isinstance(raw, httpx.HTTPError):
        return classify_failure(TransportFailure.from_httpx(raw))
    if isinstance(raw, Exception):
        return raw
    return ZiptaxError(str(raw))
