"""
Error taxonomy for the ZipTax SDK.

Every error raised by the SDK is a ZiptaxError carrying an ErrorKind tag.
Callers and the retry engine branch on ``error.kind`` rather than on the
class hierarchy, so the set of kinds is closed:

    network          - no response was obtained (DNS, refused, timeout, TLS)
    authentication   - HTTP 401/403
    rate_limit       - HTTP 429, optional retry-after hint
    api              - any other non-2xx response
    validation       - caller input rejected before any request is sent
    configuration    - invalid client or retry policy configuration
    retry_exhausted  - attempt loop ended without a result or an error
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ziptax.retry.policy import AttemptRecord


class ErrorKind(str, Enum):
    """Discriminant for ZiptaxError variants."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    API = "api"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RETRY_EXHAUSTED = "retry_exhausted"


API_ERROR_KINDS = frozenset({ErrorKind.API, ErrorKind.AUTHENTICATION, ErrorKind.RATE_LIMIT})


class ZiptaxError(Exception):
    """
    Base exception for all ZipTax SDK errors.

    Attributes:
        kind: Variant tag (class-level; None only for unclassified errors)
        message: Human-readable description
        details: Structured context for logging
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def is_api_error(self) -> bool:
        """True for variants that always carry an HTTP status code."""
        return self.kind in API_ERROR_KINDS

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else None
        return f"{self.__class__.__name__}(kind={kind!r}, message={self.message!r})"


class ZiptaxAPIError(ZiptaxError):
    """
    The API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response
        response_body: Raw decoded body (JSON object, text, or None)
    """

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: int, response_body: Any = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code
        self.response_body = response_body


class ZiptaxAuthenticationError(ZiptaxAPIError):
    """HTTP 401/403: the API key was rejected."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed. Please check your API key.",
        status_code: int = 401,
        response_body: Any = None,
    ):
        super().__init__(message, status_code, response_body)


class ZiptaxRateLimitError(ZiptaxAPIError):
    """
    HTTP 429: too many requests.

    ``retry_after`` is the server's hint in seconds, when it sent one as an
    integer. The default retry predicate does not retry this error; callers
    decide whether to wait and surface the hint to their users.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded.",
        retry_after: Optional[int] = None,
        status_code: int = 429,
        response_body: Any = None,
    ):
        super().__init__(message, status_code, response_body)
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ZiptaxValidationError(ZiptaxError):
    """
    Caller input failed validation before a request was sent.

    Attributes:
        errors: Optional per-field messages
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message, details={"errors": errors} if errors else None)
        self.errors = errors


class ZiptaxNetworkError(ZiptaxError):
    """
    No response was obtained from the API.

    Attributes:
        original_error: The transport exception, kept for diagnostics
    """

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str = "Network request failed.",
        original_error: Optional[BaseException] = None,
    ):
        details = {"error_type": type(original_error).__name__} if original_error else None
        super().__init__(message, details=details)
        self.original_error = original_error


class ZiptaxConfigurationError(ZiptaxError):
    """Client or retry policy configuration is invalid."""

    kind = ErrorKind.CONFIGURATION


class ZiptaxRetryError(ZiptaxError):
    """
    The attempt loop finished without returning or raising.

    Raised only as an invariant guard by the retry engine: under normal
    operation the last attempt's own error is propagated instead.

    Attributes:
        attempts: Number of attempts made
        last_error: Last error observed, if any
        history: Attempt records collected during the run
    """

    kind = ErrorKind.RETRY_EXHAUSTED

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
        history: "tuple[AttemptRecord, ...]" = (),
    ):
        super().__init__(
            message,
            details={
                "attempts": attempts,
                "last_error_type": type(last_error).__name__ if last_error else None,
            },
        )
        self.attempts = attempts
        self.last_error = last_error
        self.history = history
