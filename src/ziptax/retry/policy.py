"""
Retry policy and attempt records.

RetryPolicy is an explicit, immutable configuration value handed to the
retry engine per call. There is no module-level mutable default: callers
that pass nothing get a fresh RetryPolicy() with the documented defaults.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, Optional

from ziptax.exceptions import ErrorKind, ZiptaxConfigurationError

ShouldRetry = Callable[[BaseException, int], bool]


def default_should_retry(error: BaseException, attempt: int) -> bool:
    """
    Retry network failures and 5xx API errors.

    Authentication (401/403), rate limit (429), any other 4xx, validation
    errors and errors that carry no ErrorKind are never retried.
    """
    kind = getattr(error, "kind", None)
    if kind == ErrorKind.NETWORK:
        return True
    if kind == ErrorKind.API:
        status_code = getattr(error, "status_code", None)
        return status_code is not None and status_code >= 500
    return False


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    # NaN fails every range comparison below
    return _is_int(value) or (isinstance(value, float) and not math.isnan(value))


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff policy.

    Delays are in milliseconds. The delay after failed attempt ``n`` is
    ``min(initial_delay_ms * backoff_multiplier ** (n - 1), max_delay_ms)``.

    Attributes:
        max_attempts: Total attempts including the first (>= 1)
        initial_delay_ms: Delay after the first failure (>= 0)
        max_delay_ms: Upper bound for any delay (>= initial_delay_ms)
        backoff_multiplier: Growth factor between delays (>= 1)
        should_retry: Predicate (error, attempt) -> bool
    """

    max_attempts: int = 3
    initial_delay_ms: float = 1000
    max_delay_ms: float = 10000
    backoff_multiplier: float = 2.0
    should_retry: ShouldRetry = field(default=default_should_retry, compare=False)

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        if not _is_int(self.max_attempts):
            raise ZiptaxConfigurationError(
                f"max_attempts must be an integer, got {self.max_attempts!r}"
            )
        for name in ("initial_delay_ms", "max_delay_ms", "backoff_multiplier"):
            value = getattr(self, name)
            if not _is_number(value):
                raise ZiptaxConfigurationError(f"{name} must be a number, got {value!r}")
        if self.max_attempts < 1:
            raise ZiptaxConfigurationError(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )
        if self.initial_delay_ms < 0:
            raise ZiptaxConfigurationError(
                f"initial_delay_ms must be >= 0, got {self.initial_delay_ms}"
            )
        if self.max_delay_ms < self.initial_delay_ms:
            raise ZiptaxConfigurationError(
                f"max_delay_ms ({self.max_delay_ms}) must be >= "
                f"initial_delay_ms ({self.initial_delay_ms})"
            )
        if self.backoff_multiplier < 1:
            raise ZiptaxConfigurationError(
                f"backoff_multiplier must be >= 1, got {self.backoff_multiplier}"
            )
        if not callable(self.should_retry):
            raise ZiptaxConfigurationError("should_retry must be callable")

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None) -> "RetryPolicy":
        """
        Build a policy from a partial mapping merged onto the defaults.

        Keys whose value is None are ignored, so optional settings can be
        passed straight through.

        Raises:
            ZiptaxConfigurationError: Unknown key or invalid value
        """
        if not overrides:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ZiptaxConfigurationError(
                f"Unknown retry policy option(s): {', '.join(unknown)}"
            )
        return cls(**{k: v for k, v in overrides.items() if v is not None})


@dataclass(frozen=True)
class AttemptRecord:
    """
    One failed attempt observed by the retry engine.

    Attributes:
        attempt: 1-based attempt index
        error: Error raised by the operation
        delay_ms: Backoff scheduled after this attempt (None if terminal)
    """

    attempt: int
    error: BaseException
    delay_ms: Optional[float] = None
