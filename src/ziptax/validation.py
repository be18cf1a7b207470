"""
Input validation for endpoint parameters.

Each validator raises ZiptaxValidationError on failure and returns None
otherwise. Validation runs before any request is sent, so these errors never
reach the retry engine.
"""

import re
from typing import Any, Iterable, Optional, Pattern, Union

from ziptax.exceptions import ZiptaxValidationError


def validate_required(value: Any, field_name: str) -> None:
    """Reject None and empty strings."""
    if value is None or value == "":
        raise ZiptaxValidationError(
            f"{field_name} is required", errors={field_name: "required"}
        )


def validate_max_length(value: str, max_length: int, field_name: str) -> None:
    if len(value) > max_length:
        raise ZiptaxValidationError(
            f"{field_name} must not exceed {max_length} characters",
            errors={field_name: f"max_length={max_length}"},
        )


def validate_pattern(
    value: str,
    pattern: Union[str, Pattern[str]],
    field_name: str,
    pattern_description: Optional[str] = None,
) -> None:
    """
    Require ``value`` to match ``pattern`` in full.

    Args:
        value: String to check
        pattern: Regex string or compiled pattern
        field_name: Parameter name used in the error message
        pattern_description: Human-readable description (defaults to the regex)
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if not compiled.fullmatch(value):
        description = pattern_description or compiled.pattern
        raise ZiptaxValidationError(
            f"{field_name} must match pattern: {description}",
            errors={field_name: description},
        )


def validate_enum(value: Any, allowed_values: Iterable[Any], field_name: str) -> None:
    allowed = list(allowed_values)
    if value not in allowed:
        joined = ", ".join(str(v) for v in allowed)
        raise ZiptaxValidationError(
            f"{field_name} must be one of: {joined}",
            errors={field_name: joined},
        )


def validate_api_key(api_key: Any) -> None:
    """API keys must be non-blank strings."""
    validate_required(api_key, "API key")
    if not isinstance(api_key, str) or not api_key.strip():
        raise ZiptaxValidationError("API key must be a non-empty string")
