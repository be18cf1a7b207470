"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from pathlib import Path
from typing import Any, Dict

from ziptax.config import Settings
from ziptax.retry.policy import RetryPolicy


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults (no environment or .env lookups).

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_ATTEMPTS = 5
    """
    return Settings(
        _env_file=None,
        API_KEY="test-api-key",
        BASE_URL="https://api.zip-tax.com",
        TIMEOUT=5.0,
        MAX_ATTEMPTS=3,
        RETRY_INITIAL_DELAY_MS=1000,
        RETRY_MAX_DELAY_MS=10000,
        RETRY_BACKOFF_MULTIPLIER=2.0,
        ENABLE_LOGGING=False,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def api_key() -> str:
    return "test-api-key"


@pytest.fixture
def default_policy() -> RetryPolicy:
    """RetryPolicy with the documented defaults {3, 1000ms, 10000ms, 2}."""
    return RetryPolicy()


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def v60_response(fixtures_dir: Path) -> Dict[str, Any]:
    """Successful v60 rate lookup payload."""
    with open(fixtures_dir / "sample_v60_response.json") as f:
        return json.load(f)


@pytest.fixture
def account_metrics(fixtures_dir: Path) -> Dict[str, Any]:
    """Account metrics payload."""
    with open(fixtures_dir / "sample_account_metrics.json") as f:
        return json.load(f)
