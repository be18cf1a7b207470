"""
Unit tests for configuration (ZiptaxConfig, Settings) and logging setup.
"""

import logging

import pydantic
import pytest

from ziptax.config import Settings, ZiptaxConfig, get_settings
from ziptax.exceptions import ZiptaxConfigurationError
from ziptax.logging_config import configure_logging
from ziptax.retry.policy import RetryPolicy


def test_ziptax_config_defaults():
    config = ZiptaxConfig(api_key="k")

    assert config.base_url == "https://api.zip-tax.com"
    assert config.timeout == 30.0
    assert config.retry_policy is None
    assert config.enable_logging is False


def test_ziptax_config_is_frozen():
    config = ZiptaxConfig(api_key="k")

    with pytest.raises(pydantic.ValidationError):
        config.timeout = 1.0


def test_ziptax_config_rejects_non_policy():
    with pytest.raises(pydantic.ValidationError):
        ZiptaxConfig(api_key="k", retry_policy={"max_attempts": 2})


def test_settings_retry_policy(test_settings):
    test_settings.RETRY_INITIAL_DELAY_MS = 500
    test_settings.RETRY_BACKOFF_MULTIPLIER = 3

    policy = test_settings.retry_policy()

    assert isinstance(policy, RetryPolicy)
    assert policy.max_attempts == 3
    assert policy.initial_delay_ms == 500
    assert policy.backoff_multiplier == 3


def test_settings_invalid_retry_values_raise(test_settings):
    test_settings.MAX_ATTEMPTS = 0

    with pytest.raises(ZiptaxConfigurationError):
        test_settings.retry_policy()


def test_settings_client_config(test_settings):
    config = test_settings.client_config()

    assert config.api_key == "test-api-key"
    assert config.timeout == 5.0
    assert config.retry_policy == RetryPolicy()


def test_settings_client_config_invalid_timeout_raises_configuration_error(test_settings):
    test_settings.TIMEOUT = 0

    with pytest.raises(ZiptaxConfigurationError) as exc_info:
        test_settings.client_config()

    assert isinstance(exc_info.value.__cause__, pydantic.ValidationError)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("ZIPTAX_API_KEY", "env-key")
    monkeypatch.setenv("ZIPTAX_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("ZIPTAX_ENABLE_LOGGING", "true")

    settings = Settings(_env_file=None)

    assert settings.API_KEY == "env-key"
    assert settings.MAX_ATTEMPTS == 5
    assert settings.ENABLE_LOGGING is True


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()

    get_settings.cache_clear()


@pytest.mark.parametrize("environment", ["development", "production"])
def test_configure_logging_installs_sdk_handler(environment):
    sdk_logger = logging.getLogger("ziptax")
    root = logging.getLogger()
    saved = (list(sdk_logger.handlers), sdk_logger.level, sdk_logger.propagate)
    root_handlers, root_level = list(root.handlers), root.level
    try:
        configure_logging("DEBUG", environment)
        configure_logging("DEBUG", environment)

        assert sdk_logger.level == logging.DEBUG
        assert [h.get_name() for h in sdk_logger.handlers].count("ziptax-structlog") == 1
        assert root.handlers == root_handlers
        assert root.level == root_level
    finally:
        sdk_logger.handlers[:] = saved[0]
        sdk_logger.setLevel(saved[1])
        sdk_logger.propagate = saved[2]
