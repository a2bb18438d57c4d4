"""
Tests for configuration management in `careline/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Engine and chat overrides from the environment
- Delay window validation
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from careline.config import (
    AppConfig,
    ChatConfig,
    EngineConfig,
    LoggingConfig,
    configure_logging,
    get_config,
    load_config_from_env,
    reset_config_cache,
)

ENV_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "REPLY_DELAY_MIN_SECONDS",
    "REPLY_DELAY_MAX_SECONDS",
    "SEND_WELCOME_MESSAGE",
    "ENGINE_MAX_TOP_DOMAINS",
    "ENGINE_MAX_LIKELY_LINES",
    "ENGINE_MAX_HOME_CARE_LINES",
    "ENGINE_MAX_MONITOR_LINES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from defaults and an empty config cache."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "dev")

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.format == "console"
    assert config.logging.level == "INFO"
    assert config.engine == EngineConfig()
    assert config.chat.reply_delay_min_seconds == 0.7
    assert config.chat.reply_delay_max_seconds == 1.3
    assert config.chat.send_welcome_message is True


def test_production_uses_json_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    config = load_config_from_env()

    assert config.debug is False
    assert config.logging.format == "json"


def test_unknown_environment_treated_as_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "qa")

    assert load_config_from_env().environment == "production"


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    monkeypatch.setenv("LOG_LEVEL", "unknown")
    assert load_config_from_env().logging.level == "INFO"

    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert load_config_from_env().logging.level == "DEBUG"


def test_engine_and_chat_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENGINE_MAX_TOP_DOMAINS", "3")
    monkeypatch.setenv("ENGINE_MAX_HOME_CARE_LINES", "2")
    monkeypatch.setenv("REPLY_DELAY_MIN_SECONDS", "0")
    monkeypatch.setenv("REPLY_DELAY_MAX_SECONDS", "0.1")
    monkeypatch.setenv("SEND_WELCOME_MESSAGE", "no")

    config = load_config_from_env()

    assert config.engine.max_top_domains == 3
    assert config.engine.max_home_care_lines == 2
    assert config.chat.reply_delay_min_seconds == 0.0
    assert config.chat.reply_delay_max_seconds == 0.1
    assert config.chat.send_welcome_message is False


def test_inverted_delay_window_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPLY_DELAY_MIN_SECONDS", "2.0")
    monkeypatch.setenv("REPLY_DELAY_MAX_SECONDS", "1.0")

    with pytest.raises(ValueError, match="must not exceed"):
        load_config_from_env()


def test_invalid_limits_rejected() -> None:
    with pytest.raises(ValueError):
        EngineConfig(max_top_domains=0)

    with pytest.raises(ValueError):
        ChatConfig(reply_delay_min_seconds=-1.0)


def test_get_config_cache() -> None:
    c1 = get_config()
    c2 = get_config()
    assert c1 is c2

    reset_config_cache()
    assert get_config() is not c1


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode is only allowed"):
        AppConfig(environment="production", debug=True)


@pytest.mark.parametrize("fmt", ["json", "console"])
def test_configure_logging_accepts_both_formats(fmt: str) -> None:
    configure_logging(LoggingConfig(level="WARNING", format=fmt))

    logger = structlog.get_logger("careline.test")
    logger.info("suppressed_below_warning")
    assert structlog.is_configured()

    structlog.reset_defaults()
