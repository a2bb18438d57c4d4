"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Rule-engine limits live in config, rule content lives in careline.domain.rules
"""

import logging
import os
from functools import lru_cache
from typing import Literal, cast

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EngineConfig(BaseModel):
    """Limits applied when the symptom engine assembles a reply."""

    max_top_domains: int = Field(
        default=2, gt=0, description="Number of ranked domains that feed the reply"
    )
    max_likely_lines: int = Field(
        default=3, gt=0, description="Maximum likely-cause lines in the opening section"
    )
    max_home_care_lines: int = Field(
        default=4, gt=0, description="Maximum lines in the home-care section"
    )
    max_monitor_lines: int = Field(
        default=4, gt=0, description="Maximum lines in the what-to-monitor section"
    )


class ChatConfig(BaseModel):
    """Simulated doctor chat behaviour."""

    reply_delay_min_seconds: float = Field(
        default=0.7, ge=0.0, description="Lower bound of the simulated typing delay"
    )
    reply_delay_max_seconds: float = Field(
        default=1.3, ge=0.0, description="Upper bound of the simulated typing delay"
    )
    send_welcome_message: bool = Field(
        default=True, description="Seed new appointment threads with a doctor greeting"
    )

    @model_validator(mode="after")
    def delay_bounds_ordered(self) -> "ChatConfig":
        """Ensure the delay window is not inverted."""
        if self.reply_delay_min_seconds > self.reply_delay_max_seconds:
            raise ValueError("reply_delay_min_seconds must not exceed reply_delay_max_seconds")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    engine: EngineConfig = Field(default_factory=EngineConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(LogLevel, v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO")

    def _parse_bool(val: str | None, default: bool) -> bool:
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "on"}

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    engine_config = EngineConfig(
        max_top_domains=int(os.getenv("ENGINE_MAX_TOP_DOMAINS", "2")),
        max_likely_lines=int(os.getenv("ENGINE_MAX_LIKELY_LINES", "3")),
        max_home_care_lines=int(os.getenv("ENGINE_MAX_HOME_CARE_LINES", "4")),
        max_monitor_lines=int(os.getenv("ENGINE_MAX_MONITOR_LINES", "4")),
    )

    chat_config = ChatConfig(
        reply_delay_min_seconds=float(os.getenv("REPLY_DELAY_MIN_SECONDS", "0.7")),
        reply_delay_max_seconds=float(os.getenv("REPLY_DELAY_MAX_SECONDS", "1.3")),
        send_welcome_message=_parse_bool(os.getenv("SEND_WELCOME_MESSAGE"), True),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        engine=engine_config,
        chat=chat_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def reset_config_cache() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    get_config.cache_clear()


def configure_logging(config: LoggingConfig) -> None:
    """Install the structlog processor chain for the configured format and level."""
    renderer: structlog.types.Processor
    if config.format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    logging.basicConfig(format="%(message)s", level=getattr(logging, config.level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
