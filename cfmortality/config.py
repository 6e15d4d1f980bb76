"""
Configuration management with environment variable support and validation.

Values come from the process environment, after loading a ``.env`` file if
one is present. Everything has a safe default, so the library works with no
configuration at all.
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
Environment = Literal["development", "staging", "production"]


class PredictorConfig(BaseModel):
    """Behaviour of the mortality predictor."""

    strict_ranges: bool = Field(
        default=True,
        description=(
            "Reject values outside the documented clinical ranges. When off, only "
            "values that make a model term undefined are rejected."
        ),
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Environment = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    predictor: PredictorConfig = Field(default_factory=PredictorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def _env_to_literal(val: str) -> Environment:
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


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    predictor_config = PredictorConfig(
        strict_ranges=_parse_bool(os.getenv("STRICT_RANGE_VALIDATION"), True),
    )

    log_format = os.getenv("LOG_FORMAT", "").strip().lower()
    if log_format not in {"json", "console"}:
        log_format = "console" if debug else "json"

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format=cast(Literal["json", "console"], log_format),
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        predictor=predictor_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")
    print(f"Log Format: {config.logging.format}")
    print(f"Strict Range Validation: {config.predictor.strict_ranges}")


if __name__ == "__main__":
    print_config_summary()
