"""Structured logging setup."""

import logging

import structlog

from cfmortality.config import LoggingConfig


def build_processors(config: LoggingConfig) -> list:
    """structlog processor chain ending in the renderer chosen by ``config.format``."""
    renderer = (
        structlog.processors.JSONRenderer()
        if config.format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Route structlog through the stdlib logging module at the configured level."""
    config = config or LoggingConfig()

    logging.basicConfig(level=config.level, format="%(message)s")
    logging.getLogger().setLevel(config.level)

    structlog.configure(
        processors=build_processors(config),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
