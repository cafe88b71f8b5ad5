"""structlog configuration shared by every entry point."""

import logging
import os

import structlog


def configure_logging() -> None:
    """Configure structlog based on the ENV environment variable."""
    is_production = os.getenv("ENV", "development").lower() == "production"

    if is_production:
        # Production: JSON format for machine parsing
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        level = logging.INFO
    else:
        # Development: console format for human readability
        renderers = [structlog.dev.ConsoleRenderer()]
        level = logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
