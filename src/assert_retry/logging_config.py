"""Structured logging for eventual assertions, built on structlog.

The retry engine logs one event per attempt at DEBUG, the outcome of a run
at INFO and swallowed wait-strategy errors at WARNING. This module routes
those events through the standard library so pytest's log capture and CI
log collectors see them:

    # conftest.py
    from assert_retry.logging_config import configure_logging

    configure_logging(log_level="DEBUG")

JSON lines are emitted in production (CI), coloured console lines otherwise.
The library never configures logging on import.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.types import EventDict, WrappedLogger

from assert_retry.config import Settings

APP_NAME = "assert-retry"

# Logger namespace of the polling loop and the wait strategies
ENGINE_LOGGER_NAME = "assert_retry.retry"


def app_context(app_name: str) -> structlog.types.Processor:
    """Build a processor tagging every log event with `app_name`."""

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict["app"] = app_name
        return event_dict

    return add_app_context


add_app_context = app_context(APP_NAME)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(
    log_level: Optional[str] = None,
    environment: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    engine_log_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog and the root logger.

    Explicit arguments win over `settings`. Without `settings`, they are
    loaded from the ASSERT_RETRY_* environment.

    Args:
        log_level: Root level name; unknown names fall back to INFO
        environment: "production" selects JSON output
        settings: Source of APP_NAME and of LOG_LEVEL / ENVIRONMENT defaults
        engine_log_level: Separate level for per-attempt engine events
            (e.g. "WARNING" to silence them while keeping INFO elsewhere)
        stream: Output stream (default sys.stdout)
    """
    settings = settings or Settings()
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT

    log_level_int = _level(log_level)
    is_production = environment.lower() == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(settings.APP_NAME),
    ]

    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream is None and sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    engine_logger = logging.getLogger(ENGINE_LOGGER_NAME)
    engine_logger.setLevel(_level(engine_log_level) if engine_log_level else logging.NOTSET)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        engine_log_level=engine_log_level,
    )
