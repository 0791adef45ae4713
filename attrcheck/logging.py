"""Structured Logging for attrcheck

- Events go through the stdlib ``attrcheck`` logger, which carries a
  NullHandler; the host decides where (and whether) they are written
- A host that configured structlog gets its own pipeline
- configure_logging() is an explicit opt-in: colored console or JSON output
- Attribute path bound through contextvars while a validator runs
"""
import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from attrcheck.config import get_settings

LOGGER_NAMESPACE = "attrcheck"

logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds library metadata."""
    event_dict.setdefault("library", LOGGER_NAMESPACE)
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used by both console and JSON configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_library_info,
    ]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and the ``attrcheck`` handler for an application.

    The library never calls this itself. Unset arguments fall back to
    Settings (ATTRCHECK_LOG_LEVEL, ATTRCHECK_LOG_JSON).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON format. If False, colored console output.
    """
    settings = get_settings()
    level = settings.LOG_LEVEL if level is None else level
    json_logs = settings.LOG_JSON if json_logs is None else json_logs
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False
    LoggerRegistry.clear()


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Never configures structlog. When the process has no structlog
    configuration, events are rendered as key=value text and handed to the
    stdlib logger of the same name.
    """
    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *get_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class LoggerRegistry:
    """Registry of pre-configured loggers for the library's domains."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for the given domain."""
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"{LOGGER_NAMESPACE}.{name}")
        return cls._loggers[name]

    @classmethod
    def clear(cls) -> None:
        """Drop cached loggers so the next lookup sees the current configuration."""
        cls._loggers.clear()


def comparison_logger() -> structlog.stdlib.BoundLogger:
    """Logger for comparison registry and strategy dispatch."""
    return LoggerRegistry.get("comparison")


def validation_logger() -> structlog.stdlib.BoundLogger:
    """Logger for attribute validator evaluation."""
    return LoggerRegistry.get("validation")


def coercion_logger() -> structlog.stdlib.BoundLogger:
    """Logger for opaque value coercion."""
    return LoggerRegistry.get("coercion")
