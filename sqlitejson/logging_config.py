"""Structured logging for sqlitejson.

stdout belongs to the exported JSON document, so log events never go there.
Events are rendered by structlog and handed to the stdlib ``logging`` module,
whose handler writes to stderr.

``setup_logging`` is called by the CLI with the configured level and format.
Library callers that never call it still get a stdlib-backed structlog
configuration the first time a sqlitejson logger is created; their own
``logging`` setup then decides where events go, and with none in place only
warnings and errors reach stderr through logging's last-resort handler.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from sqlitejson.config import get_settings

SENSITIVE_KEYS = frozenset({"password", "secret", "token"})


def add_timestamp(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the event with the current UTC time."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def censor_sensitive_keys(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact values whose key names look like credentials."""
    for key in list(event_dict.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = "***REDACTED***"

    return event_dict


def _base_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        censor_sensitive_keys,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root handler on stderr.

    Args:
        level: Level name overriding the configured ``log_level``
    """
    settings = get_settings()
    level = level or settings.log_level

    processors = _base_processors()
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True rebinds the handler on every CLI run, so a changed level or
    # a replaced sys.stderr takes effect.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
        force=True,
    )


def _configure_library_defaults() -> None:
    """Route structlog through stdlib logging unless someone configured it.

    structlog's own default prints every event to stdout, which would mix
    log lines into exported JSON.
    """
    if structlog.is_configured():
        return

    structlog.configure(
        processors=[
            *_base_processors(),
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance, installing stderr-safe defaults if needed."""
    _configure_library_defaults()
    return structlog.get_logger(name)


def log_operation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    **kwargs: Any,
) -> None:
    """Log an operation with standard context."""
    context = {"operation": operation}
    context.update(kwargs)

    logger.info("operation", **context)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    error: Exception,
    operation: str,
    **kwargs: Any,
) -> None:
    """Log an error with standard context."""
    context = {
        "operation": operation,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
    context.update(kwargs)

    logger.error("operation_failed", **context, exc_info=True)
