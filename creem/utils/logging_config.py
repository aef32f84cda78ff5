"""
Structured Logging Configuration

JSON logging for webhook tracing. Every record emitted under the "creem"
namespace carries the request correlation ID and, while a webhook is being
dispatched, the event ID and event type, so handler logs can be joined to the
delivery that caused them.

The SDK never configures handlers on import; call setup_logging() to opt in.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional, Tuple

from pythonjsonlogger import jsonlogger

from creem.config import get_settings

ROOT_LOGGER_NAME = "creem"

# Context variables for request and webhook event tracing
correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)
webhook_event_var: ContextVar[Optional[Tuple[str, str]]] = ContextVar(
    "webhook_event", default=None
)


class CorrelationIdFilter(logging.Filter):
    """Add correlation ID and the current webhook event to log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = correlation_id_var.get()
        record.correlation_id = correlation_id or "N/A"

        webhook_event = webhook_event_var.get()
        if webhook_event is not None:
            event_id, event_type = webhook_event
            # extra= passed at the call site takes precedence
            if not hasattr(record, "event_id"):
                record.event_id = event_id
            if not hasattr(record, "event_type"):
                record.event_type = event_type
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter for structured logging.
    Includes correlation ID, webhook event, timestamp, and other metadata.
    """

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record"""
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if hasattr(record, "correlation_id"):
            log_record["correlation_id"] = record.correlation_id

        for field in ("event_id", "event_type"):
            if hasattr(record, field):
                log_record[field] = getattr(record, field)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure SDK logging with JSON formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to Settings.log_level (CREEM_LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = get_settings().log_level

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S.%fZ",
    )
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationIdFilter())

    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the SDK namespace.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.
    Generates a new UUID if not provided.

    Args:
        correlation_id: Optional correlation ID

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID"""
    return correlation_id_var.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context"""
    correlation_id_var.set(None)


@contextmanager
def webhook_event_context(event_id: str, event_type: str) -> Iterator[None]:
    """Tag every SDK log record emitted inside the block with the webhook event"""
    token = webhook_event_var.set((event_id, event_type))
    try:
        yield
    finally:
        webhook_event_var.reset(token)


def get_webhook_event() -> Optional[Tuple[str, str]]:
    """Get the (event_id, event_type) currently being dispatched, if any"""
    return webhook_event_var.get()
