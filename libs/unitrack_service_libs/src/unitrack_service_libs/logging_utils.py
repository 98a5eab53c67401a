"""
Structured logging for UniTrack services.

Services call ``configure_service_logging`` once at startup (or per CLI run)
and obtain loggers with ``create_service_logger``. Every event is routed
through the standard library root logger, so handlers configured here also
receive SQLAlchemy and third-party log records.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any
from uuid import UUID

import structlog
from opentelemetry.trace import get_current_span
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import EventDict, Processor

DEFAULT_LOG_DIR = "/app/logs"
DEFAULT_MAX_BYTES = 100 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 10


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every event with ``service.name`` and ``deployment.environment``."""
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_trace_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add trace_id and span_id of the active OpenTelemetry span, when there is one."""
    span = get_current_span()
    if span is None:
        return event_dict

    span_context = span.get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes")


def _build_processors(use_json: bool) -> list[Processor]:
    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        add_trace_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if use_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors += [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=True)]
    return processors


def _build_file_handler(service_name: str, log_file_path: str | None) -> logging.Handler:
    path = Path(
        log_file_path
        or os.getenv("LOG_FILE_PATH")
        or os.path.join(DEFAULT_LOG_DIR, f"{service_name}.log")
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(DEFAULT_MAX_BYTES))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", str(DEFAULT_BACKUP_COUNT))),
        encoding="utf-8",
    )


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """
    Configure structlog and the root logger for a service.

    Args:
        service_name: Name of the service (e.g., "grading_service")
        environment: Environment name (defaults to ENVIRONMENT env var)
        log_level: Root logging level
        log_to_file: Also write to a rotating file (defaults to LOG_TO_FILE env var)
        log_file_path: File path (defaults to LOG_FILE_PATH env var
            or /app/logs/{service_name}.log)

    Output is JSON in production or when LOG_FORMAT=json, otherwise colored
    console lines. LOG_MAX_BYTES and LOG_BACKUP_COUNT tune file rotation.
    """
    environment = environment or os.getenv("ENVIRONMENT", "development")
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file is None:
        log_to_file = _env_flag("LOG_TO_FILE")
    if log_to_file:
        handlers.append(_build_file_handler(service_name, log_file_path))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=_build_processors(use_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Return a structlog logger, bound to ``logger_name`` when a name is given."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger


def bind_operation_context(correlation_id: UUID | str, **context: Any) -> None:
    """
    Reset the contextvars and bind a correlation ID for the current operation.

    Every log line emitted afterwards in the same task carries the bound values.
    """
    clear_contextvars()
    bind_contextvars(correlation_id=str(correlation_id), **context)
