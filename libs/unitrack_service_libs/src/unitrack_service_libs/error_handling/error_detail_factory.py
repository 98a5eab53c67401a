"""Factory for ErrorDetail instances with automatic context capture."""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from common_core.error_enums import ErrorCode, GradingErrorCode
from common_core.models.error_models import ErrorDetail
from opentelemetry import trace


def create_error_detail_with_context(
    error_code: ErrorCode | GradingErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    details: dict[str, Any] | None = None,
    capture_stack: bool = True,
) -> ErrorDetail:
    """
    Create an ErrorDetail, generating a correlation ID when none is given.

    Args:
        error_code: Code identifying the failure class
        message: Human-readable error message
        service: Service raising the error
        operation: Operation that failed
        correlation_id: Request correlation ID (generated when None)
        details: Additional structured context
        capture_stack: Whether to attach the current call stack

    Returns:
        Populated ErrorDetail with timestamp and trace context
    """
    stack_trace = "".join(traceback.format_stack()[:-1]) if capture_stack else None

    trace_id: str | None = None
    span_id: str | None = None
    span = trace.get_current_span()
    if span is not None and span.is_recording():
        span_context = span.get_span_context()
        trace_id = format(span_context.trace_id, "032x")
        span_id = format(span_context.span_id, "016x")

    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace=stack_trace,
        trace_id=trace_id,
        span_id=span_id,
    )
