"""
Unit tests for create_error_detail_with_context.

Tests correlation ID generation, timestamps and stack trace capture.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from uuid import UUID

from common_core.error_enums import ErrorCode, GradingErrorCode

from unitrack_service_libs.error_handling.error_detail_factory import (
    create_error_detail_with_context,
)


class TestCreateErrorDetail:
    """Test ErrorDetail creation."""

    def test_create_with_all_parameters(self) -> None:
        correlation_id = uuid.uuid4()
        detail = create_error_detail_with_context(
            error_code=GradingErrorCode.DUPLICATE_NAME,
            message="exists",
            service="grading_service",
            operation="create",
            correlation_id=correlation_id,
            details={"name": "Custom"},
        )

        assert detail.error_code == GradingErrorCode.DUPLICATE_NAME
        assert detail.correlation_id == correlation_id
        assert detail.details == {"name": "Custom"}
        assert detail.timestamp.tzinfo == timezone.utc
        assert (datetime.now(timezone.utc) - detail.timestamp).total_seconds() < 1.0

    def test_correlation_id_auto_generation(self) -> None:
        first = create_error_detail_with_context(
            error_code=ErrorCode.UNKNOWN_ERROR,
            message="m",
            service="s",
            operation="o",
        )
        second = create_error_detail_with_context(
            error_code=ErrorCode.UNKNOWN_ERROR,
            message="m",
            service="s",
            operation="o",
        )

        assert isinstance(first.correlation_id, UUID)
        assert first.correlation_id != second.correlation_id
        assert first.details == {}

    def test_stack_trace_capture_enabled_by_default(self) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="m",
            service="s",
            operation="o",
        )
        assert detail.stack_trace is not None
        assert "test_stack_trace_capture_enabled_by_default" in detail.stack_trace

    def test_stack_trace_capture_disabled(self) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="m",
            service="s",
            operation="o",
            capture_stack=False,
        )
        assert detail.stack_trace is None

    def test_no_trace_ids_without_active_span(self) -> None:
        detail = create_error_detail_with_context(
            error_code=ErrorCode.PROCESSING_ERROR,
            message="m",
            service="s",
            operation="o",
        )
        assert detail.trace_id is None
        assert detail.span_id is None
