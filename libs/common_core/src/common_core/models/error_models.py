"""
common_core.models.error_models - Structured error payload shared by all services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from common_core.error_enums import ErrorCode, GradingErrorCode


class ErrorDetail(BaseModel):
    """Canonical description of a failure, carried by UniTrackError."""

    model_config = ConfigDict(frozen=True)

    error_code: ErrorCode | GradingErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: str | None = None
    trace_id: str | None = None
    span_id: str | None = None
