"""
Raise-helpers for UniTrack errors.

Every helper builds an ErrorDetail and raises UniTrackError; none return.
Extra keyword arguments land in ErrorDetail.details.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from common_core.error_enums import ErrorCode, GradingErrorCode

from .error_detail_factory import create_error_detail_with_context
from .unitrack_error import UniTrackError

# =============================================================================
# Generic errors
# =============================================================================


def raise_unknown_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise for failures that fit no other category."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.UNKNOWN_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
    )
    raise UniTrackError(error_detail)


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID | None = None,
    value: Any = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise for invalid input on a specific field."""
    details: dict[str, Any] = {"field": field, **additional_context}
    if value is not None:
        details["value"] = value
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.VALIDATION_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=details,
    )
    raise UniTrackError(error_detail)


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a requested entity does not exist."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.RESOURCE_NOT_FOUND,
        message=f"{resource_type} with ID '{resource_id}' not found",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"resource_type": resource_type, "resource_id": resource_id, **additional_context},
    )
    raise UniTrackError(error_detail)


def raise_configuration_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise for invalid or missing service configuration."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.CONFIGURATION_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
    )
    raise UniTrackError(error_detail)


# =============================================================================
# Grading errors
# =============================================================================


def raise_duplicate_name(
    service: str,
    operation: str,
    name: str,
    institution_id: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a grading system name is already taken in an institution."""
    error_detail = create_error_detail_with_context(
        error_code=GradingErrorCode.DUPLICATE_NAME,
        message=f"A grading system named '{name}' already exists in this institution",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"name": name, "institution_id": institution_id, **additional_context},
    )
    raise UniTrackError(error_detail)


def raise_score_out_of_range(
    service: str,
    operation: str,
    score: Any,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when no grade band contains a score."""
    error_detail = create_error_detail_with_context(
        error_code=GradingErrorCode.SCORE_OUT_OF_RANGE,
        message=f"No grade scale found for score {score}",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"score": str(score), **additional_context},
    )
    raise UniTrackError(error_detail)


def raise_grade_not_found(
    service: str,
    operation: str,
    grade: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a grade label matches no band."""
    error_detail = create_error_detail_with_context(
        error_code=GradingErrorCode.GRADE_NOT_FOUND,
        message=f"No grade scale found for grade '{grade}'",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"grade": grade, **additional_context},
    )
    raise UniTrackError(error_detail)


def raise_invalid_grade_scales(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a band set is overlapping, inverted or out of bounds."""
    error_detail = create_error_detail_with_context(
        error_code=GradingErrorCode.INVALID_GRADE_SCALES,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
    )
    raise UniTrackError(error_detail)


def raise_unsupported_grading_type(
    service: str,
    operation: str,
    grading_type: Any,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when no strategy is mapped for a grading system type."""
    error_detail = create_error_detail_with_context(
        error_code=GradingErrorCode.UNSUPPORTED_GRADING_TYPE,
        message=f"Grading system type {grading_type!r} is not supported",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"grading_type": str(grading_type), **additional_context},
    )
    raise UniTrackError(error_detail)
