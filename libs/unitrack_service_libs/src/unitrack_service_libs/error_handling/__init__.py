"""Structured error handling for UniTrack services."""

from .error_detail_factory import create_error_detail_with_context
from .factories import (
    raise_configuration_error,
    raise_duplicate_name,
    raise_grade_not_found,
    raise_invalid_grade_scales,
    raise_resource_not_found,
    raise_score_out_of_range,
    raise_unknown_error,
    raise_unsupported_grading_type,
    raise_validation_error,
)
from .unitrack_error import UniTrackError

__all__ = [
    "UniTrackError",
    "create_error_detail_with_context",
    "raise_configuration_error",
    "raise_duplicate_name",
    "raise_grade_not_found",
    "raise_invalid_grade_scales",
    "raise_resource_not_found",
    "raise_score_out_of_range",
    "raise_unknown_error",
    "raise_unsupported_grading_type",
    "raise_validation_error",
]
