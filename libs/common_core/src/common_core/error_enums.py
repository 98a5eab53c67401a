"""
common_core.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures


class GradingErrorCode(str, Enum):
    """
    Specific error codes for the Grading Service.

    Note: lookups that find no band (SCORE_OUT_OF_RANGE, GRADE_NOT_FOUND) indicate
    a data-integrity problem in the configured grade scales and are never retried.
    """

    DUPLICATE_NAME = "DUPLICATE_NAME"
    SCORE_OUT_OF_RANGE = "SCORE_OUT_OF_RANGE"
    GRADE_NOT_FOUND = "GRADE_NOT_FOUND"
    INVALID_GRADE_SCALES = "INVALID_GRADE_SCALES"
    UNSUPPORTED_GRADING_TYPE = "UNSUPPORTED_GRADING_TYPE"
