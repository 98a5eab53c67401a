"""
UniTrack Common Core Package.
"""

from .config_enums import Environment
from .error_enums import ErrorCode, GradingErrorCode
from .grade_scales import (
    GRADING_CONVENTIONS,
    GradeBandDefinition,
    GradingConventionMetadata,
    get_convention,
    list_available_conventions,
)
from .grading_enums import GradingStatus, GradingSystemType
from .models.error_models import ErrorDetail

__all__ = [
    "Environment",
    "ErrorCode",
    "ErrorDetail",
    "GRADING_CONVENTIONS",
    "GradeBandDefinition",
    "GradingConventionMetadata",
    "GradingErrorCode",
    "GradingStatus",
    "GradingSystemType",
    "get_convention",
    "list_available_conventions",
]
