"""Grading Service for UniTrack.

Per-institution grading systems (American, European ECTS, Bulgarian and
custom band tables) and the conversions between scores, grades, GPA points
and pass/fail status.
"""

from services.grading_service.api_models import (
    CreateGradingSystemRequest,
    GradeScaleRequest,
    GradeScaleResponse,
    GradingSystemResponse,
    UpdateGradingSystemRequest,
)
from services.grading_service.models_db import GradeScale, GradingSystem
from services.grading_service.protocols import (
    GradingStrategyFactoryProtocol,
    GradingSystemRepositoryProtocol,
    GradingSystemServiceProtocol,
    SessionProviderProtocol,
)

__all__ = [
    # Protocols
    "GradingStrategyFactoryProtocol",
    "GradingSystemRepositoryProtocol",
    "GradingSystemServiceProtocol",
    "SessionProviderProtocol",
    # Models
    "GradeScale",
    "GradingSystem",
    # API Models
    "CreateGradingSystemRequest",
    "GradeScaleRequest",
    "GradeScaleResponse",
    "GradingSystemResponse",
    "UpdateGradingSystemRequest",
]
