from __future__ import annotations

from common_core.grading_enums import GradingSystemType

from services.grading_service.strategies.base import GradingStrategy


class AmericanGradingStrategy(GradingStrategy):
    """Letter grades A+ to F on a 4.0 GPA scale; 60 passes."""

    system_type = GradingSystemType.AMERICAN
