from __future__ import annotations

from common_core.grading_enums import GradingSystemType

from services.grading_service.strategies.base import GradingStrategy


class EuropeanGradingStrategy(GradingStrategy):
    """ECTS letters A to F, including the FX near-miss fail; 50 passes."""

    system_type = GradingSystemType.EUROPEAN
