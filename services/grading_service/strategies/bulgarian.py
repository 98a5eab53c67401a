from __future__ import annotations

from common_core.grading_enums import GradingSystemType

from services.grading_service.strategies.base import GradingStrategy


class BulgarianGradingStrategy(GradingStrategy):
    """
    Bulgarian 2-6 scale in quarter steps.

    Grade labels are formatted with two decimals ("5.50", not "5.5") and are
    matched exactly.
    """

    system_type = GradingSystemType.BULGARIAN
