from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from common_core.grading_enums import GradingSystemType

from services.grading_service.constants import CUSTOM_SYSTEM_DESCRIPTION, CUSTOM_SYSTEM_NAME
from services.grading_service.models_db import GradingSystem
from services.grading_service.scale_lookup import GradeBand
from services.grading_service.strategies.base import GradingStrategy


class CustomGradingStrategy(GradingStrategy):
    """
    Institution-defined bands.

    There is no canonical table: without a persisted system to bind to, the
    strategy has no bands and every lookup fails.
    """

    system_type = GradingSystemType.CUSTOM

    @classmethod
    def canonical_bands(cls) -> tuple[GradeBand, ...]:
        return ()

    def create_default_grading_system(self, institution_id: UUID) -> GradingSystem:
        return GradingSystem(
            name=CUSTOM_SYSTEM_NAME,
            description=CUSTOM_SYSTEM_DESCRIPTION,
            type=self.system_type,
            is_default=False,
            minimum_passing_score=Decimal("60"),
            maximum_score=Decimal("100"),
            institution_id=institution_id,
            grade_scales=[],
        )
