"""Maps grading system types to strategies."""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from common_core.grading_enums import GradingSystemType
from unitrack_service_libs.error_handling import raise_unsupported_grading_type

from services.grading_service.constants import SERVICE_NAME
from services.grading_service.models_db import GradingSystem
from services.grading_service.protocols import GradingStrategyFactoryProtocol
from services.grading_service.scale_lookup import DEFAULT_SCORE_RESOLUTION, snapshot_bands
from services.grading_service.strategies.american import AmericanGradingStrategy
from services.grading_service.strategies.base import GradingStrategy
from services.grading_service.strategies.bulgarian import BulgarianGradingStrategy
from services.grading_service.strategies.custom import CustomGradingStrategy
from services.grading_service.strategies.european import EuropeanGradingStrategy


class GradingStrategyFactory(GradingStrategyFactoryProtocol):
    """Select the strategy for a grading system type."""

    def __init__(self, score_resolution: Decimal = DEFAULT_SCORE_RESOLUTION) -> None:
        self._score_resolution = score_resolution
        # Canonical strategies are immutable, so type-only lookups share them
        self._canonical: dict[GradingSystemType, GradingStrategy] = {}

    def strategy_class(
        self, system_type: Any, correlation_id: UUID | None = None
    ) -> type[GradingStrategy]:
        if not isinstance(system_type, GradingSystemType):
            raise_unsupported_grading_type(
                service=SERVICE_NAME,
                operation="get_strategy",
                grading_type=system_type,
                correlation_id=correlation_id,
            )

        match system_type:
            case GradingSystemType.AMERICAN:
                return AmericanGradingStrategy
            case GradingSystemType.EUROPEAN:
                return EuropeanGradingStrategy
            case GradingSystemType.BULGARIAN:
                return BulgarianGradingStrategy
            case GradingSystemType.CUSTOM:
                return CustomGradingStrategy
            case _:
                raise_unsupported_grading_type(
                    service=SERVICE_NAME,
                    operation="get_strategy",
                    grading_type=system_type,
                    correlation_id=correlation_id,
                )

    def get_strategy(
        self, system_type: Any, correlation_id: UUID | None = None
    ) -> GradingStrategy:
        """Return the strategy for a type, bound to the type's canonical bands."""
        strategy_cls = self.strategy_class(system_type, correlation_id)
        if system_type not in self._canonical:
            self._canonical[system_type] = strategy_cls(resolution=self._score_resolution)
        return self._canonical[system_type]

    def get_strategy_for_system(
        self, grading_system: GradingSystem, correlation_id: UUID | None = None
    ) -> GradingStrategy:
        """Return the strategy for a system, bound to a snapshot of its persisted scales."""
        strategy_cls = self.strategy_class(grading_system.type, correlation_id)
        return strategy_cls(
            snapshot_bands(grading_system.grade_scales), resolution=self._score_resolution
        )

    def built_in_strategies(self) -> list[GradingStrategy]:
        """Strategies whose canonical systems are created for new institutions."""
        return [
            self.get_strategy(GradingSystemType.AMERICAN),
            self.get_strategy(GradingSystemType.EUROPEAN),
            self.get_strategy(GradingSystemType.BULGARIAN),
        ]
