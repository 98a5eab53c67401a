"""Grading system lifecycle and score conversion."""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, NoReturn, TypeVar
from uuid import UUID

from common_core.grading_enums import GradingStatus
from sqlalchemy.ext.asyncio import AsyncSession
from unitrack_service_libs.error_handling import (
    UniTrackError,
    raise_duplicate_name,
    raise_resource_not_found,
    raise_validation_error,
)
from unitrack_service_libs.logging_utils import create_service_logger

from services.grading_service.api_models import (
    CreateGradingSystemRequest,
    GradeScaleRequest,
    UpdateGradingSystemRequest,
)
from services.grading_service.constants import GRADING_SYSTEM_RESOURCE, SERVICE_NAME
from services.grading_service.metrics import GradingMetrics
from services.grading_service.models_db import GradeScale, GradingSystem
from services.grading_service.protocols import (
    GradingStrategyFactoryProtocol,
    GradingSystemRepositoryProtocol,
    GradingSystemServiceProtocol,
    SessionProviderProtocol,
)
from services.grading_service.scale_lookup import (
    DEFAULT_SCORE_RESOLUTION,
    GradeBand,
    snapshot_bands,
    validate_bands,
)
from services.grading_service.strategies.base import GradingStrategy

logger = create_service_logger("grading_service.service")

R = TypeVar("R")


class GradingSystemServiceImpl(GradingSystemServiceProtocol):
    """Implementation of the grading system service logic."""

    def __init__(
        self,
        session_provider: SessionProviderProtocol,
        repository: GradingSystemRepositoryProtocol,
        strategy_factory: GradingStrategyFactoryProtocol,
        score_resolution: Decimal = DEFAULT_SCORE_RESOLUTION,
        metrics: GradingMetrics | None = None,
    ) -> None:
        self.session_provider = session_provider
        self.repository = repository
        self.strategy_factory = strategy_factory
        self.score_resolution = score_resolution
        self.metrics = metrics

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_id(
        self, grading_system_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem:
        async with self.session_provider.session() as session:
            return await self._require_system(
                session, grading_system_id, "get_by_id", correlation_id
            )

    async def get_all(self) -> list[GradingSystem]:
        async with self.session_provider.session() as session:
            return await self.repository.list_all(session)

    async def get_all_for_institution(self, institution_id: UUID) -> list[GradingSystem]:
        async with self.session_provider.session() as session:
            return await self.repository.list_for_institution(session, institution_id)

    async def get_default_for_institution(
        self, institution_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem:
        async with self.session_provider.session() as session:
            system = await self.repository.get_default_for_institution(session, institution_id)
        if system is None:
            self._raise_no_default(institution_id, "get_default_for_institution", correlation_id)
        return system

    async def get_or_initialize_default(
        self, institution_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem:
        async with self.session_provider.transaction() as session:
            system = await self.repository.get_default_for_institution(session, institution_id)
            if system is None:
                await self.initialize_default_grading_systems_within_transaction(
                    session, institution_id
                )
                system = await self.repository.get_default_for_institution(
                    session, institution_id
                )
        if system is None:
            self._raise_no_default(institution_id, "get_or_initialize_default", correlation_id)
        return system

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create(
        self, request: CreateGradingSystemRequest, correlation_id: UUID | None = None
    ) -> GradingSystem:
        async with self.session_provider.transaction() as session:
            await self._ensure_unique_name(
                session, request.name, request.institution_id, None, "create", correlation_id
            )
            self._validate_scales(
                snapshot_bands(request.grade_scales),
                request.maximum_score,
                request.name,
                "create",
                correlation_id,
            )

            if request.is_default:
                await self.repository.lock_institution(session, request.institution_id)
                await self.repository.clear_default(session, request.institution_id)

            system = GradingSystem(
                name=request.name,
                description=request.description,
                type=request.type,
                is_default=request.is_default,
                minimum_passing_score=request.minimum_passing_score,
                maximum_score=request.maximum_score,
                institution_id=request.institution_id,
                grade_scales=self._build_scales(request.grade_scales),
            )
            self.repository.add(session, system)
            await self.repository.flush(session)
            created = await self._require_system(session, system.id, "create", correlation_id)

        logger.info(
            "Grading system created",
            grading_system_id=str(created.id),
            institution_id=str(created.institution_id),
            system_type=created.type.value,
            is_default=created.is_default,
        )
        self._record_operation("create")
        return created

    async def update(
        self,
        grading_system_id: UUID,
        request: UpdateGradingSystemRequest,
        correlation_id: UUID | None = None,
    ) -> GradingSystem:
        changes = {
            field: getattr(request, field)
            for field in request.model_fields_set
            if getattr(request, field) is not None
        }

        async with self.session_provider.transaction() as session:
            system = await self._require_system(
                session, grading_system_id, "update", correlation_id
            )

            if "name" in changes:
                await self._ensure_unique_name(
                    session,
                    changes["name"],
                    system.institution_id,
                    system.id,
                    "update",
                    correlation_id,
                )

            maximum_score: Decimal = changes.get("maximum_score", system.maximum_score)
            passing_score: Decimal = changes.get(
                "minimum_passing_score", system.minimum_passing_score
            )
            if passing_score > maximum_score:
                raise_validation_error(
                    service=SERVICE_NAME,
                    operation="update",
                    field="minimum_passing_score",
                    message="minimum_passing_score cannot exceed maximum_score",
                    correlation_id=correlation_id,
                    value=str(passing_score),
                )

            if "grade_scales" in changes:
                bands = snapshot_bands(changes["grade_scales"])
            else:
                bands = snapshot_bands(system.grade_scales)
            if "grade_scales" in changes or "maximum_score" in changes:
                self._validate_scales(
                    bands, maximum_score, changes.get("name", system.name), "update", correlation_id
                )

            for field in ("name", "description", "type", "minimum_passing_score", "maximum_score"):
                if field in changes:
                    setattr(system, field, changes[field])

            if "grade_scales" in changes:
                self.repository.replace_grade_scales(
                    system, self._build_scales(changes["grade_scales"])
                )

            await self.repository.flush(session)

            if changes.get("is_default") is True and not system.is_default:
                await self.repository.lock_institution(session, system.institution_id)
                await self.repository.set_default(session, system.id, system.institution_id)
            elif changes.get("is_default") is False and system.is_default:
                system.is_default = False
                await self.repository.flush(session)

            updated = await self._require_system(session, system.id, "update", correlation_id)

        logger.info(
            "Grading system updated",
            grading_system_id=str(grading_system_id),
            fields=sorted(changes),
        )
        self._record_operation("update")
        return updated

    async def delete(self, grading_system_id: UUID) -> bool:
        async with self.session_provider.transaction() as session:
            system = await self.repository.get_by_id(
                session, grading_system_id, include_scales=False
            )
            if system is None:
                logger.info(
                    "Grading system to delete not found",
                    grading_system_id=str(grading_system_id),
                )
                self._record_operation("delete", "not_found")
                return False

            was_default = system.is_default
            institution_id = system.institution_id
            deleted = await self.repository.delete(session, grading_system_id)

        if deleted and was_default:
            # No other system is promoted automatically
            logger.warning(
                "Deleted the default grading system; institution has no default",
                grading_system_id=str(grading_system_id),
                institution_id=str(institution_id),
            )
        self._record_operation("delete")
        return deleted

    async def set_default(self, grading_system_id: UUID, institution_id: UUID) -> bool:
        async with self.session_provider.transaction() as session:
            system = await self.repository.get_by_id(
                session, grading_system_id, include_scales=False
            )
            if system is None or system.institution_id != institution_id:
                self._record_operation("set_default", "not_found")
                return False
            if system.is_default:
                return True

            await self.repository.lock_institution(session, institution_id)
            changed = await self.repository.set_default(session, grading_system_id, institution_id)

        logger.info(
            "Default grading system changed",
            grading_system_id=str(grading_system_id),
            institution_id=str(institution_id),
        )
        self._record_operation("set_default")
        return changed

    async def initialize_default_grading_systems(self, institution_id: UUID) -> bool:
        async with self.session_provider.transaction() as session:
            return await self.initialize_default_grading_systems_within_transaction(
                session, institution_id
            )

    async def initialize_default_grading_systems_within_transaction(
        self, session: AsyncSession, institution_id: UUID
    ) -> bool:
        existing = await self.repository.count_for_institution(session, institution_id)
        if existing > 0:
            logger.debug(
                "Institution already has grading systems; skipping initialization",
                institution_id=str(institution_id),
                existing=existing,
            )
            self._record_initialization(created=False)
            return False

        for strategy in self.strategy_factory.built_in_strategies():
            self.repository.add(session, strategy.create_default_grading_system(institution_id))
        await self.repository.flush(session)

        logger.info(
            "Default grading systems initialized",
            institution_id=str(institution_id),
        )
        self._record_initialization(created=True)
        return True

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    async def convert_score_to_grade(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> str:
        return await self._convert(
            "convert_score_to_grade",
            grading_system_id,
            correlation_id,
            lambda system, strategy: strategy.convert_score_to_grade(score, correlation_id),
        )

    async def convert_score_to_gpa_points(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> float:
        return await self._convert(
            "convert_score_to_gpa_points",
            grading_system_id,
            correlation_id,
            lambda system, strategy: strategy.convert_score_to_gpa_points(score, correlation_id),
        )

    async def determine_status(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> GradingStatus:
        return await self._convert(
            "determine_status",
            grading_system_id,
            correlation_id,
            lambda system, strategy: strategy.determine_status(
                score, system.minimum_passing_score
            ),
        )

    async def convert_grade_to_score(
        self, grading_system_id: UUID, grade: str, correlation_id: UUID | None = None
    ) -> Decimal:
        return await self._convert(
            "convert_grade_to_score",
            grading_system_id,
            correlation_id,
            lambda system, strategy: strategy.convert_grade_to_score(grade, correlation_id),
        )

    async def _convert(
        self,
        operation: str,
        grading_system_id: UUID,
        correlation_id: UUID | None,
        compute: Callable[[GradingSystem, GradingStrategy], R],
    ) -> R:
        async with self.session_provider.session() as session:
            system = await self._require_system(
                session, grading_system_id, operation, correlation_id
            )
        strategy = self.strategy_factory.get_strategy_for_system(system, correlation_id)

        try:
            result = compute(system, strategy)
        except UniTrackError as e:
            if self.metrics is not None:
                self.metrics.record_conversion(operation, system.type.value, "error")
                self.metrics.record_error(operation, e.error_code)
            raise

        if self.metrics is not None:
            self.metrics.record_conversion(operation, system.type.value, "success")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_system(
        self,
        session: AsyncSession,
        grading_system_id: UUID,
        operation: str,
        correlation_id: UUID | None,
    ) -> GradingSystem:
        system = await self.repository.get_by_id(session, grading_system_id, include_scales=True)
        if system is None:
            if self.metrics is not None:
                self.metrics.record_error(operation, "RESOURCE_NOT_FOUND")
            raise_resource_not_found(
                service=SERVICE_NAME,
                operation=operation,
                resource_type=GRADING_SYSTEM_RESOURCE,
                resource_id=str(grading_system_id),
                correlation_id=correlation_id,
            )
        return system

    async def _ensure_unique_name(
        self,
        session: AsyncSession,
        name: str,
        institution_id: UUID,
        current_id: UUID | None,
        operation: str,
        correlation_id: UUID | None,
    ) -> None:
        existing = await self.repository.get_by_name_and_institution(
            session, name, institution_id
        )
        if existing is not None and existing.id != current_id:
            if self.metrics is not None:
                self.metrics.record_error(operation, "DUPLICATE_NAME")
            raise_duplicate_name(
                service=SERVICE_NAME,
                operation=operation,
                name=name,
                institution_id=str(institution_id),
                correlation_id=correlation_id,
            )

    def _validate_scales(
        self,
        bands: tuple[GradeBand, ...],
        maximum_score: Decimal,
        name: str,
        operation: str,
        correlation_id: UUID | None,
    ) -> None:
        gaps = validate_bands(
            bands,
            maximum_score,
            resolution=self.score_resolution,
            operation=operation,
            correlation_id=correlation_id,
        )
        if gaps:
            # Scores inside a gap fail with SCORE_OUT_OF_RANGE at conversion time
            logger.warning(
                "Grade scales leave part of the score range uncovered",
                grading_system_name=name,
                gaps=[(str(start), str(end)) for start, end in gaps],
            )

    @staticmethod
    def _build_scales(requests: list[GradeScaleRequest]) -> list[GradeScale]:
        return [
            GradeScale(
                grade=scale.grade,
                description=scale.description,
                minimum_score=scale.minimum_score,
                maximum_score=scale.maximum_score,
                gpa_value=scale.gpa_value,
            )
            for scale in requests
        ]

    def _raise_no_default(
        self, institution_id: UUID, operation: str, correlation_id: UUID | None
    ) -> NoReturn:
        if self.metrics is not None:
            self.metrics.record_error(operation, "RESOURCE_NOT_FOUND")
        raise_resource_not_found(
            service=SERVICE_NAME,
            operation=operation,
            resource_type="DefaultGradingSystem",
            resource_id=str(institution_id),
            correlation_id=correlation_id,
        )

    def _record_operation(self, operation: str, outcome: str = "success") -> None:
        if self.metrics is not None:
            self.metrics.record_operation(operation, outcome)

    def _record_initialization(self, created: bool) -> None:
        if self.metrics is not None:
            self.metrics.record_initialization(created)
