from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, AsyncContextManager, Protocol, Sequence
from uuid import UUID

from common_core.grading_enums import GradingStatus
from sqlalchemy.ext.asyncio import AsyncSession

from services.grading_service.api_models import (
    CreateGradingSystemRequest,
    UpdateGradingSystemRequest,
)
from services.grading_service.models_db import GradeScale, GradingSystem

if TYPE_CHECKING:
    from services.grading_service.strategies.base import GradingStrategy


class SessionProviderProtocol(Protocol):
    """Protocol for providing AsyncSession contexts for grading database access."""

    def session(self) -> AsyncContextManager[AsyncSession]:
        """Provide a session for reads; rolled back and closed on exit."""
        ...  # pragma: no cover

    def transaction(self) -> AsyncContextManager[AsyncSession]:
        """Provide a session inside a transaction: commit on success, rollback and re-raise on error."""
        ...  # pragma: no cover


class GradingSystemRepositoryProtocol(Protocol):
    """Grading system persistence. Every method runs on the caller's session."""

    async def get_by_id(
        self, session: AsyncSession, grading_system_id: UUID, include_scales: bool = True
    ) -> GradingSystem | None: ...

    async def list_all(self, session: AsyncSession) -> list[GradingSystem]: ...

    async def list_for_institution(
        self, session: AsyncSession, institution_id: UUID
    ) -> list[GradingSystem]: ...

    async def get_default_for_institution(
        self, session: AsyncSession, institution_id: UUID
    ) -> GradingSystem | None: ...

    async def get_by_name_and_institution(
        self, session: AsyncSession, name: str, institution_id: UUID
    ) -> GradingSystem | None:
        """Case-insensitive name lookup within one institution."""
        ...

    async def count_for_institution(self, session: AsyncSession, institution_id: UUID) -> int: ...

    def add(self, session: AsyncSession, grading_system: GradingSystem) -> None: ...

    async def flush(self, session: AsyncSession) -> None: ...

    def replace_grade_scales(
        self, grading_system: GradingSystem, grade_scales: Sequence[GradeScale]
    ) -> None:
        """Swap the whole scale collection; the old rows are deleted as orphans."""
        ...

    async def lock_institution(self, session: AsyncSession, institution_id: UUID) -> None:
        """Row-lock every grading system of an institution until the transaction ends."""
        ...

    async def set_default(
        self, session: AsyncSession, grading_system_id: UUID, institution_id: UUID
    ) -> bool:
        """Make one system the institution default. False when it is not in that institution."""
        ...

    async def clear_default(
        self, session: AsyncSession, institution_id: UUID, except_id: UUID | None = None
    ) -> int: ...

    async def delete(self, session: AsyncSession, grading_system_id: UUID) -> bool: ...


class GradingStrategyFactoryProtocol(Protocol):
    """Protocol for selecting grading strategies."""

    def get_strategy(
        self, system_type: Any, correlation_id: UUID | None = None
    ) -> GradingStrategy: ...

    def get_strategy_for_system(
        self, grading_system: GradingSystem, correlation_id: UUID | None = None
    ) -> GradingStrategy: ...

    def built_in_strategies(self) -> list[GradingStrategy]: ...


class GradingSystemServiceProtocol(Protocol):
    """Protocol for the core business logic of the Grading Service."""

    async def get_by_id(
        self, grading_system_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem: ...

    async def get_all(self) -> list[GradingSystem]: ...

    async def get_all_for_institution(self, institution_id: UUID) -> list[GradingSystem]: ...

    async def get_default_for_institution(
        self, institution_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem: ...

    async def get_or_initialize_default(
        self, institution_id: UUID, correlation_id: UUID | None = None
    ) -> GradingSystem:
        """Return the default system, initializing the built-in systems first if needed."""
        ...

    async def create(
        self, request: CreateGradingSystemRequest, correlation_id: UUID | None = None
    ) -> GradingSystem: ...

    async def update(
        self,
        grading_system_id: UUID,
        request: UpdateGradingSystemRequest,
        correlation_id: UUID | None = None,
    ) -> GradingSystem: ...

    async def delete(self, grading_system_id: UUID) -> bool: ...

    async def set_default(self, grading_system_id: UUID, institution_id: UUID) -> bool: ...

    async def initialize_default_grading_systems(self, institution_id: UUID) -> bool: ...

    async def initialize_default_grading_systems_within_transaction(
        self, session: AsyncSession, institution_id: UUID
    ) -> bool:
        """Same as initialize_default_grading_systems, on the caller's open transaction."""
        ...

    async def convert_score_to_grade(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> str: ...

    async def convert_score_to_gpa_points(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> float: ...

    async def determine_status(
        self, grading_system_id: UUID, score: Decimal, correlation_id: UUID | None = None
    ) -> GradingStatus: ...

    async def convert_grade_to_score(
        self, grading_system_id: UUID, grade: str, correlation_id: UUID | None = None
    ) -> Decimal: ...
