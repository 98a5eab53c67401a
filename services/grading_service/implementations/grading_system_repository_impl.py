"""SQLAlchemy repository for grading systems and their grade scales."""

from __future__ import annotations

import time
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from unitrack_service_libs.logging_utils import create_service_logger

from services.grading_service.metrics import GradingMetrics
from services.grading_service.models_db import GradeScale, GradingSystem
from services.grading_service.protocols import GradingSystemRepositoryProtocol

logger = create_service_logger("grading_service.repository")


class SQLAlchemyGradingSystemRepository(GradingSystemRepositoryProtocol):
    """Grading system persistence on an async SQLAlchemy session."""

    def __init__(self, metrics: GradingMetrics | None = None) -> None:
        self.metrics = metrics

    def _record_operation(self, operation: str, start_time: float) -> None:
        if self.metrics is not None:
            self.metrics.record_database_operation(operation, time.time() - start_time)

    async def get_by_id(
        self, session: AsyncSession, grading_system_id: UUID, include_scales: bool = True
    ) -> GradingSystem | None:
        start_time = time.time()
        stmt = select(GradingSystem).where(GradingSystem.id == grading_system_id)
        if include_scales:
            # Always refresh scales so replaced collections are never served stale
            stmt = stmt.options(selectinload(GradingSystem.grade_scales)).execution_options(
                populate_existing=True
            )
        result = await session.execute(stmt)
        self._record_operation("get_by_id", start_time)
        return result.scalars().first()

    async def list_all(self, session: AsyncSession) -> list[GradingSystem]:
        stmt = (
            select(GradingSystem)
            .options(selectinload(GradingSystem.grade_scales))
            .order_by(GradingSystem.institution_id, GradingSystem.name)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_institution(
        self, session: AsyncSession, institution_id: UUID
    ) -> list[GradingSystem]:
        stmt = (
            select(GradingSystem)
            .where(GradingSystem.institution_id == institution_id)
            .options(selectinload(GradingSystem.grade_scales))
            .order_by(GradingSystem.is_default.desc(), GradingSystem.name)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_default_for_institution(
        self, session: AsyncSession, institution_id: UUID
    ) -> GradingSystem | None:
        stmt = (
            select(GradingSystem)
            .where(
                GradingSystem.institution_id == institution_id,
                GradingSystem.is_default.is_(True),
            )
            .options(selectinload(GradingSystem.grade_scales))
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_by_name_and_institution(
        self, session: AsyncSession, name: str, institution_id: UUID
    ) -> GradingSystem | None:
        stmt = select(GradingSystem).where(
            GradingSystem.institution_id == institution_id,
            func.lower(GradingSystem.name) == name.lower(),
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def count_for_institution(self, session: AsyncSession, institution_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(GradingSystem)
            .where(GradingSystem.institution_id == institution_id)
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    def add(self, session: AsyncSession, grading_system: GradingSystem) -> None:
        session.add(grading_system)

    async def flush(self, session: AsyncSession) -> None:
        start_time = time.time()
        await session.flush()
        self._record_operation("flush", start_time)

    def replace_grade_scales(
        self, grading_system: GradingSystem, grade_scales: Sequence[GradeScale]
    ) -> None:
        # Requires grade_scales to be loaded; assignment orphans the old rows
        grading_system.grade_scales = list(grade_scales)

    async def lock_institution(self, session: AsyncSession, institution_id: UUID) -> None:
        stmt = (
            select(GradingSystem.id)
            .where(GradingSystem.institution_id == institution_id)
            .with_for_update()
        )
        await session.execute(stmt)

    async def set_default(
        self, session: AsyncSession, grading_system_id: UUID, institution_id: UUID
    ) -> bool:
        start_time = time.time()
        exists_stmt = select(GradingSystem.id).where(
            GradingSystem.id == grading_system_id,
            GradingSystem.institution_id == institution_id,
        )
        if (await session.execute(exists_stmt)).scalar_one_or_none() is None:
            return False

        # Siblings first, so the partial unique index never sees two defaults
        await self.clear_default(session, institution_id, except_id=grading_system_id)
        await session.execute(
            update(GradingSystem)
            .where(GradingSystem.id == grading_system_id)
            .values(is_default=True)
        )
        self._record_operation("set_default", start_time)
        return True

    async def clear_default(
        self, session: AsyncSession, institution_id: UUID, except_id: UUID | None = None
    ) -> int:
        stmt = update(GradingSystem).where(
            GradingSystem.institution_id == institution_id,
            GradingSystem.is_default.is_(True),
        )
        if except_id is not None:
            stmt = stmt.where(GradingSystem.id != except_id)
        result = await session.execute(stmt.values(is_default=False))
        cleared = result.rowcount or 0
        if cleared:
            logger.info(
                "Cleared previous default grading system",
                institution_id=str(institution_id),
                cleared=cleared,
            )
        return cleared

    async def delete(self, session: AsyncSession, grading_system_id: UUID) -> bool:
        start_time = time.time()
        grading_system = await self.get_by_id(session, grading_system_id, include_scales=True)
        if grading_system is None:
            return False
        await session.delete(grading_system)
        await session.flush()
        self._record_operation("delete", start_time)
        return True
