"""Session provider implementation for the Grading Service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from unitrack_service_libs.logging_utils import create_service_logger

from services.grading_service.protocols import SessionProviderProtocol

logger = create_service_logger("grading_service.session_provider")


class GradingSessionProviderImpl(SessionProviderProtocol):
    """Provide AsyncSession contexts backed by a shared AsyncEngine."""

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize session provider with shared engine."""
        self._session_maker = async_sessionmaker(
            engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield an AsyncSession and ensure it is closed."""
        session = self._session_maker()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction; commit on success, rollback on error."""
        session = self._session_maker()
        try:
            async with session.begin():
                yield session
        except Exception as e:
            logger.debug("Transaction rolled back", error=str(e))
            raise
        finally:
            await session.close()
