"""Startup logic for the Grading Service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine
from unitrack_service_libs.logging_utils import create_service_logger

from services.grading_service.models_db import Base

logger = create_service_logger("grading_service.startup")


async def initialize_database_schema(engine: AsyncEngine) -> None:
    """Create grading tables that do not exist yet."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema initialized successfully")
    except Exception as e:
        logger.critical(f"Failed to initialize grading database schema: {e}", exc_info=True)
        raise
