"""Shared test fixtures and configuration for Grading Service tests."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, AsyncGenerator

import pytest
from prometheus_client import REGISTRY, CollectorRegistry
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from services.grading_service.implementations.grading_system_repository_impl import (
    SQLAlchemyGradingSystemRepository,
)
from services.grading_service.implementations.grading_system_service_impl import (
    GradingSystemServiceImpl,
)
from services.grading_service.implementations.session_provider_impl import (
    GradingSessionProviderImpl,
)
from services.grading_service.metrics import GradingMetrics
from services.grading_service.startup_setup import initialize_database_schema
from services.grading_service.strategies.factory import GradingStrategyFactory


@pytest.fixture(autouse=True)
def _clear_prometheus_registry() -> Any:
    """
    Clear the default Prometheus registry before each test.

    Prevents "Duplicated timeseries in CollectorRegistry" errors when several
    tests build metrics against the default registry.
    """
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        REGISTRY.unregister(collector)
    yield


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the grading schema; one shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await initialize_database_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_provider(engine: AsyncEngine) -> GradingSessionProviderImpl:
    return GradingSessionProviderImpl(engine)


@pytest.fixture
def metrics() -> GradingMetrics:
    return GradingMetrics(CollectorRegistry())


@pytest.fixture
def repository(metrics: GradingMetrics) -> SQLAlchemyGradingSystemRepository:
    return SQLAlchemyGradingSystemRepository(metrics)


@pytest.fixture
def grading_service(
    session_provider: GradingSessionProviderImpl,
    repository: SQLAlchemyGradingSystemRepository,
    metrics: GradingMetrics,
) -> GradingSystemServiceImpl:
    return GradingSystemServiceImpl(
        session_provider=session_provider,
        repository=repository,
        strategy_factory=GradingStrategyFactory(),
        score_resolution=Decimal("0.01"),
        metrics=metrics,
    )


@pytest.fixture
def institution_id() -> uuid.UUID:
    return uuid.uuid4()
