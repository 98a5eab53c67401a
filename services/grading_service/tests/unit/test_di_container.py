"""Tests for dependency provisioning through the dishka container."""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncIterator

import pytest
from common_core.grading_enums import GradingSystemType
from dishka import AsyncContainer
from prometheus_client import CollectorRegistry
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from services.grading_service.config import Settings
from services.grading_service.di import create_container
from services.grading_service.implementations.grading_system_service_impl import (
    GradingSystemServiceImpl,
)
from services.grading_service.metrics import GradingMetrics
from services.grading_service.protocols import (
    GradingStrategyFactoryProtocol,
    GradingSystemRepositoryProtocol,
    GradingSystemServiceProtocol,
    SessionProviderProtocol,
)


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
async def container(
    engine: AsyncEngine, registry: CollectorRegistry
) -> AsyncIterator[AsyncContainer]:
    container = create_container(engine=engine, registry=registry)
    yield container
    await container.close()


async def test_app_scoped_dependencies_are_singletons(container: AsyncContainer) -> None:
    first = await container.get(GradingSystemRepositoryProtocol)
    second = await container.get(GradingSystemRepositoryProtocol)

    assert first is second
    assert await container.get(GradingStrategyFactoryProtocol) is await container.get(
        GradingStrategyFactoryProtocol
    )
    assert await container.get(SessionProviderProtocol) is not None


async def test_request_scope_builds_service(container: AsyncContainer) -> None:
    settings = await container.get(Settings)

    async with container() as request_container:
        service = await request_container.get(GradingSystemServiceProtocol)

    assert isinstance(service, GradingSystemServiceImpl)
    assert service.score_resolution == settings.SCORE_RESOLUTION == Decimal("0.01")
    assert service.metrics is await container.get(GradingMetrics)


async def test_strategy_factory_treats_narrow_gaps_as_contiguous(
    container: AsyncContainer,
) -> None:
    factory = await container.get(GradingStrategyFactoryProtocol)

    strategy = factory.get_strategy(GradingSystemType.AMERICAN)

    assert strategy.convert_score_to_grade(Decimal("89.995")) == "B+"


async def test_metrics_use_supplied_registry(
    container: AsyncContainer, registry: CollectorRegistry
) -> None:
    metrics = await container.get(GradingMetrics)
    metrics.record_operation("create")

    assert (
        registry.get_sample_value(
            "grading_system_operations_total", {"operation": "create", "outcome": "success"}
        )
        == 1.0
    )


async def test_external_engine_survives_container_close(
    engine: AsyncEngine, registry: CollectorRegistry
) -> None:
    container = create_container(engine=engine, registry=registry)
    assert await container.get(AsyncEngine) is engine
    await container.close()

    async with engine.connect() as conn:
        assert (await conn.execute(text("SELECT 1"))).scalar_one() == 1
