from __future__ import annotations

from typing import AsyncIterator

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from prometheus_client import REGISTRY, CollectorRegistry
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from services.grading_service.config import Settings, settings
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
from services.grading_service.protocols import (
    GradingStrategyFactoryProtocol,
    GradingSystemRepositoryProtocol,
    GradingSystemServiceProtocol,
    SessionProviderProtocol,
)
from services.grading_service.strategies.factory import GradingStrategyFactory


class DatabaseProvider(Provider):
    """Provides the engine and session provider.

    An externally created engine (tests, embedding callers) is used as-is and
    left for its owner to dispose.
    """

    def __init__(self, engine: AsyncEngine | None = None) -> None:
        super().__init__()
        self._engine = engine

    @provide(scope=Scope.APP)
    async def provide_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        if self._engine is not None:
            yield self._engine
            return

        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=settings.DATABASE_POOL_PRE_PING,
            pool_recycle=settings.DATABASE_POOL_RECYCLE,
        )
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def provide_session_provider(self, engine: AsyncEngine) -> SessionProviderProtocol:
        return GradingSessionProviderImpl(engine)


class RepositoryProvider(Provider):
    @provide(scope=Scope.APP)
    def provide_grading_system_repository(
        self, metrics: GradingMetrics
    ) -> GradingSystemRepositoryProtocol:
        return SQLAlchemyGradingSystemRepository(metrics)


class ServiceProvider(Provider):
    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return settings

    @provide(scope=Scope.APP)
    def provide_strategy_factory(self, settings: Settings) -> GradingStrategyFactoryProtocol:
        return GradingStrategyFactory(score_resolution=settings.SCORE_RESOLUTION)

    @provide(scope=Scope.REQUEST)
    def provide_grading_system_service(
        self,
        session_provider: SessionProviderProtocol,
        repository: GradingSystemRepositoryProtocol,
        strategy_factory: GradingStrategyFactoryProtocol,
        settings: Settings,
        metrics: GradingMetrics,
    ) -> GradingSystemServiceProtocol:
        return GradingSystemServiceImpl(
            session_provider=session_provider,
            repository=repository,
            strategy_factory=strategy_factory,
            score_resolution=settings.SCORE_RESOLUTION,
            metrics=metrics,
        )


class MetricsProvider(Provider):
    """Provides Prometheus metrics-related dependencies."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        super().__init__()
        self._registry = registry

    @provide(scope=Scope.APP)
    def provide_registry(self) -> CollectorRegistry:
        """Provide the collector registry, the default one unless overridden."""
        return self._registry if self._registry is not None else REGISTRY

    @provide(scope=Scope.APP)
    def provide_metrics(self, registry: CollectorRegistry) -> GradingMetrics:
        """Provide an application-scoped instance of the metrics container."""
        return GradingMetrics(registry)


def create_container(
    engine: AsyncEngine | None = None, registry: CollectorRegistry | None = None
) -> AsyncContainer:
    """Create and configure the application's dependency injection container."""
    return make_async_container(
        DatabaseProvider(engine),
        RepositoryProvider(),
        ServiceProvider(),
        MetricsProvider(registry),
    )
