"""Metrics definitions for the Grading Service."""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram
from unitrack_service_libs.logging_utils import create_service_logger

logger = create_service_logger("grading_service.metrics")


class GradingMetrics:
    """A container for all Prometheus metrics for the service."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        # Conversion metrics
        self.conversions_total = Counter(
            "grading_conversions_total",
            "Total number of score/grade conversions.",
            ["operation", "system_type", "outcome"],
            registry=registry,
        )

        # Lifecycle metrics
        self.grading_system_operations_total = Counter(
            "grading_system_operations_total",
            "Total number of grading system lifecycle operations.",
            ["operation", "outcome"],
            registry=registry,
        )
        self.default_initializations_total = Counter(
            "grading_default_initializations_total",
            "Default grading system initializations per institution.",
            ["result"],
            registry=registry,
        )
        self.errors_total = Counter(
            "grading_errors_total",
            "Total number of grading errors by code.",
            ["operation", "error_code"],
            registry=registry,
        )

        # Database metrics
        self.database_operation_duration_seconds = Histogram(
            "grading_database_operation_duration_seconds",
            "Duration of grading repository operations in seconds.",
            ["operation"],
            registry=registry,
        )

    def record_conversion(self, operation: str, system_type: str, outcome: str) -> None:
        self.conversions_total.labels(
            operation=operation, system_type=system_type, outcome=outcome
        ).inc()

    def record_operation(self, operation: str, outcome: str = "success") -> None:
        self.grading_system_operations_total.labels(operation=operation, outcome=outcome).inc()

    def record_initialization(self, created: bool) -> None:
        self.default_initializations_total.labels(
            result="created" if created else "skipped"
        ).inc()

    def record_error(self, operation: str, error_code: str) -> None:
        self.errors_total.labels(operation=operation, error_code=error_code).inc()

    def record_database_operation(self, operation: str, duration: float) -> None:
        self.database_operation_duration_seconds.labels(operation=operation).observe(duration)

    def get_all_metrics(self) -> Dict[str, Any]:
        return {
            "conversions_total": self.conversions_total,
            "grading_system_operations_total": self.grading_system_operations_total,
            "default_initializations_total": self.default_initializations_total,
            "errors_total": self.errors_total,
            "database_operation_duration_seconds": self.database_operation_duration_seconds,
        }
