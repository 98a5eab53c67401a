"""Tests for logging_utils processors and configuration."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Generator
from unittest.mock import Mock, patch

import pytest
import structlog
from structlog.contextvars import clear_contextvars, get_contextvars

from unitrack_service_libs.logging_utils import (
    add_service_context,
    add_trace_context,
    bind_operation_context,
    configure_service_logging,
    create_service_logger,
)


@pytest.fixture(autouse=True)
def clean_logging_config() -> Generator[None, None, None]:
    """Reset logging configuration after each test to prevent pollution."""
    yield
    logging.root.handlers.clear()
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
    clear_contextvars()


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_name_and_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_NAME", "grading_service")
        monkeypatch.setenv("ENVIRONMENT", "production")

        result = add_service_context(None, "", {"message": "test"})

        assert result["service.name"] == "grading_service"
        assert result["deployment.environment"] == "production"
        assert result["message"] == "test"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        result = add_service_context(None, "", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


class TestAddTraceContext:
    """Tests for the add_trace_context processor."""

    def test_adds_ids_for_valid_span(self) -> None:
        span_context = Mock(is_valid=True, trace_id=1, span_id=1)
        span = Mock()
        span.get_span_context.return_value = span_context

        with patch("unitrack_service_libs.logging_utils.get_current_span", return_value=span):
            result = add_trace_context(None, "", {})

        assert result["trace_id"] == "00000000000000000000000000000001"
        assert result["span_id"] == "0000000000000001"

    def test_no_fields_without_valid_span(self) -> None:
        result = add_trace_context(None, "", {"message": "test"})

        assert "trace_id" not in result
        assert "span_id" not in result


class TestConfigureServiceLogging:
    """Tests for configure_service_logging handler setup."""

    def test_stdout_only_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_TO_FILE", raising=False)

        configure_service_logging("grading_service", log_level="INFO")

        assert len(logging.root.handlers) == 1
        assert not isinstance(logging.root.handlers[0], RotatingFileHandler)

    def test_file_handler_when_enabled(self, tmp_path: Path) -> None:
        log_path = tmp_path / "nested" / "grading.log"

        configure_service_logging(
            "grading_service", log_to_file=True, log_file_path=str(log_path)
        )

        file_handlers = [h for h in logging.root.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert log_path.parent.exists()

    def test_log_level_applied(self) -> None:
        configure_service_logging("grading_service", log_level="DEBUG")
        assert logging.root.level == logging.DEBUG


class TestContextBinding:
    """Tests for logger creation and context binding."""

    def test_create_service_logger_binds_name(self) -> None:
        logger: Any = create_service_logger("grading.test")
        assert logger is not None

    def test_bind_operation_context_replaces_previous_values(self) -> None:
        bind_operation_context("first", institution_id="inst-1")
        bind_operation_context("second")

        context = get_contextvars()
        assert context == {"correlation_id": "second"}
