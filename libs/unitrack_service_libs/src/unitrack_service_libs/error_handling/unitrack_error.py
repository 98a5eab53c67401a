"""
UniTrackError: the single exception type raised by UniTrack services.

Wraps a structured ErrorDetail and records itself on the active
OpenTelemetry span so failures show up in traces without extra code at
the raise site.
"""

from __future__ import annotations

from typing import Any

from common_core.models.error_models import ErrorDetail
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class UniTrackError(Exception):
    """Exception carrying a structured ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail
        self._record_to_span()

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if span is None or not span.is_recording():
            return

        span.record_exception(self)
        span.set_status(Status(StatusCode.ERROR, self.error_detail.message))
        span.set_attribute("error", True)
        span.set_attribute("error.code", self.error_code)
        span.set_attribute("error.message", self.error_detail.message)
        span.set_attribute("error.service", self.service)
        span.set_attribute("error.operation", self.operation)
        span.set_attribute("correlation_id", self.correlation_id)

        for key, value in self.error_detail.details.items():
            if isinstance(value, (str, bool, int, float)):
                span.set_attribute(f"error.details.{key}", value)
            else:
                span.set_attribute(f"error.details.{key}", str(value))

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging and API responses."""
        return {
            "error": str(self),
            "error_detail": self.error_detail.model_dump(mode="json"),
        }

    def add_detail(self, key: str, value: Any) -> UniTrackError:
        """Return a new error with an extra detail entry; the original is unchanged."""
        new_details = {**self.error_detail.details, key: value}
        new_detail = self.error_detail.model_copy(update={"details": new_details})
        return UniTrackError(new_detail)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.error_detail.message}"

    def __repr__(self) -> str:
        return (
            f"UniTrackError(code={self.error_code}, service={self.service}, "
            f"operation={self.operation}, correlation_id={self.correlation_id})"
        )
