"""Shared pydantic models for UniTrack services."""

from .error_models import ErrorDetail

__all__ = ["ErrorDetail"]
