"""Configuration utilities for UniTrack services."""

from .database_utils import build_database_url
from .service_settings import ServiceSettings

__all__ = ["ServiceSettings", "build_database_url"]
