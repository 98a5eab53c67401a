"""
Configuration enums shared by UniTrack services.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Runtime environments a UniTrack service can be deployed to."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"
