"""
common_core.grading_enums - Enums shared by grading system producers and consumers.
"""

from __future__ import annotations

from enum import Enum


class GradingSystemType(str, Enum):
    """Regional grading conventions supported by the platform."""

    AMERICAN = "American"
    EUROPEAN = "European"
    BULGARIAN = "Bulgarian"
    CUSTOM = "Custom"


class GradingStatus(str, Enum):
    """Outcome of comparing a score against a passing threshold."""

    PASS = "Pass"
    FAIL = "Fail"
