"""Grading strategies, one per grading system type."""

from services.grading_service.strategies.american import AmericanGradingStrategy
from services.grading_service.strategies.base import GradingStrategy
from services.grading_service.strategies.bulgarian import BulgarianGradingStrategy
from services.grading_service.strategies.custom import CustomGradingStrategy
from services.grading_service.strategies.european import EuropeanGradingStrategy
from services.grading_service.strategies.factory import GradingStrategyFactory

__all__ = [
    "AmericanGradingStrategy",
    "BulgarianGradingStrategy",
    "CustomGradingStrategy",
    "EuropeanGradingStrategy",
    "GradingStrategy",
    "GradingStrategyFactory",
]
