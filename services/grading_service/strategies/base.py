"""Abstract grading strategy shared by all grading system types."""

from __future__ import annotations

from abc import ABC
from decimal import Decimal
from typing import ClassVar, Sequence
from uuid import UUID

from common_core.grade_scales import GradingConventionMetadata, get_convention
from common_core.grading_enums import GradingStatus, GradingSystemType

from services.grading_service.models_db import GradeScale, GradingSystem
from services.grading_service.scale_lookup import (
    DEFAULT_SCORE_RESOLUTION,
    GradeBand,
    Score,
    bands_from_convention,
    find_band,
    find_band_by_grade,
    to_score,
)


class GradingStrategy(ABC):
    """
    Converts scores for one grading system type.

    An instance is bound to an immutable tuple of bands: the canonical ones
    of its convention when constructed without bands, or a snapshot of a
    persisted system's own scales when built by the factory for that system.
    """

    system_type: ClassVar[GradingSystemType]

    def __init__(
        self,
        bands: Sequence[GradeBand] | None = None,
        resolution: Decimal = DEFAULT_SCORE_RESOLUTION,
    ) -> None:
        if bands is None:
            bands = self.canonical_bands()
        self._resolution = resolution
        self._bands: tuple[GradeBand, ...] = tuple(
            sorted(bands, key=lambda band: band.minimum_score, reverse=True)
        )

    @classmethod
    def canonical_bands(cls) -> tuple[GradeBand, ...]:
        return bands_from_convention(get_convention(cls.system_type))

    @property
    def bands(self) -> tuple[GradeBand, ...]:
        return self._bands

    def create_default_grading_system(self, institution_id: UUID) -> GradingSystem:
        """Build a new, unsaved GradingSystem holding this type's canonical scales."""
        return self._system_from_convention(get_convention(self.system_type), institution_id)

    def convert_score_to_grade(self, score: Score, correlation_id: UUID | None = None) -> str:
        band = find_band(
            score,
            self._bands,
            resolution=self._resolution,
            operation="convert_score_to_grade",
            correlation_id=correlation_id,
        )
        return band.grade

    def convert_score_to_gpa_points(
        self, score: Score, correlation_id: UUID | None = None
    ) -> float:
        band = find_band(
            score,
            self._bands,
            resolution=self._resolution,
            operation="convert_score_to_gpa_points",
            correlation_id=correlation_id,
        )
        return band.gpa_value

    def determine_status(self, score: Score, passing_threshold: Score) -> GradingStatus:
        """Pass when score >= threshold. No band lookup is involved."""
        if to_score(score) >= to_score(passing_threshold):
            return GradingStatus.PASS
        return GradingStatus.FAIL

    def convert_grade_to_score(self, grade: str, correlation_id: UUID | None = None) -> Decimal:
        """
        Return the midpoint of the band labelled ``grade``.

        The inverse is lossy: every score in a band maps back to the same
        representative value, which always lies inside that band.
        """
        band = find_band_by_grade(
            grade, self._bands, operation="convert_grade_to_score", correlation_id=correlation_id
        )
        return band.midpoint

    @staticmethod
    def _system_from_convention(
        convention: GradingConventionMetadata, institution_id: UUID
    ) -> GradingSystem:
        return GradingSystem(
            name=convention.name,
            description=convention.description,
            type=convention.system_type,
            is_default=convention.is_default,
            minimum_passing_score=convention.minimum_passing_score,
            maximum_score=convention.maximum_score,
            institution_id=institution_id,
            grade_scales=[
                GradeScale(
                    grade=band.grade,
                    description=band.description,
                    minimum_score=band.minimum_score,
                    maximum_score=band.maximum_score,
                    gpa_value=band.gpa_value,
                )
                for band in convention.bands
            ],
        )
