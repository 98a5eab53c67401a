"""
Band lookup over immutable grade scale snapshots.

Strategies never touch ORM rows directly: a GradingSystem's scales are
copied into frozen GradeBand tuples first, and every conversion resolves
against such a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence
from uuid import UUID

from common_core.grade_scales import GradingConventionMetadata
from unitrack_service_libs.error_handling import (
    raise_grade_not_found,
    raise_invalid_grade_scales,
    raise_score_out_of_range,
)
from unitrack_service_libs.logging_utils import create_service_logger

from services.grading_service.constants import SERVICE_NAME

logger = create_service_logger("grading_service.scale_lookup")

Score = Decimal | float | int

# Adjacent bands this close (e.g. 89.99 -> 90) are treated as contiguous
DEFAULT_SCORE_RESOLUTION = Decimal("0.01")


@dataclass(frozen=True)
class GradeBand:
    """Immutable copy of one grade scale row."""

    grade: str
    description: str
    minimum_score: Decimal
    maximum_score: Decimal
    gpa_value: float

    def contains(self, score: Decimal) -> bool:
        return self.minimum_score <= score <= self.maximum_score

    @property
    def midpoint(self) -> Decimal:
        return (self.minimum_score + self.maximum_score) / 2


def to_score(value: Score) -> Decimal:
    """Normalize a numeric score to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def snapshot_bands(scales: Iterable[object]) -> tuple[GradeBand, ...]:
    """
    Copy scale-like objects into GradeBands ordered by descending minimum_score.

    Accepts ORM GradeScale rows, GradeScaleRequest DTOs, or anything else with
    the same attribute names.
    """
    bands = [
        GradeBand(
            grade=scale.grade,  # type: ignore[attr-defined]
            description=scale.description or "",  # type: ignore[attr-defined]
            minimum_score=to_score(scale.minimum_score),  # type: ignore[attr-defined]
            maximum_score=to_score(scale.maximum_score),  # type: ignore[attr-defined]
            gpa_value=float(scale.gpa_value),  # type: ignore[attr-defined]
        )
        for scale in scales
    ]
    return tuple(sorted(bands, key=lambda band: band.minimum_score, reverse=True))


def bands_from_convention(convention: GradingConventionMetadata) -> tuple[GradeBand, ...]:
    return snapshot_bands(convention.bands)


def find_band(
    score: Score,
    bands: Sequence[GradeBand],
    *,
    resolution: Decimal = DEFAULT_SCORE_RESOLUTION,
    operation: str = "find_band",
    correlation_id: UUID | None = None,
) -> GradeBand:
    """
    Return the band whose inclusive range contains the score.

    Bands are scanned from the highest minimum_score down, so at a shared
    boundary the upper band wins. A score between two bands that are at most
    ``resolution`` apart (89.995 between 89.99 and 90) belongs to the lower
    band, matching how ``find_coverage_gaps`` treats such bands as
    contiguous. The score is never clamped.

    Raises:
        UniTrackError: SCORE_OUT_OF_RANGE when no band contains the score
    """
    value = to_score(score)
    ordered = sorted(bands, key=lambda b: b.minimum_score, reverse=True)
    for index, band in enumerate(ordered):
        if band.contains(value):
            return band
        if index > 0 and value > band.maximum_score:
            upper = ordered[index - 1]
            if value < upper.minimum_score and (
                upper.minimum_score - band.maximum_score <= resolution
            ):
                return band

    logger.warning(
        "No grade band contains score",
        score=str(value),
        band_count=len(bands),
        operation=operation,
    )
    raise_score_out_of_range(
        service=SERVICE_NAME,
        operation=operation,
        score=value,
        correlation_id=correlation_id,
        band_count=len(bands),
    )


def find_band_by_grade(
    grade: str,
    bands: Sequence[GradeBand],
    *,
    operation: str = "find_band_by_grade",
    correlation_id: UUID | None = None,
) -> GradeBand:
    """
    Return the band with exactly this grade label (case-sensitive, no trimming).

    Raises:
        UniTrackError: GRADE_NOT_FOUND when no band carries the label
    """
    for band in bands:
        if band.grade == grade:
            return band

    raise_grade_not_found(
        service=SERVICE_NAME,
        operation=operation,
        grade=grade,
        correlation_id=correlation_id,
        available_grades=[band.grade for band in bands],
    )


def find_overlaps(bands: Sequence[GradeBand]) -> list[tuple[GradeBand, GradeBand]]:
    """Return adjacent band pairs (ascending) whose ranges intersect."""
    ordered = sorted(bands, key=lambda b: (b.minimum_score, b.maximum_score))
    overlaps: list[tuple[GradeBand, GradeBand]] = []
    for index, lower in enumerate(ordered):
        for upper in ordered[index + 1 :]:
            if upper.minimum_score > lower.maximum_score:
                break
            overlaps.append((lower, upper))
    return overlaps


def find_coverage_gaps(
    bands: Sequence[GradeBand],
    maximum_score: Decimal,
    resolution: Decimal = DEFAULT_SCORE_RESOLUTION,
) -> list[tuple[Decimal, Decimal]]:
    """
    Return uncovered (start, end) stretches of [0, maximum_score].

    Adjacent bands at most ``resolution`` apart (e.g. 89.99 -> 90) are treated
    as contiguous.
    """
    if not bands:
        return [(Decimal("0"), maximum_score)]

    ordered = sorted(bands, key=lambda b: b.minimum_score)
    gaps: list[tuple[Decimal, Decimal]] = []

    if ordered[0].minimum_score > 0:
        gaps.append((Decimal("0"), ordered[0].minimum_score))

    covered_to = ordered[0].maximum_score
    for band in ordered[1:]:
        if band.minimum_score - covered_to > resolution:
            gaps.append((covered_to, band.minimum_score))
        covered_to = max(covered_to, band.maximum_score)

    if maximum_score - covered_to > resolution:
        gaps.append((covered_to, maximum_score))

    return gaps


def validate_bands(
    bands: Sequence[GradeBand],
    maximum_score: Decimal,
    *,
    resolution: Decimal = DEFAULT_SCORE_RESOLUTION,
    operation: str = "validate_bands",
    correlation_id: UUID | None = None,
) -> list[tuple[Decimal, Decimal]]:
    """
    Reject inverted, out-of-range, duplicated or overlapping bands.

    Gaps are tolerated and returned so callers can log them.

    Raises:
        UniTrackError: INVALID_GRADE_SCALES describing the first problem found
    """
    inverted = [b.grade for b in bands if b.minimum_score > b.maximum_score]
    if inverted:
        raise_invalid_grade_scales(
            service=SERVICE_NAME,
            operation=operation,
            message=f"Grade scales have minimum_score above maximum_score: {inverted}",
            correlation_id=correlation_id,
            grades=inverted,
        )

    out_of_range = [
        b.grade for b in bands if b.minimum_score < 0 or b.maximum_score > maximum_score
    ]
    if out_of_range:
        raise_invalid_grade_scales(
            service=SERVICE_NAME,
            operation=operation,
            message=f"Grade scales fall outside [0, {maximum_score}]: {out_of_range}",
            correlation_id=correlation_id,
            grades=out_of_range,
        )

    grades = [b.grade for b in bands]
    duplicates = sorted({g for g in grades if grades.count(g) > 1})
    if duplicates:
        raise_invalid_grade_scales(
            service=SERVICE_NAME,
            operation=operation,
            message=f"Grade labels must be unique: {duplicates}",
            correlation_id=correlation_id,
            grades=duplicates,
        )

    overlaps = find_overlaps(bands)
    if overlaps:
        pairs = [f"{lower.grade}/{upper.grade}" for lower, upper in overlaps]
        raise_invalid_grade_scales(
            service=SERVICE_NAME,
            operation=operation,
            message=f"Grade scales overlap: {pairs}",
            correlation_id=correlation_id,
            overlapping=pairs,
        )

    return find_coverage_gaps(bands, maximum_score, resolution)
