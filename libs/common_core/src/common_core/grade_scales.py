"""
Grade scale registry for the Grading Service.

Provides the canonical band tables of the built-in grading conventions
(American letter grades, European ECTS, Bulgarian 2-6 scale). Institutions
receive copies of these tables when their default grading systems are
initialized; after that the persisted copies are authoritative.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from common_core.grading_enums import GradingSystemType


@dataclass(frozen=True)
class GradeBandDefinition:
    """
    One canonical score band.

    Attributes:
        grade: Symbolic grade label (e.g., "A-", "FX", "5.50")
        description: Human-readable meaning of the grade
        minimum_score: Inclusive lower bound of the band
        maximum_score: Inclusive upper bound of the band
        gpa_value: GPA weight awarded for scores in the band
    """

    grade: str
    description: str
    minimum_score: Decimal
    maximum_score: Decimal
    gpa_value: float

    def __post_init__(self) -> None:
        """Validate band bounds."""
        if not self.grade:
            msg = "grade cannot be empty"
            raise ValueError(msg)
        if self.minimum_score > self.maximum_score:
            msg = (
                f"band '{self.grade}' has minimum_score {self.minimum_score} "
                f"above maximum_score {self.maximum_score}"
            )
            raise ValueError(msg)


@dataclass(frozen=True)
class GradingConventionMetadata:
    """
    Metadata and canonical bands for a built-in grading convention.

    Attributes:
        system_type: Convention identifier
        name: Name given to the synthesized grading system
        description: Purpose and context of this convention
        is_default: Whether the synthesized system becomes the institution default
        minimum_passing_score: Lowest passing score
        maximum_score: Score ceiling of the convention
        bands: Bands ordered from highest to lowest
    """

    system_type: GradingSystemType
    name: str
    description: str
    is_default: bool
    minimum_passing_score: Decimal
    maximum_score: Decimal
    bands: tuple[GradeBandDefinition, ...]

    def __post_init__(self) -> None:
        """Validate convention metadata."""
        if not self.bands:
            msg = f"{self.system_type.value} convention must define at least one band"
            raise ValueError(msg)

        grades = [band.grade for band in self.bands]
        if len(grades) != len(set(grades)):
            msg = f"grades must be unique: {grades}"
            raise ValueError(msg)

        if not (Decimal("0") <= self.minimum_passing_score <= self.maximum_score):
            msg = "minimum_passing_score must lie within [0, maximum_score]"
            raise ValueError(msg)

        ordered = sorted(self.bands, key=lambda band: band.minimum_score)
        for lower, upper in zip(ordered, ordered[1:]):
            if upper.minimum_score <= lower.maximum_score:
                msg = f"bands '{lower.grade}' and '{upper.grade}' overlap"
                raise ValueError(msg)

        if ordered[0].minimum_score < 0 or ordered[-1].maximum_score > self.maximum_score:
            msg = f"bands must lie within [0, {self.maximum_score}]"
            raise ValueError(msg)


def _band(grade: str, description: str, low: str, high: str, gpa: float) -> GradeBandDefinition:
    return GradeBandDefinition(
        grade=grade,
        description=description,
        minimum_score=Decimal(low),
        maximum_score=Decimal(high),
        gpa_value=gpa,
    )


# American letter grades on a 4.0 scale
_AMERICAN = GradingConventionMetadata(
    system_type=GradingSystemType.AMERICAN,
    name="American Grading System",
    description="Standard American grading system with letter grades on a 4.0 scale",
    is_default=True,
    minimum_passing_score=Decimal("60"),
    maximum_score=Decimal("100"),
    bands=(
        _band("A+", "Outstanding", "97", "100", 4.0),
        _band("A", "Excellent", "93", "96.99", 4.0),
        _band("A-", "Very Good", "90", "92.99", 3.7),
        _band("B+", "Good Plus", "87", "89.99", 3.3),
        _band("B", "Good", "83", "86.99", 3.0),
        _band("B-", "Good Minus", "80", "82.99", 2.7),
        _band("C+", "Satisfactory Plus", "77", "79.99", 2.3),
        _band("C", "Satisfactory", "73", "76.99", 2.0),
        _band("C-", "Satisfactory Minus", "70", "72.99", 1.7),
        _band("D+", "Poor Plus", "67", "69.99", 1.3),
        _band("D", "Poor", "63", "66.99", 1.0),
        _band("D-", "Poor Minus", "60", "62.99", 0.7),
        _band("F", "Failing", "0", "59.99", 0.0),
    ),
)

# European Credit Transfer System letters, including FX
_EUROPEAN = GradingConventionMetadata(
    system_type=GradingSystemType.EUROPEAN,
    name="European Credit Transfer System (ECTS)",
    description="Standard European grading system using A to F scale",
    is_default=False,
    minimum_passing_score=Decimal("50"),
    maximum_score=Decimal("100"),
    bands=(
        _band("A", "EXCELLENT - outstanding performance with only minor errors", "90", "100", 4.0),
        _band("B", "VERY GOOD - above the average standard but with some errors", "80", "89.99", 3.5),
        _band("C", "GOOD - generally sound work with a number of notable errors", "70", "79.99", 3.0),
        _band("D", "SATISFACTORY - fair but with significant shortcomings", "60", "69.99", 2.5),
        _band("E", "SUFFICIENT - performance meets the minimum criteria", "50", "59.99", 2.0),
        _band("FX", "FAIL - some more work required before the credit can be awarded", "40", "49.99", 1.0),
        _band("F", "FAIL - considerable further work is required", "0", "39.99", 0.0),
    ),
)

# Bulgarian 2-6 scale in quarter steps; 3.00 is the lowest pass
_BULGARIAN = GradingConventionMetadata(
    system_type=GradingSystemType.BULGARIAN,
    name="Bulgarian Grading System",
    description="Bulgarian 2-6 scale grading system",
    is_default=False,
    minimum_passing_score=Decimal("30"),
    maximum_score=Decimal("100"),
    bands=(
        _band("6.00", "Excellent", "92", "100", 4.0),
        _band("5.75", "Very Good Plus", "88", "91.99", 3.8),
        _band("5.50", "Very Good", "83", "87.99", 3.7),
        _band("5.25", "Very Good Minus", "78", "82.99", 3.5),
        _band("5.00", "Good Plus", "73", "77.99", 3.3),
        _band("4.75", "Good", "68", "72.99", 3.0),
        _band("4.50", "Good Minus", "63", "67.99", 2.7),
        _band("4.25", "Average Plus", "58", "62.99", 2.3),
        _band("4.00", "Average", "53", "57.99", 2.0),
        _band("3.75", "Average Minus", "48", "52.99", 1.7),
        _band("3.50", "Poor Plus", "43", "47.99", 1.3),
        _band("3.25", "Poor", "38", "42.99", 1.0),
        _band("3.00", "Poor Minus", "30", "37.99", 0.7),
        _band("2.50", "Fail Plus", "25", "29.99", 0.3),
        _band("2.00", "Fail", "0", "24.99", 0.0),
    ),
)

# Registry mapping built-in system types to their conventions
GRADING_CONVENTIONS: dict[GradingSystemType, GradingConventionMetadata] = {
    _AMERICAN.system_type: _AMERICAN,
    _EUROPEAN.system_type: _EUROPEAN,
    _BULGARIAN.system_type: _BULGARIAN,
}


def get_convention(system_type: GradingSystemType) -> GradingConventionMetadata:
    """
    Retrieve the built-in convention for a grading system type.

    Args:
        system_type: Built-in grading system type

    Returns:
        GradingConventionMetadata for the requested type

    Raises:
        ValueError: If the type has no built-in convention (e.g., Custom)
    """
    if system_type not in GRADING_CONVENTIONS:
        available = ", ".join(t.value for t in list_available_conventions())
        msg = f"No built-in convention for '{system_type}'. Available conventions: {available}"
        raise ValueError(msg)
    return GRADING_CONVENTIONS[system_type]


def list_available_conventions() -> list[GradingSystemType]:
    """Get the built-in convention types in initialization order."""
    return list(GRADING_CONVENTIONS.keys())


def validate_grade_for_convention(grade: str, system_type: GradingSystemType) -> bool:
    """
    Check if a grade label exists in a built-in convention.

    Raises:
        ValueError: If the type has no built-in convention
    """
    convention = get_convention(system_type)
    return any(band.grade == grade for band in convention.bands)
