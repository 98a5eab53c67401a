"""Request builders shared by grading service tests."""

from __future__ import annotations

import uuid
from decimal import Decimal

from services.grading_service.api_models import CreateGradingSystemRequest, GradeScaleRequest


def pass_fail_scales() -> list[GradeScaleRequest]:
    """A two-band custom table covering [0, 100]."""
    return [
        GradeScaleRequest(
            grade="P",
            description="Pass",
            minimum_score=Decimal("50"),
            maximum_score=Decimal("100"),
            gpa_value=4.0,
        ),
        GradeScaleRequest(
            grade="F",
            description="Fail",
            minimum_score=Decimal("0"),
            maximum_score=Decimal("49.99"),
            gpa_value=0.0,
        ),
    ]


def custom_request(
    institution_id: uuid.UUID,
    name: str = "Pass/Fail",
    is_default: bool = False,
    grade_scales: list[GradeScaleRequest] | None = None,
) -> CreateGradingSystemRequest:
    return CreateGradingSystemRequest(
        name=name,
        description="Institution pass/fail table",
        type="Custom",
        is_default=is_default,
        minimum_passing_score=Decimal("50"),
        maximum_score=Decimal("100"),
        institution_id=institution_id,
        grade_scales=grade_scales if grade_scales is not None else pass_fail_scales(),
    )
