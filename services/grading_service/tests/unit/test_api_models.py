"""Unit tests for request and response models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from common_core.grading_enums import GradingSystemType
from pydantic import ValidationError

from services.grading_service.api_models import (
    CreateGradingSystemRequest,
    GradeScaleRequest,
    GradingSystemResponse,
    UpdateGradingSystemRequest,
)
from services.grading_service.strategies import EuropeanGradingStrategy


def test_create_request_defaults() -> None:
    request = CreateGradingSystemRequest(
        name="Pass/Fail",
        type="Custom",
        minimum_passing_score=Decimal("50"),
        institution_id=uuid.uuid4(),
    )

    assert request.type is GradingSystemType.CUSTOM
    assert request.maximum_score == Decimal("100")
    assert request.is_default is False
    assert request.grade_scales == []


def test_create_request_rejects_passing_above_maximum() -> None:
    with pytest.raises(ValidationError, match="minimum_passing_score cannot exceed"):
        CreateGradingSystemRequest(
            name="Broken",
            type=GradingSystemType.CUSTOM,
            minimum_passing_score=Decimal("80"),
            maximum_score=Decimal("70"),
            institution_id=uuid.uuid4(),
        )


def test_create_request_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        CreateGradingSystemRequest(
            name="Swiss",
            type="Swiss",
            minimum_passing_score=Decimal("4"),
            institution_id=uuid.uuid4(),
        )


@pytest.mark.parametrize(
    "field, value",
    [("grade", ""), ("minimum_score", Decimal("-1")), ("gpa_value", 4.5)],
)
def test_grade_scale_request_bounds(field: str, value: object) -> None:
    data: dict[str, object] = {
        "grade": "A",
        "minimum_score": Decimal("90"),
        "maximum_score": Decimal("100"),
        "gpa_value": 4.0,
    }
    data[field] = value
    with pytest.raises(ValidationError):
        GradeScaleRequest(**data)


def test_grade_scale_request_keeps_storage_precision() -> None:
    scale = GradeScaleRequest(
        grade="B", minimum_score=Decimal("80"), maximum_score=Decimal("89.999"), gpa_value=3.0
    )
    assert scale.maximum_score == Decimal("89.999")


def test_grade_scale_request_rejects_finer_than_storage_precision() -> None:
    # 89.9999 would be stored as 90.000 and overlap a band starting at 90
    with pytest.raises(ValidationError, match="decimal places"):
        GradeScaleRequest(
            grade="B",
            minimum_score=Decimal("80"),
            maximum_score=Decimal("89.9999"),
            gpa_value=3.0,
        )


@pytest.mark.parametrize("field", ["minimum_passing_score", "maximum_score"])
def test_system_requests_reject_finer_than_storage_precision(field: str) -> None:
    data: dict[str, object] = {
        "name": "Precise",
        "type": GradingSystemType.CUSTOM,
        "minimum_passing_score": Decimal("50"),
        "institution_id": uuid.uuid4(),
    }
    data[field] = Decimal("59.0001")

    with pytest.raises(ValidationError):
        CreateGradingSystemRequest(**data)
    with pytest.raises(ValidationError):
        UpdateGradingSystemRequest(**{field: Decimal("59.0001")})


def test_update_request_tracks_explicit_fields() -> None:
    request = UpdateGradingSystemRequest(description="Renamed table")
    assert request.model_fields_set == {"description"}


def test_update_request_rejects_empty_scale_list() -> None:
    with pytest.raises(ValidationError):
        UpdateGradingSystemRequest(grade_scales=[])


def test_response_from_entity_orders_scales_descending() -> None:
    system = EuropeanGradingStrategy().create_default_grading_system(uuid.uuid4())
    system.id = uuid.uuid4()
    system.description = system.description or ""
    system.created_at = datetime.now(timezone.utc)
    for scale in system.grade_scales:
        scale.id = uuid.uuid4()
    system.grade_scales.reverse()

    response = GradingSystemResponse.from_entity(system)

    assert response.type is GradingSystemType.EUROPEAN
    assert [s.grade for s in response.grade_scales] == ["A", "B", "C", "D", "E", "FX", "F"]
    assert response.updated_at is None
    assert response.model_dump(mode="json")["grade_scales"][0]["minimum_score"] == "90"
