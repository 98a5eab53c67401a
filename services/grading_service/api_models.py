from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from common_core.grading_enums import GradingSystemType
from pydantic import BaseModel, ConfigDict, Field, model_validator

from services.grading_service.models_db import GradingSystem

# ====================================================================
# Request Models
# ====================================================================


class GradeScaleRequest(BaseModel):
    grade: str = Field(..., min_length=1, max_length=20)
    description: str = Field("", max_length=255)
    minimum_score: Decimal = Field(..., ge=0, le=100, decimal_places=3)
    maximum_score: Decimal = Field(..., ge=0, le=100, decimal_places=3)
    gpa_value: float = Field(..., ge=0.0, le=4.0)


class CreateGradingSystemRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: str = Field("", max_length=500)
    type: GradingSystemType
    is_default: bool = False
    minimum_passing_score: Decimal = Field(..., ge=0, le=100, decimal_places=3)
    maximum_score: Decimal = Field(Decimal("100"), ge=0, le=100, decimal_places=3)
    institution_id: uuid.UUID
    grade_scales: list[GradeScaleRequest] = Field(default_factory=list)

    @model_validator(mode="after")
    def _passing_score_within_maximum(self) -> CreateGradingSystemRequest:
        if self.minimum_passing_score > self.maximum_score:
            raise ValueError("minimum_passing_score cannot exceed maximum_score")
        return self


class UpdateGradingSystemRequest(BaseModel):
    """Partial update; only fields explicitly set are applied."""

    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, max_length=500)
    type: GradingSystemType | None = None
    is_default: bool | None = None
    minimum_passing_score: Decimal | None = Field(None, ge=0, le=100, decimal_places=3)
    maximum_score: Decimal | None = Field(None, ge=0, le=100, decimal_places=3)
    grade_scales: list[GradeScaleRequest] | None = Field(
        None, min_length=1, description="Replaces the whole band set when provided"
    )


# ====================================================================
# Response Models
# ====================================================================


class GradeScaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    grade: str
    description: str
    minimum_score: Decimal
    maximum_score: Decimal
    gpa_value: float


class GradingSystemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    type: GradingSystemType
    is_default: bool
    minimum_passing_score: Decimal
    maximum_score: Decimal
    institution_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None
    grade_scales: list[GradeScaleResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, system: GradingSystem) -> GradingSystemResponse:
        """Build a response from a GradingSystem loaded with its grade scales."""
        return cls(
            id=system.id,
            name=system.name,
            description=system.description,
            type=system.type,
            is_default=system.is_default,
            minimum_passing_score=system.minimum_passing_score,
            maximum_score=system.maximum_score,
            institution_id=system.institution_id,
            created_at=system.created_at,
            updated_at=system.updated_at,
            grade_scales=[
                GradeScaleResponse.model_validate(scale)
                for scale in sorted(
                    system.grade_scales, key=lambda s: s.minimum_score, reverse=True
                )
            ],
        )
