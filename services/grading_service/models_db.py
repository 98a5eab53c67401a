from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from common_core.grading_enums import GradingSystemType
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Scores carry three decimals so band edges such as 89.999 survive a round trip
SCORE_TYPE = Numeric(8, 3)


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class GradingSystem(Base):
    __tablename__ = "grading_systems"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        # At most one default per institution
        Index(
            "uq_grading_systems_institution_default",
            "institution_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default"),
        ),
        Index(
            "uq_grading_systems_institution_name",
            "institution_id",
            func.lower(text("name")),
            unique=True,
        ),
        CheckConstraint(
            "minimum_passing_score <= maximum_score", name="ck_grading_systems_passing_score"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[GradingSystemType] = mapped_column(
        SQLAlchemyEnum(
            GradingSystemType,
            name="grading_system_type_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        nullable=False,
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    minimum_passing_score: Mapped[Decimal] = mapped_column(SCORE_TYPE, nullable=False)
    maximum_score: Mapped[Decimal] = mapped_column(SCORE_TYPE, nullable=False)
    institution_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    grade_scales: Mapped[list["GradeScale"]] = relationship(
        back_populates="grading_system",
        cascade="all, delete-orphan",
        order_by="GradeScale.minimum_score.desc()",
    )

    def __repr__(self) -> str:
        return (
            f"<GradingSystem(id={self.id}, name='{self.name}', type={self.type}, "
            f"is_default={self.is_default})>"
        )


class GradeScale(Base):
    __tablename__ = "grade_scales"
    __table_args__ = (
        CheckConstraint("minimum_score <= maximum_score", name="ck_grade_scales_bounds"),
        CheckConstraint("gpa_value >= 0 AND gpa_value <= 4", name="ck_grade_scales_gpa"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    grade: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    minimum_score: Mapped[Decimal] = mapped_column(SCORE_TYPE, nullable=False)
    maximum_score: Mapped[Decimal] = mapped_column(SCORE_TYPE, nullable=False)
    gpa_value: Mapped[float] = mapped_column(Float, nullable=False)
    grading_system_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("grading_systems.id", ondelete="CASCADE"), nullable=False, index=True
    )

    grading_system: Mapped["GradingSystem"] = relationship(back_populates="grade_scales")

    def __repr__(self) -> str:
        return (
            f"<GradeScale(grade='{self.grade}', range=[{self.minimum_score}, "
            f"{self.maximum_score}], gpa={self.gpa_value})>"
        )
