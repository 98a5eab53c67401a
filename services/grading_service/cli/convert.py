"""Score and grade conversion commands."""

from __future__ import annotations

from uuid import UUID

import typer

from services.grading_service.cli.utils import parse_score, run_with_service

convert_app = typer.Typer(help="Convert scores and grades with a grading system")


@convert_app.command("score-to-grade")
def score_to_grade(
    grading_system_id: UUID = typer.Argument(...),
    score: str = typer.Argument(..., help="Numeric score, e.g. 89.5"),
) -> None:
    value = parse_score(score)
    typer.echo(
        run_with_service(lambda service: service.convert_score_to_grade(grading_system_id, value))
    )


@convert_app.command("score-to-gpa")
def score_to_gpa(
    grading_system_id: UUID = typer.Argument(...),
    score: str = typer.Argument(...),
) -> None:
    value = parse_score(score)
    gpa = run_with_service(
        lambda service: service.convert_score_to_gpa_points(grading_system_id, value)
    )
    typer.echo(f"{gpa:.1f}")


@convert_app.command("status")
def status(
    grading_system_id: UUID = typer.Argument(...),
    score: str = typer.Argument(...),
) -> None:
    """Pass/fail against the system's minimum passing score."""
    value = parse_score(score)
    result = run_with_service(lambda service: service.determine_status(grading_system_id, value))
    typer.echo(result.value)


@convert_app.command("grade-to-score")
def grade_to_score(
    grading_system_id: UUID = typer.Argument(...),
    grade: str = typer.Argument(..., help="Exact grade label, e.g. B+ or 5.50"),
) -> None:
    """Representative score (band midpoint) for a grade."""
    typer.echo(
        run_with_service(lambda service: service.convert_grade_to_score(grading_system_id, grade))
    )
