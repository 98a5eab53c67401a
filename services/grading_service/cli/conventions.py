"""Built-in grading convention inspection commands."""

from __future__ import annotations

import typer
from common_core.grade_scales import (
    GRADING_CONVENTIONS,
    get_convention,
    validate_grade_for_convention,
)
from common_core.grading_enums import GradingSystemType

conventions_app = typer.Typer(help="Inspect built-in grading conventions")


@conventions_app.command("list")
def list_conventions() -> None:
    """Print built-in grading conventions."""

    for system_type, convention in GRADING_CONVENTIONS.items():
        default = " (default)" if convention.is_default else ""
        typer.echo(
            f"{system_type.value}: {convention.name}{default}, "
            f"{len(convention.bands)} grades, pass >= {convention.minimum_passing_score}"
        )


@conventions_app.command("show")
def show_convention(
    system_type: GradingSystemType = typer.Argument(..., help="Convention to display"),
) -> None:
    """Print the band table of one built-in convention."""

    try:
        convention = get_convention(system_type)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"{convention.name}: {convention.description}")
    for band in convention.bands:
        typer.echo(
            f"  {band.grade:<5} {band.minimum_score:>6} - {band.maximum_score:<6} "
            f"GPA {band.gpa_value:.1f}  {band.description}"
        )


@conventions_app.command("check")
def check_grade(
    system_type: GradingSystemType = typer.Argument(..., help="Convention to check against"),
    grade: str = typer.Argument(..., help="Grade label, matched exactly"),
) -> None:
    """Exit non-zero unless the grade label exists in a built-in convention."""

    try:
        known = validate_grade_for_convention(grade, system_type)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    if not known:
        labels = ", ".join(band.grade for band in get_convention(system_type).bands)
        typer.secho(
            f"'{grade}' is not a {system_type.value} grade. Valid grades: {labels}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo(f"'{grade}' is a valid {system_type.value} grade")
