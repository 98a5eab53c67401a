"""Grading system administration commands."""

from __future__ import annotations

from uuid import UUID

import typer

from services.grading_service.cli.utils import run_with_engine, run_with_service
from services.grading_service.startup_setup import initialize_database_schema

systems_app = typer.Typer(help="Manage institution grading systems")


@systems_app.command("create-schema")
def create_schema() -> None:
    """Create the grading tables in the configured database."""

    run_with_engine(initialize_database_schema)
    typer.secho("Grading schema ready.", fg=typer.colors.GREEN)


@systems_app.command("init")
def init_systems(
    institution_id: UUID = typer.Argument(..., help="Institution to initialize"),
) -> None:
    """Create the American, European and Bulgarian systems for a new institution."""

    created = run_with_service(
        lambda service: service.initialize_default_grading_systems(institution_id)
    )
    if created:
        typer.secho("Default grading systems created.", fg=typer.colors.GREEN)
    else:
        typer.echo("Institution already has grading systems; nothing to do.")


@systems_app.command("list")
def list_systems(
    institution_id: UUID = typer.Argument(..., help="Institution whose systems to list"),
) -> None:
    """Print the grading systems of an institution."""

    systems = run_with_service(lambda service: service.get_all_for_institution(institution_id))
    if not systems:
        typer.echo("No grading systems.")
        return
    for system in systems:
        marker = " *default*" if system.is_default else ""
        typer.echo(
            f"{system.id}  {system.name} [{system.type.value}] "
            f"{len(system.grade_scales)} grades{marker}"
        )


@systems_app.command("set-default")
def set_default(
    grading_system_id: UUID = typer.Argument(..., help="System to make the default"),
    institution_id: UUID = typer.Argument(..., help="Institution owning the system"),
) -> None:
    """Make a grading system the institution default."""

    changed = run_with_service(
        lambda service: service.set_default(grading_system_id, institution_id)
    )
    if not changed:
        typer.secho(
            "Grading system not found in this institution.", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    typer.secho("Default grading system updated.", fg=typer.colors.GREEN)
