"""Main entrypoint for the CLI."""

from __future__ import annotations

from uuid import uuid4

import typer
from unitrack_service_libs.logging_utils import (
    bind_operation_context,
    configure_service_logging,
)

from services.grading_service.cli.conventions import conventions_app
from services.grading_service.cli.convert import convert_app
from services.grading_service.cli.systems import systems_app
from services.grading_service.config import settings

app = typer.Typer(help="UniTrack grading admin CLI")

app.add_typer(conventions_app, name="conventions")
app.add_typer(systems_app, name="systems")
app.add_typer(convert_app, name="convert")


@app.callback()
def main(
    log_level: str = typer.Option(settings.LOG_LEVEL, help="Logging level"),
) -> None:
    """Configure logging and tag this run with a fresh correlation ID."""

    configure_service_logging(
        settings.SERVICE_NAME, environment=settings.ENVIRONMENT.value, log_level=log_level
    )
    bind_operation_context(uuid4(), command_source="cli")


if __name__ == "__main__":
    app()
