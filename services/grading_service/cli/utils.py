"""Shared helpers for CLI commands."""

from __future__ import annotations

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Awaitable, Callable, TypeVar

import typer
from prometheus_client import CollectorRegistry
from sqlalchemy.ext.asyncio import AsyncEngine
from unitrack_service_libs.error_handling import UniTrackError

from services.grading_service.di import create_container
from services.grading_service.protocols import GradingSystemServiceProtocol

T = TypeVar("T")


async def _with_service(fn: Callable[[GradingSystemServiceProtocol], Awaitable[T]]) -> T:
    # Each CLI run is its own process-level app; metrics stay in a private registry
    container = create_container(registry=CollectorRegistry())
    try:
        async with container() as request_container:
            service = await request_container.get(GradingSystemServiceProtocol)
            return await fn(service)
    finally:
        await container.close()


async def _with_engine(fn: Callable[[AsyncEngine], Awaitable[T]]) -> T:
    container = create_container(registry=CollectorRegistry())
    try:
        engine = await container.get(AsyncEngine)
        return await fn(engine)
    finally:
        await container.close()


def run_with_service(fn: Callable[[GradingSystemServiceProtocol], Awaitable[T]]) -> T:
    """Run ``fn`` against a container-provided service, reporting errors as exit code 1."""
    try:
        return asyncio.run(_with_service(fn))
    except UniTrackError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


def run_with_engine(fn: Callable[[AsyncEngine], Awaitable[T]]) -> T:
    return asyncio.run(_with_engine(fn))


def parse_score(value: str) -> Decimal:
    """Parse a CLI score argument without going through float."""
    try:
        parsed = Decimal(value)
    except InvalidOperation as e:
        raise typer.BadParameter(f"'{value}' is not a number") from e
    if not parsed.is_finite():
        raise typer.BadParameter(f"'{value}' is not a finite number")
    return parsed
