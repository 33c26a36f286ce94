"""CLI command for preparing the recipe store.

Usage:
    larder init-db
"""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError

from larder.config import Settings, get_settings
from larder.persistence.db import Database, StoreError

app = typer.Typer(help="Create the recipes table")


async def _init_db(settings: Settings) -> None:
    db = Database.from_settings(settings)
    try:
        await db.create_all()
    finally:
        await db.dispose()


@app.callback(invoke_without_command=True)
def init_db() -> None:
    """Create database tables if they do not exist."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    try:
        asyncio.run(_init_db(settings))
    except StoreError as exc:
        typer.echo(f"Database initialization failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("Database ready")
