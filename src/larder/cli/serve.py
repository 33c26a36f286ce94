"""CLI command for running the API server.

Usage:
    larder serve
    larder serve --port 5000 --host 0.0.0.0
    larder serve --reload --log-level debug

Options left out fall back to the configuration (``LARDER_HOST``, ``PORT``,
``LARDER_LOG_LEVEL``). SIGINT/SIGTERM are handled by uvicorn: it stops
accepting connections, runs the application shutdown (store, then cache)
and exits with code 0.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from larder.config import get_settings

app = typer.Typer(help="Run the Larder API server")


@app.callback(invoke_without_command=True)
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(
        False,
        "--reload",
        "-r",
        help="Enable auto-reload for development",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error",
    ),
) -> None:
    """Run the recipe API under uvicorn.

    Configuration is validated before the server starts: without
    DATABASE_URL the command exits with code 1.
    """
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    host = host or settings.host
    port = port or settings.port
    level = (log_level or settings.log_level).lower()

    typer.echo(f"Starting Larder ({settings.env}) on {host}:{port}, log level {level}")
    if reload:
        typer.echo("Reload enabled")

    uvicorn.run(
        app="larder.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=level,
        # CorrelationMiddleware writes the access log
        access_log=False,
    )
