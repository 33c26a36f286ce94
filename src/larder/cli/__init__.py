"""CLI commands for Larder.

Provides command-line interface using Typer:
- larder serve: Run the API server
- larder init-db: Create the recipes table

Usage:
    larder --help
    larder serve --port 5000
"""

import typer

from larder.cli.db_cmd import app as db_app
from larder.cli.serve import app as serve_app

# Main CLI application
app = typer.Typer(
    name="larder",
    help="Larder: recipe API with a cached list layer",
    no_args_is_help=True,
)

app.add_typer(serve_app, name="serve")
app.add_typer(db_app, name="init-db")


@app.callback()
def callback() -> None:
    """Larder: recipe API with a cached list layer."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
