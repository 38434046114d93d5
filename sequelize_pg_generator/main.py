"""sequelize-pg-generator - Main entry point."""

import typer
from rich.console import Console

from . import __version__
from .commands.generate import generate
from .config import settings

app = typer.Typer(
    name="sequelize-pg-generator",
    help="Generate Sequelize models, relations and associations for a PostgreSQL database",
    add_completion=False,
)

app.command(name="generate")(generate)

console = Console()


def _version_callback(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Host: {settings.pghost or 'Not set'}")
    console.print(f"  Port: {settings.pgport or 'Default'}")
    console.print(f"  User: {settings.pguser or 'Not set'}")
    console.print(f"  Password configured: {'Yes' if settings.pgpassword else 'No'}")
    console.print(f"  Database: {settings.pgdatabase or 'Not set'}")
    console.print(f"  Schema: {settings.pgschema}")
    console.print(f"  Indent: {settings.indent!r}")


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """
    sequelize-pg-generator - Generate Sequelize models from a PostgreSQL schema.

    Connection settings fall back to the PGHOST, PGPORT, PGUSER, PGPASSWORD
    and PGDATABASE environment variables.

    Examples:

        sequelize-pg-generator generate -h localhost -d blog --models-dir ./models --relations-file ./relations

        sequelize-pg-generator generate -d blog --typescript --models-dir ./models --relations-file ./relations.ts

        sequelize-pg-generator config
    """
    pass


if __name__ == "__main__":
    app()
