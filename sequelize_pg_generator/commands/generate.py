"""Generate command - writes Sequelize models and relations from a PostgreSQL schema."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import settings
from ..database import PostgresIntrospector
from ..errors import ConfigurationError
from ..generation import GenerationOptions, ModelGenerator, relations_file_path, validate_output_paths
from ..logging import configure_logging, log_run
from ..modeling import ModelDescriptor

err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]{escape(message)}[/red]")


def _require(value, message: str):
    if value is None or value == "":
        print_error(message)
        raise typer.Exit(1)
    return value


def print_summary(models: List[ModelDescriptor]) -> None:
    """Show the generated models as a table on stderr."""
    summary = Table(title="Generated Models")
    summary.add_column("Table", style="cyan")
    summary.add_column("Model", style="green")
    summary.add_column("Attributes", style="magenta")
    summary.add_column("Associations", style="yellow")
    for model in models:
        summary.add_row(
            model.table_name,
            model.class_name,
            str(len(model.columns)),
            ", ".join(assoc.target_model for assoc in model.associations) or "-",
        )
    err_console.print(summary)


def generate(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="The hostname of the database (or PGHOST env)"),
    dbname: Optional[str] = typer.Option(None, "--dbname", "-d", help="The name of the database (or PGDATABASE env)"),
    username: Optional[str] = typer.Option(None, "--username", "-U", help="The username to connect to PostgreSQL (or PGUSER env)"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="The PostgreSQL password (or PGPASSWORD env)"),
    port: Optional[int] = typer.Option(None, "--port", "-P", help="The port the PostgreSQL server runs on (or PGPORT env)"),
    schema: Optional[str] = typer.Option(None, "--schema", help="The schema to model (default: public)"),
    models_dir: Optional[Path] = typer.Option(None, "--models-dir", help="Output generated models in this directory"),
    relations_file: Optional[Path] = typer.Option(None, "--relations-file", help="Output relations to this file"),
    typescript: bool = typer.Option(False, "--typescript", help="Generate TypeScript instead of JavaScript"),
    indent: Optional[str] = typer.Option(None, "--indent", help="String to use for indentation (default: TAB)"),
    include_foreign_keys: bool = typer.Option(False, "--include-foreign-keys", help="Include foreign key ID fields in table attributes"),
    camel_case: bool = typer.Option(False, "--camel-case", help="Convert field names to camel case"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Output debugging messages to stderr (-vv for queries)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress the success/failure summary"),
):
    """
    Generate Sequelize models and associations for a PostgreSQL schema.

    Writes one definition file per table into --models-dir and one module
    wiring all associations into --relations-file.

    Examples:
        sequelize-pg-generator generate -h localhost -d blog --models-dir ./models --relations-file ./relations
        sequelize-pg-generator generate -h db -d shop -U app --typescript --camel-case --models-dir src/models --relations-file src/relations.ts
    """
    configure_logging(verbosity=verbose, quiet=quiet)

    host = _require(host or settings.pghost, "host is required")
    database = _require(dbname or settings.pgdatabase, "database is required")
    models_dir = _require(models_dir, "models directory is required")
    relations_file = _require(relations_file, "relations file is required")
    schema = schema or settings.pgschema

    options = GenerationOptions(
        models_dir=models_dir,
        relations_file=relations_file_path(relations_file, typescript),
        typescript=typescript,
        indent=indent if indent is not None else settings.indent,
        include_foreign_keys=include_foreign_keys,
        camel_case=camel_case,
    )
    try:
        validate_output_paths(options)
    except ConfigurationError as e:
        print_error(e.message)
        raise typer.Exit(1)

    introspector = PostgresIntrospector(
        database=database,
        host=host,
        port=port or settings.pgport,
        user=username or settings.pguser,
        password=password or settings.pgpassword,
        schema=schema,
    )

    try:
        with log_run(database=database, schema=schema, quiet=quiet, console=err_console) as ctx:
            with introspector:
                models = ModelGenerator(introspector, options, ctx).run()
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        print_error(f"Failed to generate: {message}")
        raise typer.Exit(1)

    if verbose and not quiet:
        print_summary(models)
