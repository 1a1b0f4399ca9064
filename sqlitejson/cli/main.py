"""Main CLI entry point for sqlitejson."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from sqlitejson import __version__
from sqlitejson.cli.output import (
    console,
    console_err,
    print_document,
    print_error,
    print_info,
    print_names,
    print_success,
)
from sqlitejson.config import Settings, get_settings
from sqlitejson.exceptions import ConfigurationError, SqliteJsonError, get_exit_code
from sqlitejson.export.exporter import open_exporter
from sqlitejson.export.models import ExportRequest, coerce_request
from sqlitejson.logging_config import get_logger, log_error, setup_logging

app = typer.Typer(
    name="sqlitejson",
    help="Export SQLite tables and queries as JSON",
    add_completion=False,
    rich_markup_mode="rich",
)

logger = get_logger(__name__)


class CLIState:
    """Global CLI state."""

    verbose: bool = False


state = CLIState()


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"sqlitejson version: {__version__}")
        console.print(f"Python: {sys.version.split()[0]}")
        raise typer.Exit(0)


@app.command()
def export(
    database: Path = typer.Argument(..., help="Path to the SQLite database file"),
    sql: Optional[str] = typer.Argument(
        None, help="SQL statement; overrides --table and --where"
    ),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Table to export"),
    where: Optional[str] = typer.Option(
        None, "--where", "-w", help="SQL WHERE expression used with --table"
    ),
    columns: Optional[str] = typer.Option(
        None, "--columns", "-c", help="Comma-separated list of columns"
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Key the output object by this column"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write JSON to this file instead of stdout"
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", "-i", min=0, help="Pretty-print with this indentation"
    ),
    tables: bool = typer.Option(False, "--tables", help="List tables and exit"),
    views: bool = typer.Option(False, "--views", help="Include views with --tables"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version information and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Export rows from a SQLite database as JSON.

    Examples:
        sqlitejson data.db --table presidents

        sqlitejson data.db --table presidents --key name --columns id

        sqlitejson data.db --table presidents --where "name = 'Adams'"

        sqlitejson data.db "SELECT name FROM presidents" --output names.json

        sqlitejson data.db --tables
    """
    state.verbose = verbose

    try:
        settings = _load_settings(config, indent)
        setup_logging("DEBUG" if verbose else None)

        if tables:
            names = asyncio.run(_list(database, settings, views))
            print_names(names)
            return

        if verbose:
            print_info(f"Reading database: {database}")

        request = coerce_request(
            {"table": table, "sql": sql, "where": where, "columns": columns, "key": key}
        )
        document = asyncio.run(_export(database, settings, request, output))

        if output:
            print_success(f"Exported to: {output}")
        else:
            print_document(document)

    except SqliteJsonError as e:
        handle_error(e)


def _load_settings(config: Path | None, indent: int | None) -> Settings:
    """Resolve settings for one run, applying the --indent override.

    Raises:
        ConfigurationError: If a setting from the environment or config file
            is invalid
    """
    try:
        settings = get_settings(config_path=config, reload=config is not None)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    if indent is not None:
        settings = settings.model_copy(update={"json_indent": indent})
    return settings


async def _export(database, settings, request: ExportRequest, output: Path | None) -> str:
    async with open_exporter(database, settings=settings) as exporter:
        if output:
            return await exporter.save(request, output)
        return await exporter.json(request)


async def _list(database, settings, include_views: bool) -> list[str]:
    async with open_exporter(database, settings=settings) as exporter:
        names = await exporter.tables()
        if include_views:
            names = names + await exporter.views()
        return names


def handle_error(error: SqliteJsonError) -> None:
    """Report an error on stderr and exit with its code.

    Args:
        error: Exception to handle
    """
    if state.verbose:
        log_error(logger, error, "export")

    print_error(f"Error: {error.message}")

    if state.verbose and error.context:
        console_err.print("\n[yellow]Context:[/yellow]")
        for key, value in error.context.items():
            console_err.print(f"  {key}: {value}", markup=False)

    raise typer.Exit(get_exit_code(error))


def main_cli() -> None:
    """Entry point for CLI application with error handling."""
    try:
        app()
    except KeyboardInterrupt:
        console_err.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main_cli()
