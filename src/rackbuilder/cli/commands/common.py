"""Helpers shared by the CLI commands."""

from pathlib import Path

import typer

from rackbuilder.application.catalog import InMemoryCatalog
from rackbuilder.application.config import ConfigError, load_catalog


def display_config_error(error: ConfigError) -> None:
    """Print a configuration loading error to stderr.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            path = detail.get("path") or "<root>"
            typer.echo(f"  {path}: {detail.get('message', 'Unknown error')}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def load_catalog_or_exit(catalog_file: Path | None) -> InMemoryCatalog:
    """Load a catalog file, or the bundled catalog when none is given.

    Exits with code 1 after printing the error if the file is invalid.
    """
    if catalog_file is None:
        return InMemoryCatalog.default()
    try:
        return InMemoryCatalog.from_configuration(load_catalog(catalog_file))
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)
