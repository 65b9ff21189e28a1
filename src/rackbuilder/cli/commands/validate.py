"""Validate command for checking catalog files."""

from pathlib import Path
from typing import Annotated

import typer

from rackbuilder.application.catalog import InMemoryCatalog
from rackbuilder.application.config import ConfigError, load_catalog
from rackbuilder.cli.commands.common import display_config_error


def validate_command(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON catalog file to validate"),
    ],
) -> None:
    """Validate a catalog file.

    Checks JSON syntax, the catalog schema, and the slot layouts and cards
    it defines.

    Exit codes:
        0 - Catalog is valid
        1 - Catalog has errors (cannot be used)

    Example:
        rackbuilder validate my-catalog.json
    """
    typer.echo(f"Validating {catalog_file}...")
    typer.echo()

    try:
        catalog = InMemoryCatalog.from_configuration(load_catalog(catalog_file))
    except ConfigError as e:
        display_config_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    chassis_types = catalog.list_chassis_types()
    cards = catalog.list_cards()
    typer.echo(
        f"Catalog is valid: {len(chassis_types)} chassis type(s), {len(cards)} card(s)."
    )
