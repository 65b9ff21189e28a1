"""Chassis command for listing chassis slot layouts."""

from pathlib import Path
from typing import Annotated

import typer

from rackbuilder.cli.commands.common import load_catalog_or_exit


def chassis_command(
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Catalog file (default: bundled catalog)"),
    ] = None,
) -> None:
    """List chassis types with their card slots and placement groups.

    Example:
        rackbuilder chassis
    """
    catalog = load_catalog_or_exit(catalog_file)

    typer.echo("Chassis types:")
    typer.echo()
    for chassis in catalog.list_chassis_types():
        slots = chassis.card_slots
        typer.echo(f"  {chassis.code:<6} {chassis.name}")
        typer.echo(f"         Card slots: {slots[0]}-{slots[-1]} (CPU at {chassis.cpu_slot_index})")
        for card_class, groups in chassis.placement_groups.items():
            rendered = ", ".join("[" + ",".join(str(s) for s in group) + "]" for group in groups)
            typer.echo(f"         {card_class} groups: {rendered}")

    aliases = catalog.slot_table.aliases
    if aliases:
        typer.echo()
        typer.echo("Aliases:")
        for alias, code in sorted(aliases.items()):
            typer.echo(f"  {alias} -> {code}")
