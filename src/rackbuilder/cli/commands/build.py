"""Build command for assembling a rack from a rack file.

This module provides the `build` command that applies the card selections
of a rack file to a chassis in order, then prints the slot map, the part
number and the BOM totals.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from rackbuilder.application.catalog import UnknownCardError
from rackbuilder.application.commands import BuildRackCommand
from rackbuilder.application.config import ConfigError, load_rack_config
from rackbuilder.application.dtos import RackBuildOutput
from rackbuilder.application.serialization import serialize_assignment
from rackbuilder.cli.commands.common import display_config_error, load_catalog_or_exit
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol
from rackbuilder.domain import render_template


def build_command(
    rack_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON rack file"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Catalog file (default: bundled catalog)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
) -> None:
    """Build a rack from a rack file.

    Exit codes:
        0 - Every card was placed
        1 - The rack file is invalid or a card could not be placed

    Example:
        rackbuilder build my-rack.json
    """
    catalog = load_catalog_or_exit(catalog_file)

    try:
        rack = load_rack_config(rack_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)

    try:
        output = BuildRackCommand(catalog).execute(rack)
    except UnknownCardError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(_output_to_dict(output, catalog), indent=2))
    else:
        _display_output(output)

    if not output.is_valid:
        for error in output.errors:
            typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(code=1)


def _display_output(output: RackBuildOutput) -> None:
    chassis = output.chassis
    if chassis is None:
        return

    typer.echo(f"Chassis: {chassis.code} ({chassis.name})")
    typer.echo()
    typer.echo("Slot  Card                      Code")
    for slot in range(chassis.total_slots + 1):
        occupant = output.assignment.occupant(slot)
        if slot == chassis.cpu_slot_index:
            typer.echo(f"{slot:>4}  {'CPU':<24}")
        elif occupant is None:
            typer.echo(f"{slot:>4}  {'-':<24}")
        else:
            code, _ = render_template(occupant.card.template, occupant.card.specifications)
            label = occupant.card.id if slot == occupant.anchor else f"  (cont. {occupant.anchor})"
            typer.echo(f"{slot:>4}  {label:<24}  {code}")

    if output.outside_cards:
        typer.echo()
        typer.echo("Outside chassis:")
        for card in output.outside_cards:
            typer.echo(f"  {card.id}")

    if output.part_number is not None:
        typer.echo()
        typer.echo(f"Part number: {output.part_number.part_number}")
    for warning in output.warnings:
        typer.echo(f"Warning: {warning}")

    if output.line_item is not None and output.margin is not None:
        typer.echo()
        typer.echo(f"Quantity:  {output.line_item.quantity}")
        typer.echo(f"Revenue:   {output.margin.total_revenue:,.2f}")
        typer.echo(f"Cost:      {output.margin.total_cost:,.2f}")
        typer.echo(f"Margin:    {output.margin.margin_percentage:.1f}%")
        if output.discount is not None and output.discount.discount_amount:
            typer.echo(f"Discounted revenue: {output.discount.discounted_revenue:,.2f}")
            typer.echo(f"Discounted margin:  {output.discount.discounted_margin:.1f}%")


def _output_to_dict(output: RackBuildOutput, catalog: CatalogRepositoryProtocol) -> dict:
    result: dict = {
        "is_valid": output.is_valid,
        "chassis_type": output.chassis.code if output.chassis else None,
        "slots": [row.model_dump() for row in serialize_assignment(output.assignment, catalog)],
        "outside_cards": [card.id for card in output.outside_cards],
        "part_number": output.part_number.part_number if output.part_number else None,
        "warnings": output.warnings,
        "errors": [
            {"kind": e.kind.value, "message": e.message, "card_id": e.card_id, "slot": e.slot}
            for e in output.errors
        ],
    }
    if output.line_item is not None:
        result["quantity"] = output.line_item.quantity
    if output.margin is not None:
        result["revenue"] = output.margin.total_revenue
        result["cost"] = output.margin.total_cost
        result["margin_percentage"] = output.margin.margin_percentage
    if output.discount is not None:
        result["discount_amount"] = output.discount.discount_amount
        result["discounted_revenue"] = output.discount.discounted_revenue
        result["discounted_margin"] = output.discount.discounted_margin
    return result
