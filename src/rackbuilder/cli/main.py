"""Typer CLI for rack configuration."""

import logging
from typing import Annotated

import typer

from rackbuilder.cli.commands import build_command, chassis_command, validate_command

app = typer.Typer(
    name="rackbuilder",
    help="Place cards into QTMS chassis slots and assemble part numbers.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log placement decisions"),
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="build")(build_command)
app.command(name="chassis")(chassis_command)
app.command(name="validate")(validate_command)


if __name__ == "__main__":
    app()
