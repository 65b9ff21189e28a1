"""CLI command implementations for the rackbuilder application.

This package contains subcommands for the rackbuilder CLI, including:
- build: Build a rack from a rack file
- chassis: List chassis slot layouts
- validate: Validate a catalog file
"""

from rackbuilder.cli.commands.build import build_command
from rackbuilder.cli.commands.chassis import chassis_command
from rackbuilder.cli.commands.validate import validate_command

__all__ = ["build_command", "chassis_command", "validate_command"]
