"""Application layer - use cases over the rack configuration domain."""

from .catalog import (
    InMemoryCatalog,
    UnknownCardError,
    part_number_config_for,
    require_card,
    resolve_chassis,
    standard_cards,
)
from .commands import BuildRackCommand, RackSession
from .dtos import RackBuildOutput
from .serialization import SerializedSlot, deserialize_assignment, serialize_assignment

__all__ = [
    "BuildRackCommand",
    "InMemoryCatalog",
    "RackBuildOutput",
    "RackSession",
    "SerializedSlot",
    "UnknownCardError",
    "deserialize_assignment",
    "part_number_config_for",
    "require_card",
    "resolve_chassis",
    "serialize_assignment",
    "standard_cards",
]
