"""Service protocols for dependency injection.

The slot engine and part number assembler never talk to storage directly.
Application services reach the product catalog through these protocols,
so an in-memory catalog, a JSON file or a hosted database can back them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rackbuilder.domain.value_objects import (
        CardDefinition,
        ChassisType,
        PartNumberConfig,
    )


@runtime_checkable
class CatalogRepositoryProtocol(Protocol):
    """Read-only access to catalog records.

    Every lookup returns None when the record does not exist.

    Example:
        ```python
        class SqlCatalog:
            def get_chassis_type(self, chassis_type_id: str) -> ChassisType | None:
                row = db.fetch_one("SELECT * FROM chassis_types WHERE code = ?", chassis_type_id)
                ...
        ```
    """

    def get_chassis_type(self, chassis_type_id: str) -> ChassisType | None:
        """Look up a chassis type by code or legacy alias."""
        ...

    def get_card_definition(self, card_id: str) -> CardDefinition | None:
        """Look up a Level 3 card by id."""
        ...

    def get_part_number_config(self, chassis_type_id: str) -> PartNumberConfig | None:
        """Look up the part number layout of a chassis type."""
        ...

    def list_chassis_types(self) -> list[ChassisType]:
        """Return every chassis type in the catalog."""
        ...

    def list_cards(self, chassis_type_id: str | None = None) -> list[CardDefinition]:
        """Return catalog cards, optionally only those fitting a chassis."""
        ...
