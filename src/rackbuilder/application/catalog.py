"""In-memory catalog repository.

The hosted product database is out of reach of the core; this catalog
serves the same three lookups from a validated catalog file. A default
catalog for the QTMS chassis family ships with the package.

The functions at the bottom of the module work against any
CatalogRepositoryProtocol, so application services never depend on the
in-memory implementation.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Iterable, Mapping

from rackbuilder.application.config import (
    CatalogConfiguration,
    ConfigError,
    config_to_card,
    config_to_chassis_type,
    config_to_part_number_config,
    load_catalog_from_dict,
)
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol
from rackbuilder.domain.slot_config import (
    ChassisTypeUnresolved,
    SlotConfigurationTable,
    normalize_chassis_key,
)
from rackbuilder.domain.value_objects import (
    CardDefinition,
    ChassisType,
    PartNumberConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PACKAGE = "rackbuilder.application.data"
DEFAULT_CATALOG_FILE = "default_catalog.json"


class InMemoryCatalog:
    """Catalog repository backed by plain dictionaries.

    Implements CatalogRepositoryProtocol. Chassis lookups accept legacy
    aliases through the catalog's SlotConfigurationTable.

    Example:
        catalog = InMemoryCatalog.default()
        chassis = catalog.get_chassis_type("14-card")   # LTX
        card = catalog.get_card_definition("bushing-monitor")
    """

    def __init__(
        self,
        chassis_types: Iterable[ChassisType],
        cards: Iterable[CardDefinition] = (),
        part_number_configs: Mapping[str, PartNumberConfig] | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._table = SlotConfigurationTable(chassis_types, aliases)
        self._cards: dict[str, CardDefinition] = {}
        for card in cards:
            if card.id in self._cards:
                raise ValueError(f"Card '{card.id}' defined twice")
            self._cards[card.id] = card
        self._part_numbers = {
            code.upper(): config for code, config in (part_number_configs or {}).items()
        }

    @classmethod
    def from_configuration(cls, config: CatalogConfiguration) -> InMemoryCatalog:
        """Build a catalog from a validated catalog file.

        Raises:
            ConfigError: If a record breaks a domain invariant.
        """
        try:
            chassis_types = [config_to_chassis_type(c) for c in config.chassis_types]
            by_code = {c.code: c for c in chassis_types}
            part_numbers = {
                pn.chassis_type.upper(): config_to_part_number_config(
                    pn, by_code[pn.chassis_type.upper()]
                )
                for pn in config.part_numbers
            }
            cards = [config_to_card(c) for c in config.cards]
        except ValueError as e:
            raise ConfigError(
                message=f"Invalid catalog record: {e}",
                error_type="validation",
                details=[{"path": "", "message": str(e)}],
            ) from e

        missing = [code for code in by_code if code not in part_numbers]
        if missing:
            logger.warning(
                f"No part number layout for chassis {', '.join(missing)}; using defaults"
            )
        # Built-in legacy aliases apply unless the file lists its own
        return cls(chassis_types, cards, part_numbers, config.aliases or None)

    @classmethod
    def default(cls) -> InMemoryCatalog:
        """Load the catalog bundled with the package."""
        data_file = resources.files(DEFAULT_CATALOG_PACKAGE).joinpath(DEFAULT_CATALOG_FILE)
        data = json.loads(data_file.read_text(encoding="utf-8"))
        return cls.from_configuration(load_catalog_from_dict(data))

    @property
    def slot_table(self) -> SlotConfigurationTable:
        return self._table

    def get_chassis_type(self, chassis_type_id: str) -> ChassisType | None:
        chassis = self._table.resolve(chassis_type_id)
        return chassis if isinstance(chassis, ChassisType) else None

    def get_card_definition(self, card_id: str) -> CardDefinition | None:
        return self._cards.get(card_id)

    def get_part_number_config(self, chassis_type_id: str) -> PartNumberConfig | None:
        chassis = self.get_chassis_type(chassis_type_id)
        if chassis is None:
            return None
        return self._part_numbers.get(chassis.code.upper())

    def list_chassis_types(self) -> list[ChassisType]:
        return self._table.chassis_types()

    def list_cards(self, chassis_type_id: str | None = None) -> list[CardDefinition]:
        cards = sorted(self._cards.values(), key=lambda card: (card.sort_order, card.id))
        if chassis_type_id is None:
            return cards
        chassis = self.get_chassis_type(chassis_type_id)
        if chassis is None:
            return []
        return [card for card in cards if card.fits_chassis(chassis)]


class UnknownCardError(Exception):
    """Raised when a card id is not in the catalog."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


# Lookups shared by every catalog backend, built on the repository protocol.


def resolve_chassis(
    catalog: CatalogRepositoryProtocol, chassis_type_id: str
) -> ChassisType | ChassisTypeUnresolved:
    """Resolve a chassis string, keeping the typed unresolved result."""
    chassis = catalog.get_chassis_type(chassis_type_id)
    if chassis is None:
        return ChassisTypeUnresolved(
            raw=chassis_type_id, normalized=normalize_chassis_key(chassis_type_id or "")
        )
    return chassis


def require_card(catalog: CatalogRepositoryProtocol, card_id: str) -> CardDefinition:
    """Look up a card, raising when the catalog has no such card.

    Raises:
        UnknownCardError: If no card has the given id.
    """
    card = catalog.get_card_definition(card_id)
    if card is None:
        raise UnknownCardError(card_id)
    return card


def part_number_config_for(
    catalog: CatalogRepositoryProtocol, chassis: ChassisType
) -> PartNumberConfig:
    """Return the chassis' part number layout, or the default layout."""
    return catalog.get_part_number_config(chassis.code) or PartNumberConfig.default_for(chassis)


def standard_cards(
    catalog: CatalogRepositoryProtocol, chassis: ChassisType
) -> list[CardDefinition]:
    """Return standard cards that fit the chassis, in catalog order."""
    return [card for card in catalog.list_cards(chassis.code) if card.is_standard]
