"""Application commands (use cases) for rack configuration."""

from __future__ import annotations

import logging
from typing import Any

from rackbuilder.application.catalog import (
    InMemoryCatalog,
    part_number_config_for,
    require_card,
    resolve_chassis,
    standard_cards,
)
from rackbuilder.application.config import RackConfiguration
from rackbuilder.application.dtos import RackBuildOutput
from rackbuilder.application.serialization import SerializedSlot, serialize_assignment
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol
from rackbuilder.domain import (
    BOMLineItem,
    CardDefinition,
    ChassisType,
    ChassisTypeUnresolved,
    PartNumberConfig,
    PartNumberResult,
    PlacementError,
    PlacementErrorKind,
    PlacementResult,
    PricedOption,
    SlotAssignment,
    calculate_discounted_margin,
    calculate_total_margin,
    move_card,
    place_card,
    place_standard_cards,
    remove_card,
    render_part_number,
)

logger = logging.getLogger(__name__)


class RackSession:
    """One user's in-progress configuration of one chassis.

    The session owns the current SlotAssignment and replaces it whenever a
    placement succeeds; failed placements leave it untouched. Cards that
    live outside the chassis are kept in selection order.

    Example:
        session = RackSession(catalog, catalog.get_chassis_type("LTX"))
        session.add_card("bushing-monitor")
        session.add_card("relay-8in-2out", target_slot=1)
        print(session.part_number().part_number)
    """

    def __init__(
        self,
        catalog: CatalogRepositoryProtocol,
        chassis: ChassisType,
        assignment: SlotAssignment | None = None,
        outside_cards: list[CardDefinition] | None = None,
    ) -> None:
        self.catalog = catalog
        self.chassis = chassis
        self.part_number_config: PartNumberConfig = part_number_config_for(catalog, chassis)
        self.assignment = assignment if assignment is not None else SlotAssignment()
        self.outside_cards: list[CardDefinition] = list(outside_cards or [])

    def add_card(
        self,
        card_id: str,
        target_slot: int | None = None,
        specifications: dict[str, Any] | None = None,
    ) -> PlacementResult:
        """Add a catalog card, optionally at a requested slot.

        Raises:
            UnknownCardError: If the card is not in the catalog.
        """
        card = require_card(self.catalog, card_id)
        if specifications:
            card = card.with_specifications(**specifications)

        result = place_card(self.chassis, self.assignment, card, target_slot)
        if not result.ok:
            return result

        if card.outside_chassis:
            self.outside_cards = [c for c in self.outside_cards if c.id != card.id]
            self.outside_cards.append(card)
        self.assignment = result.assignment
        return result

    def remove_slot(self, slot: int) -> SlotAssignment:
        """Remove the card at a slot (its whole run)."""
        self.assignment = remove_card(self.assignment, slot)
        return self.assignment

    def remove_outside_card(self, card_id: str) -> bool:
        """Deselect an outside-chassis card. Returns False if not selected."""
        remaining = [c for c in self.outside_cards if c.id != card_id]
        removed = len(remaining) != len(self.outside_cards)
        self.outside_cards = remaining
        return removed

    def move(self, from_slot: int, to_slot: int) -> PlacementResult:
        """Drag the card at ``from_slot`` to ``to_slot``."""
        result = move_card(self.chassis, self.assignment, from_slot, to_slot)
        if result.ok:
            self.assignment = result.assignment
        return result

    def include_standard_cards(self) -> list[PlacementResult]:
        """Place the catalog's standard cards; returns the failures."""
        self.assignment, failures = place_standard_cards(
            self.chassis, self.assignment, standard_cards(self.catalog, self.chassis)
        )
        return failures

    def part_number(self) -> PartNumberResult:
        return render_part_number(
            self.chassis, self.part_number_config, self.assignment, self.outside_cards
        )

    def line_item(self, quantity: int = 1) -> BOMLineItem:
        """Roll the configured chassis up into one BOM line item.

        The chassis is the unit; placed and outside-chassis cards are
        priced as options on top of it, once per unit.
        """
        cards = self.assignment.cards() + self.outside_cards
        options = tuple(
            PricedOption(name=card.name, price=card.price * quantity, cost=card.cost * quantity)
            for card in cards
        )
        return BOMLineItem(
            product_id=f"qtms-{self.chassis.code.lower()}",
            name=self.chassis.name,
            part_number=self.part_number().part_number,
            unit_price=self.chassis.price,
            unit_cost=self.chassis.cost,
            quantity=quantity,
            options=options,
        )

    def serialize(self) -> list[SerializedSlot]:
        return serialize_assignment(self.assignment, self.catalog)


class BuildRackCommand:
    """Command to build a rack from a rack file.

    Applies each card selection in order, collecting placement failures
    rather than stopping at the first one, then renders the part number
    and prices the result.
    """

    def __init__(self, catalog: CatalogRepositoryProtocol | None = None) -> None:
        self.catalog = catalog if catalog is not None else InMemoryCatalog.default()

    def execute(self, rack: RackConfiguration) -> RackBuildOutput:
        """Execute the build.

        Args:
            rack: Validated rack configuration.

        Returns:
            RackBuildOutput with the slot map, part number, pricing, and any
            placement errors.

        Raises:
            UnknownCardError: If the rack references a card not in the catalog.
        """
        chassis = resolve_chassis(self.catalog, rack.chassis_type)
        if isinstance(chassis, ChassisTypeUnresolved):
            return RackBuildOutput(
                errors=[
                    PlacementError(
                        kind=PlacementErrorKind.CHASSIS_TYPE_UNRESOLVED,
                        message=chassis.message,
                    )
                ]
            )

        session = RackSession(self.catalog, chassis)
        errors: list[PlacementError] = []

        if rack.include_standard_cards:
            errors.extend(r.error for r in session.include_standard_cards() if r.error)

        for selection in rack.cards:
            result = session.add_card(
                selection.card_id, selection.slot, dict(selection.specifications)
            )
            if result.error is not None:
                logger.debug(f"Could not place {selection.card_id}: {result.error.message}")
                errors.append(result.error)

        line_item = session.line_item(rack.quantity)
        return RackBuildOutput(
            chassis=chassis,
            assignment=session.assignment,
            outside_cards=list(session.outside_cards),
            part_number=session.part_number(),
            line_item=line_item,
            margin=calculate_total_margin([line_item]),
            discount=calculate_discounted_margin([line_item], rack.discount_percentage),
            errors=errors,
        )
