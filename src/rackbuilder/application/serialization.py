"""Slot map serialization for BOM and quote persistence.

Quotes store the slot map as a flat list with one entry per occupied slot.
Multi-slot cards produce a primary entry at their anchor slot and a
secondary entry for every other slot they cover, so a rack drawing can be
rebuilt from the stored rows alone.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from rackbuilder.application.catalog import require_card
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol
from rackbuilder.domain.part_number import render_template
from rackbuilder.domain.slot_assignment import SlotAssignment
from rackbuilder.domain.slot_engine import rebuild_assignment
from rackbuilder.domain.value_objects import CardDefinition, ChassisType


class SerializedSlot(BaseModel):
    """One stored slot of a configured chassis.

    Attributes:
        slot: Physical slot position
        product_id: Catalog card id
        name: Card display name at the time of saving
        code: Rendered part number code of the card
        slot_span: Number of slots the card covers
        is_primary: Entry is the anchor slot of a multi-slot card
        is_secondary: Entry is a continuation slot of a multi-slot card
        pair_slot: The other end of a multi-slot run (anchor for secondary
            entries, last slot for primary entries)
        specifications: Per-card values merged over the catalog's
    """

    model_config = ConfigDict(extra="ignore")

    slot: int = Field(..., ge=0)
    product_id: str
    name: str = ""
    code: str = ""
    slot_span: int = Field(default=1, ge=1)
    is_primary: bool = False
    is_secondary: bool = False
    pair_slot: int | None = None
    specifications: dict[str, Any] = Field(default_factory=dict)


def _instance_specifications(
    card: CardDefinition, catalog_card: CardDefinition | None
) -> dict[str, Any]:
    base = catalog_card.specifications if catalog_card else {}
    return {
        key: list(value) if isinstance(value, tuple) else value
        for key, value in card.specifications.items()
        if base.get(key) != value
    }


def serialize_assignment(
    assignment: SlotAssignment, catalog: CatalogRepositoryProtocol | None = None
) -> list[SerializedSlot]:
    """Flatten a slot map into storable rows, in slot order.

    When a catalog is given, only specification values that differ from
    the catalog card are stored.
    """
    rows: list[SerializedSlot] = []
    for anchor, card in assignment.anchors():
        run = assignment.run_of(anchor)
        catalog_card = catalog.get_card_definition(card.id) if catalog is not None else None
        code, _ = render_template(card.template, card.specifications)
        specifications = _instance_specifications(card, catalog_card)
        multi = len(run) > 1

        for slot in run:
            if not multi:
                pair_slot: int | None = None
            elif slot == anchor:
                pair_slot = run[-1]
            else:
                pair_slot = anchor
            rows.append(
                SerializedSlot(
                    slot=slot,
                    product_id=card.id,
                    name=card.name,
                    code=code,
                    slot_span=len(run),
                    is_primary=multi and slot == anchor,
                    is_secondary=multi and slot != anchor,
                    pair_slot=pair_slot,
                    specifications=specifications,
                )
            )
    return rows


def deserialize_assignment(
    rows: Iterable[SerializedSlot | dict[str, Any]],
    catalog: CatalogRepositoryProtocol,
    chassis: ChassisType,
) -> SlotAssignment:
    """Rebuild a slot map from stored rows.

    Secondary rows are skipped; each card is rebuilt from its anchor row
    with the catalog's current definition and the stored per-card values,
    then checked against the chassis rules.

    Raises:
        UnknownCardError: If a stored card is no longer in the catalog.
        ValueError: If stored rows overlap or break a chassis rule.
    """
    placements: list[tuple[int, CardDefinition]] = []
    for raw in rows:
        row = raw if isinstance(raw, SerializedSlot) else SerializedSlot.model_validate(raw)
        if row.is_secondary:
            continue
        card = require_card(catalog, row.product_id)
        if row.specifications:
            card = card.with_specifications(**row.specifications)
        placements.append((row.slot, card))
    return rebuild_assignment(chassis, placements)
