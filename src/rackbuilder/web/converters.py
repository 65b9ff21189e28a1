"""Conversion between API schemas and domain objects."""

from rackbuilder.application.catalog import require_card, resolve_chassis
from rackbuilder.application.commands import RackSession
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol
from rackbuilder.domain import (
    CardDefinition,
    ChassisType,
    ChassisTypeUnresolved,
    DisplacedCard,
    PartNumberResult,
    PlacementError,
    PlacementResult,
    rebuild_assignment,
)
from rackbuilder.web.exceptions import ChassisNotFoundError, InvalidSlotMapError
from rackbuilder.web.schemas.requests import ConfigurationRequest, PlacementSchema
from rackbuilder.web.schemas.responses import (
    CardSchema,
    ChassisTypeSchema,
    ConfigurationResponse,
    DisplacedCardSchema,
    PartNumberSchema,
    PlacementErrorSchema,
)


def require_chassis(catalog: CatalogRepositoryProtocol, chassis_type: str) -> ChassisType:
    """Resolve a chassis string or raise ChassisNotFoundError."""
    chassis = resolve_chassis(catalog, chassis_type)
    if isinstance(chassis, ChassisTypeUnresolved):
        available = [c.code for c in catalog.list_chassis_types()]
        raise ChassisNotFoundError(chassis_type, available)
    return chassis


def session_from_request(
    catalog: CatalogRepositoryProtocol, request: ConfigurationRequest
) -> RackSession:
    """Rebuild the configuration state a request carries.

    Raises:
        ChassisNotFoundError: If the chassis type is unknown.
        UnknownCardError: If a placement names a card not in the catalog.
        InvalidSlotMapError: If placements overlap or break a chassis rule.
    """
    chassis = require_chassis(catalog, request.chassis_type)

    placements: list[tuple[int, CardDefinition]] = []
    for placement in request.placements:
        card = require_card(catalog, placement.card_id)
        try:
            if placement.specifications:
                card = card.with_specifications(**placement.specifications)
        except ValueError as e:
            raise InvalidSlotMapError(str(e)) from e
        placements.append((placement.slot, card))

    try:
        assignment = rebuild_assignment(chassis, placements)
    except ValueError as e:
        raise InvalidSlotMapError(str(e)) from e

    outside_cards = [require_card(catalog, card_id) for card_id in request.outside_card_ids]
    in_chassis = [card.id for card in outside_cards if not card.outside_chassis]
    if in_chassis:
        raise InvalidSlotMapError(f"Cards {in_chassis} must be placed in a slot")
    incompatible = [card.id for card in outside_cards if not card.fits_chassis(chassis)]
    if incompatible:
        raise InvalidSlotMapError(
            f"Cards {incompatible} are not compatible with the {chassis.code} chassis"
        )
    return RackSession(catalog, chassis, assignment, outside_cards)


def chassis_to_schema(chassis: ChassisType) -> ChassisTypeSchema:
    """Convert ChassisType to response schema."""
    return ChassisTypeSchema(
        code=chassis.code,
        name=chassis.name,
        total_slots=chassis.total_slots,
        cpu_slot_index=chassis.cpu_slot_index,
        reserved_slots=sorted(chassis.reserved_slots),
        card_slots=list(chassis.card_slots),
        placement_groups={
            card_class: [list(group) for group in groups]
            for card_class, groups in chassis.placement_groups.items()
        },
        price=chassis.price,
    )


def card_to_schema(card: CardDefinition) -> CardSchema:
    """Convert CardDefinition to response schema."""
    return CardSchema(
        id=card.id,
        name=card.name,
        card_class=card.card_class,
        slot_span=card.slot_span,
        is_standard=card.is_standard,
        standard_position=card.standard_position,
        designated_only=card.designated_only,
        designated_positions=list(card.designated_positions),
        outside_chassis=card.outside_chassis,
        remote_enable=card.remote_enable,
        template=card.template,
        specifications={
            key: list(value) if isinstance(value, tuple) else value
            for key, value in card.specifications.items()
        },
        compatible_chassis=sorted(card.compatible_chassis),
        price=card.price,
    )


def error_to_schema(error: PlacementError) -> PlacementErrorSchema:
    return PlacementErrorSchema(
        kind=error.kind.value,
        message=error.message,
        card_id=error.card_id,
        slot=error.slot,
    )


def part_number_to_schema(result: PartNumberResult) -> PartNumberSchema:
    return PartNumberSchema(
        part_number=result.part_number,
        slot_codes=list(result.slot_codes),
        warnings=[issue.message for issue in result.unresolved],
    )


def _displaced_to_schema(displaced: DisplacedCard) -> DisplacedCardSchema:
    return DisplacedCardSchema(
        card_id=displaced.card.id,
        slots=list(displaced.slots),
        superseded=displaced.superseded,
    )


def session_to_response(
    session: RackSession, result: PlacementResult | None = None
) -> ConfigurationResponse:
    """Convert the session state (and the last operation) to a response."""
    rows = session.serialize()
    placements = [
        PlacementSchema(slot=row.slot, card_id=row.product_id, specifications=row.specifications)
        for row in rows
        if not row.is_secondary
    ]
    error = result.error if result is not None else None
    placed_slots = list(result.slots) if result is not None else []
    displaced = [_displaced_to_schema(d) for d in result.displaced] if result is not None else []
    return ConfigurationResponse(
        ok=error is None,
        error=error_to_schema(error) if error is not None else None,
        chassis_type=session.chassis.code,
        placements=placements,
        outside_card_ids=[card.id for card in session.outside_cards],
        slots=rows,
        placed_slots=placed_slots,
        displaced=displaced,
        part_number=part_number_to_schema(session.part_number()),
    )
