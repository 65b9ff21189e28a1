"""Slot placement endpoints.

Every endpoint takes the current configuration and returns the new one.
Rejected placements are not HTTP errors: they come back with ``ok`` false,
the unchanged slot map and the reason, as the configurator shows them as
validation messages.
"""

from fastapi import APIRouter, HTTPException

from rackbuilder.application.config import load_rack_config_from_dict
from rackbuilder.application.serialization import serialize_assignment
from rackbuilder.web.converters import (
    error_to_schema,
    part_number_to_schema,
    session_from_request,
    session_to_response,
)
from rackbuilder.web.dependencies import BuildCommandDep, CatalogDep
from rackbuilder.web.schemas.requests import (
    BuildRackRequest,
    MoveCardRequest,
    PlaceCardRequest,
    RemoveCardRequest,
)
from rackbuilder.web.schemas.responses import (
    BuildRackResponse,
    ConfigurationResponse,
    LineItemSchema,
)

router = APIRouter(prefix="/configurations", tags=["configurations"])


@router.post("/place", response_model=ConfigurationResponse)
async def place_card(request: PlaceCardRequest, catalog: CatalogDep) -> ConfigurationResponse:
    """Place a card, at ``target_slot`` or wherever the rules allow.

    Raises:
        ChassisNotFoundError: Unknown chassis type (404).
        UnknownCardError: Unknown card id (404).
        InvalidSlotMapError: Inconsistent current slot map (422).
    """
    session = session_from_request(catalog, request)
    try:
        result = session.add_card(request.card_id, request.target_slot, request.specifications)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "specifications"},
        ) from e
    return session_to_response(session, result)


@router.post("/remove", response_model=ConfigurationResponse)
async def remove_card(request: RemoveCardRequest, catalog: CatalogDep) -> ConfigurationResponse:
    """Remove the card at a slot, or deselect an outside-chassis card."""
    if (request.slot is None) == (request.card_id is None):
        raise HTTPException(
            status_code=422,
            detail={"error": "Give exactly one of 'slot' or 'card_id'", "error_type": "request"},
        )
    session = session_from_request(catalog, request)
    if request.slot is not None:
        session.remove_slot(request.slot)
    else:
        session.remove_outside_card(request.card_id)
    return session_to_response(session)


@router.post("/move", response_model=ConfigurationResponse)
async def move_card(request: MoveCardRequest, catalog: CatalogDep) -> ConfigurationResponse:
    """Drag the card at ``from_slot`` to ``to_slot``."""
    session = session_from_request(catalog, request)
    result = session.move(request.from_slot, request.to_slot)
    return session_to_response(session, result)


@router.post("/build", response_model=BuildRackResponse)
async def build_rack(request: BuildRackRequest, command: BuildCommandDep) -> BuildRackResponse:
    """Build a rack from a full rack file.

    Raises:
        ConfigError: If the rack file is invalid (422, handled by exception
            handler).
        UnknownCardError: If the rack file names an unknown card (404).
    """
    rack = load_rack_config_from_dict(request.config)
    output = command.execute(rack)

    line_item = None
    if output.line_item is not None:
        line_item = LineItemSchema(
            product_id=output.line_item.product_id,
            name=output.line_item.name,
            part_number=output.line_item.part_number,
            quantity=output.line_item.quantity,
            unit_price=output.line_item.unit_price,
            revenue=output.line_item.revenue,
            cost=output.line_item.cost,
            margin_percentage=output.line_item.margin_percentage,
        )

    return BuildRackResponse(
        is_valid=output.is_valid,
        errors=[error_to_schema(e) for e in output.errors],
        warnings=output.warnings,
        chassis_type=output.chassis.code if output.chassis else None,
        slots=serialize_assignment(output.assignment, command.catalog),
        part_number=part_number_to_schema(output.part_number) if output.part_number else None,
        line_item=line_item,
        discounted_revenue=output.discount.discounted_revenue if output.discount else None,
        discounted_margin=output.discount.discounted_margin if output.discount else None,
    )
