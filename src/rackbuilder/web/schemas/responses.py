"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from rackbuilder.application.serialization import SerializedSlot
from rackbuilder.web.schemas.requests import PlacementSchema


class ChassisTypeSchema(BaseModel):
    """Slot layout of a chassis type."""

    code: str = Field(..., description="Canonical chassis code")
    name: str = Field(..., description="Display name")
    total_slots: int = Field(..., description="Number of card slots")
    cpu_slot_index: int = Field(..., description="Position of the CPU card")
    reserved_slots: list[int] = Field(..., description="Positions that never hold a card")
    card_slots: list[int] = Field(..., description="Assignable positions")
    placement_groups: dict[str, list[list[int]]] = Field(
        default_factory=dict, description="Ordered placement groups per card class"
    )
    price: float = Field(default=0.0, description="List price of the bare chassis")


class ChassisListSchema(BaseModel):
    """Response listing chassis types."""

    chassis_types: list[ChassisTypeSchema]


class CardSchema(BaseModel):
    """A catalog card."""

    id: str
    name: str
    card_class: str
    slot_span: int
    is_standard: bool = False
    standard_position: int | None = None
    designated_only: bool = False
    designated_positions: list[int] = Field(default_factory=list)
    outside_chassis: bool = False
    remote_enable: bool = False
    template: str
    specifications: dict[str, Any] = Field(default_factory=dict)
    compatible_chassis: list[str] = Field(default_factory=list)
    price: float = 0.0


class CardListSchema(BaseModel):
    """Response listing catalog cards."""

    cards: list[CardSchema]


class PlacementErrorSchema(BaseModel):
    """Why a placement was rejected."""

    kind: str = Field(..., description="Failure category")
    message: str = Field(..., description="Human-readable explanation")
    card_id: str | None = None
    slot: int | None = None


class DisplacedCardSchema(BaseModel):
    """A card cleared from the chassis by a placement."""

    card_id: str
    slots: list[int]
    superseded: bool = Field(
        ..., description="Replaced by a card of the same class rather than evicted"
    )


class PartNumberSchema(BaseModel):
    """Rendered part number with its per-slot codes."""

    part_number: str
    slot_codes: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list, description="Template placeholders with no value"
    )


class ConfigurationResponse(BaseModel):
    """Configuration state after an operation.

    ``placements`` and ``outside_card_ids`` can be sent back unchanged as
    the state of the next request.
    """

    ok: bool = Field(..., description="Whether the operation succeeded")
    error: PlacementErrorSchema | None = None
    chassis_type: str
    placements: list[PlacementSchema] = Field(default_factory=list)
    outside_card_ids: list[str] = Field(default_factory=list)
    slots: list[SerializedSlot] = Field(
        default_factory=list, description="One row per occupied slot"
    )
    placed_slots: list[int] = Field(
        default_factory=list, description="Slots the card now occupies"
    )
    displaced: list[DisplacedCardSchema] = Field(default_factory=list)
    part_number: PartNumberSchema


class LineItemSchema(BaseModel):
    """BOM line item for a configured chassis."""

    product_id: str
    name: str
    part_number: str
    quantity: int
    unit_price: float
    revenue: float
    cost: float
    margin_percentage: float


class BuildRackResponse(BaseModel):
    """Response for building a rack from a rack file."""

    is_valid: bool
    errors: list[PlacementErrorSchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    chassis_type: str | None = None
    slots: list[SerializedSlot] = Field(default_factory=list)
    part_number: PartNumberSchema | None = None
    line_item: LineItemSchema | None = None
    discounted_revenue: float | None = None
    discounted_margin: float | None = None


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
