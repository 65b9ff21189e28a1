"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """One placed card of a slot map, keyed by its anchor slot."""

    slot: int = Field(..., ge=0, description="Anchor slot of the card")
    card_id: str = Field(..., min_length=1, description="Catalog card id")
    specifications: dict[str, Any] = Field(
        default_factory=dict, description="Per-card values merged over the catalog's"
    )


class ConfigurationRequest(BaseModel):
    """Current state of a configuration.

    The API is stateless; every request carries the full slot map and the
    selected outside-chassis cards.
    """

    chassis_type: str = Field(..., min_length=1, description="Chassis code or alias")
    placements: list[PlacementSchema] = Field(
        default_factory=list, description="Cards currently in the chassis"
    )
    outside_card_ids: list[str] = Field(
        default_factory=list, description="Selected outside-chassis cards, in order"
    )


class PlaceCardRequest(ConfigurationRequest):
    """Request for placing a card into a configuration."""

    card_id: str = Field(..., min_length=1, description="Card to place")
    target_slot: int | None = Field(
        default=None, ge=0, description="Requested slot; omitted for auto placement"
    )
    specifications: dict[str, Any] = Field(
        default_factory=dict, description="Per-card values for the new card"
    )


class RemoveCardRequest(ConfigurationRequest):
    """Request for removing a card from a configuration.

    Exactly one of ``slot`` and ``card_id`` is used: a slot removes the
    card occupying it, a card id deselects an outside-chassis card.
    """

    slot: int | None = Field(default=None, ge=0, description="Slot to clear")
    card_id: str | None = Field(default=None, description="Outside-chassis card to drop")


class MoveCardRequest(ConfigurationRequest):
    """Request for dragging a card between slots."""

    from_slot: int = Field(..., ge=0, description="Slot the card is in")
    to_slot: int = Field(..., ge=0, description="Slot to move the card to")


class BuildRackRequest(BaseModel):
    """Request for building a rack from a full rack file."""

    config: dict[str, Any] = Field(..., description="Rack file JSON")
