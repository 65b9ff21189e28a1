"""Pydantic schemas for the REST API."""

from rackbuilder.web.schemas.requests import (
    BuildRackRequest,
    ConfigurationRequest,
    MoveCardRequest,
    PlaceCardRequest,
    PlacementSchema,
    RemoveCardRequest,
)
from rackbuilder.web.schemas.responses import (
    BuildRackResponse,
    CardListSchema,
    CardSchema,
    ChassisListSchema,
    ChassisTypeSchema,
    ConfigurationResponse,
    DisplacedCardSchema,
    ErrorResponseSchema,
    LineItemSchema,
    PartNumberSchema,
    PlacementErrorSchema,
)

__all__ = [
    # Requests
    "BuildRackRequest",
    "ConfigurationRequest",
    "MoveCardRequest",
    "PlaceCardRequest",
    "PlacementSchema",
    "RemoveCardRequest",
    # Responses
    "BuildRackResponse",
    "CardListSchema",
    "CardSchema",
    "ChassisListSchema",
    "ChassisTypeSchema",
    "ConfigurationResponse",
    "DisplacedCardSchema",
    "ErrorResponseSchema",
    "LineItemSchema",
    "PartNumberSchema",
    "PlacementErrorSchema",
]
