"""Chassis type endpoints."""

from fastapi import APIRouter

from rackbuilder.web.converters import chassis_to_schema, require_chassis
from rackbuilder.web.dependencies import CatalogDep
from rackbuilder.web.schemas.responses import ChassisListSchema, ChassisTypeSchema

router = APIRouter(prefix="/chassis", tags=["chassis"])


@router.get("", response_model=ChassisListSchema)
async def list_chassis_types(catalog: CatalogDep) -> ChassisListSchema:
    """List all chassis types in the catalog."""
    return ChassisListSchema(
        chassis_types=[chassis_to_schema(c) for c in catalog.list_chassis_types()]
    )


@router.get("/{chassis_type}", response_model=ChassisTypeSchema)
async def get_chassis_type(chassis_type: str, catalog: CatalogDep) -> ChassisTypeSchema:
    """Get the slot layout of one chassis type.

    Args:
        chassis_type: Chassis code or legacy alias (e.g. "14-card").
        catalog: Injected catalog.

    Raises:
        ChassisNotFoundError: If the string maps to no chassis (handled by
            exception handler).
    """
    return chassis_to_schema(require_chassis(catalog, chassis_type))
