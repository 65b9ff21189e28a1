"""Part number endpoints."""

from fastapi import APIRouter

from rackbuilder.web.converters import part_number_to_schema, session_from_request
from rackbuilder.web.dependencies import CatalogDep
from rackbuilder.web.schemas.requests import ConfigurationRequest
from rackbuilder.web.schemas.responses import PartNumberSchema

router = APIRouter(prefix="/part-number", tags=["part-number"])


@router.post("", response_model=PartNumberSchema)
async def render_part_number(
    request: ConfigurationRequest, catalog: CatalogDep
) -> PartNumberSchema:
    """Render the part number of a configuration.

    Args:
        request: Chassis type, slot map and outside-chassis selections.
        catalog: Injected catalog.

    Returns:
        Part number, per-slot codes and any unresolved-placeholder warnings.
    """
    session = session_from_request(catalog, request)
    return part_number_to_schema(session.part_number())
