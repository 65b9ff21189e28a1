"""Card catalog endpoints."""

from fastapi import APIRouter

from rackbuilder.application.catalog import require_card
from rackbuilder.web.converters import card_to_schema, require_chassis
from rackbuilder.web.dependencies import CatalogDep
from rackbuilder.web.schemas.responses import CardListSchema, CardSchema

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardListSchema)
async def list_cards(catalog: CatalogDep, chassis_type: str | None = None) -> CardListSchema:
    """List catalog cards, optionally only those fitting a chassis.

    Args:
        catalog: Injected catalog.
        chassis_type: Optional chassis code or alias to filter by.

    Returns:
        Cards in catalog sort order.
    """
    if chassis_type is None:
        cards = catalog.list_cards()
    else:
        cards = catalog.list_cards(require_chassis(catalog, chassis_type).code)
    return CardListSchema(cards=[card_to_schema(card) for card in cards])


@router.get("/{card_id}", response_model=CardSchema)
async def get_card(card_id: str, catalog: CatalogDep) -> CardSchema:
    """Get one catalog card (404 when unknown)."""
    return card_to_schema(require_card(catalog, card_id))
