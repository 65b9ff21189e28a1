"""API routers for the REST API."""

from rackbuilder.web.routers.cards import router as cards_router
from rackbuilder.web.routers.chassis import router as chassis_router
from rackbuilder.web.routers.configure import router as configure_router
from rackbuilder.web.routers.part_number import router as part_number_router

__all__ = [
    "cards_router",
    "chassis_router",
    "configure_router",
    "part_number_router",
]
