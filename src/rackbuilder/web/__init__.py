"""FastAPI REST API for rack configuration.

Exposes the chassis and card catalog, stateless slot placement, and part
number rendering.

Usage:
    uvicorn rackbuilder.web:app --reload
"""

from rackbuilder.web.app import app, create_app

__all__ = ["app", "create_app"]
