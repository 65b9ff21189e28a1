"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rackbuilder.web.exceptions import register_exception_handlers
from rackbuilder.web.routers import (
    cards_router,
    chassis_router,
    configure_router,
    part_number_router,
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Rack Builder API",
        description="REST API for chassis slot placement and part number assembly",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Browser configurators call the API cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(chassis_router, prefix="/api/v1")
    app.include_router(cards_router, prefix="/api/v1")
    app.include_router(configure_router, prefix="/api/v1")
    app.include_router(part_number_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
