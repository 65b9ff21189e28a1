"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rackbuilder.application.catalog import UnknownCardError
from rackbuilder.application.config import ConfigError


class ChassisNotFoundError(Exception):
    """Raised when a chassis type string resolves to no chassis."""

    def __init__(self, chassis_type: str, available: list[str]) -> None:
        self.chassis_type = chassis_type
        self.available = available
        super().__init__(f"Unsupported chassis type: {chassis_type!r}")


class InvalidSlotMapError(Exception):
    """Raised when a request carries a slot map that cannot exist."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(UnknownCardError)
    async def unknown_card_handler(
        request: Request, exc: UnknownCardError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"card_id": exc.card_id},
            },
        )

    @app.exception_handler(ChassisNotFoundError)
    async def chassis_not_found_handler(
        request: Request, exc: ChassisNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "chassis_type_unresolved",
                "details": {"chassis_type": exc.chassis_type, "available": exc.available},
            },
        )

    @app.exception_handler(InvalidSlotMapError)
    async def invalid_slot_map_handler(
        request: Request, exc: InvalidSlotMapError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": "invalid_slot_map",
                "details": None,
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details,
            },
        )
