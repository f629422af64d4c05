"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from api.middleware import get_request_id
from core.exceptions import ConfigLookupError, MinimumOrderNotMetError

logger = logging.getLogger(__name__)


def _error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, get_request_id(request)).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ConfigLookupError)
    async def config_lookup_error_handler(request: Request, exc: ConfigLookupError):
        logger.error(f"Pricing unavailable, {exc.source} lookup failed")
        return _error(
            request, 503, ErrorCodes.SERVICE_UNAVAILABLE,
            "Pricing is temporarily unavailable. Please try again.",
        )

    @app.exception_handler(MinimumOrderNotMetError)
    async def minimum_order_error_handler(request: Request, exc: MinimumOrderNotMetError):
        return _error(request, 400, ErrorCodes.MINIMUM_ORDER_NOT_MET, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _error(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
