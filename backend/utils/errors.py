# utils/errors.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


# Base class for every business-rule failure raised by the service layer
class InventoryError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateCode(InventoryError):
    status_code = status.HTTP_409_CONFLICT


class InvalidReference(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST


class InsufficientStock(InventoryError):
    status_code = status.HTTP_409_CONFLICT


class InvalidInput(InventoryError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


def register_error_handlers(app: FastAPI) -> None:
    """Map service-layer exceptions onto JSON error responses."""

    @app.exception_handler(InventoryError)
    async def handle_inventory_error(request: Request, exc: InventoryError):
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error": type(exc).__name__},
        )
