"""Error taxonomy shared by the routes and services.

Authorization and store failures are surfaced to the caller. Secondary
dispatch failures never leave the notification service.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class AuthorizationError(Exception):
    """Raised when the caller's permission tier is below the required threshold."""

    def __init__(self, required: str | None = None):
        super().__init__(f"permission {required} required" if required else "forbidden")
        self.required = required

class StoreError(Exception):
    """Raised when the primary write or bulk update against the store fails."""

class SecondaryDispatchError(Exception):
    """Raised by a secondary channel client when a forward cannot be delivered."""

async def _authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": "forbidden"})

async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "store_error"})

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthorizationError, _authorization_error_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
