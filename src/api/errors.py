"""Global error handlers turning request and portal errors into JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import Conflict, Forbidden, InvalidAssertion, NotFound, PortalError


def status_for(exc: PortalError) -> int:
    if isinstance(exc, InvalidAssertion):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, Forbidden):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, NotFound):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, Conflict):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        # Malformed bodies are plain bad requests for the Mini App client
        payload = {"detail": "validation_error", "errors": jsonable_encoder(exc.errors())}
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)

    @app.exception_handler(PortalError)
    async def portal_exc_handler(request: Request, exc: PortalError):  # type: ignore[override]
        return JSONResponse(status_code=status_for(exc), content={"detail": exc.reason})
