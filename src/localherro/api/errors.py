"""
Global exception handlers.

- `HerroError` (validation / not found) -> its own status + `{"error", "code"}` body
- `RequestValidationError` (e.g. undecodable JSON body) -> 400 with the same envelope

Handlers are registered on the app, so route functions simply let domain errors propagate.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from localherro.core.errors import HerroError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(HerroError)
    async def herro_error_handler(request: Request, exc: HerroError) -> JSONResponse:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Malformed request on %s: %s", request.url.path, exc.errors())
        err = ValidationError("request body must be a JSON object")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=err.to_response())
