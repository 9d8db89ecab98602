# src/localherro/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance, installs CORS and error handlers, and serves
the liveness route. Endpoints live in `localherro.api.routes`; state lives in
`localherro.registry`.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from localherro.config.settings import get_settings
from localherro.core.logging import configure_logging

from .errors import register_error_handlers
from .routes import router

configure_logging()

settings = get_settings()

app = FastAPI(title=f"{settings.app.name} API", version="0.1.0")

# CORS: origins come from settings (`LOCALHERRO_CORS_ORIGINS="https://a,https://b"`); default is any origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.include_router(router)


@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    """Liveness probe."""
    return f"{settings.app.name} presence backend is running"
