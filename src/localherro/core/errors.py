"""
Error types.

Only two things can go wrong in a request: the client sent something unusable
(`ValidationError`) or referenced an alert that no longer exists (`NotFoundError`).
Both carry the HTTP status the API layer answers with, so route handlers never
translate errors by hand.
"""

from __future__ import annotations

from typing import Any


class HerroError(Exception):
    """Base class for client-facing errors."""

    code = "ERROR"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}


class ValidationError(HerroError):
    """Missing or malformed required input (identity, coordinates, text)."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(HerroError):
    """Referenced record does not exist (or has already expired)."""

    code = "NOT_FOUND"
    http_status = 404
