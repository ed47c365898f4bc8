"""
Error kinds raised by the store, token and authorization layers.

Each carries the HTTP status it maps to; api.errors turns them into
JSON responses at the request boundary.
"""
from __future__ import annotations


class FitCoachError(Exception):
    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(FitCoachError):
    """Required field missing or malformed."""
    status_code = 400
    default_detail = "Validation failed"


class InvalidRange(FitCoachError):
    """Numeric field outside its allowed range."""
    status_code = 422
    default_detail = "Value out of range"


class NotFound(FitCoachError):
    status_code = 404
    default_detail = "Not found"


class Unauthenticated(FitCoachError):
    status_code = 401
    default_detail = "Access denied. No token provided."


class InvalidToken(FitCoachError):
    status_code = 401
    default_detail = "Invalid or expired token."


class Forbidden(FitCoachError):
    status_code = 403
    default_detail = "Forbidden."


class DuplicateUsername(FitCoachError):
    status_code = 400
    default_detail = "Username already exists."


class InvalidCredentials(FitCoachError):
    status_code = 400
    default_detail = "Invalid username or password."


class StoreError(FitCoachError):
    status_code = 500
    default_detail = "Internal server error"
