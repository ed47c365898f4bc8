from __future__ import annotations
import logging
from typing import Any, Dict, List
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from fitcoach.errors import FitCoachError, ValidationError, InvalidRange, StoreError

logger = logging.getLogger(__name__)

# pydantic error types that mean "present and numeric, but out of bounds"
RANGE_ERROR_TYPES = {"greater_than", "greater_than_equal", "less_than", "less_than_equal"}

def flatten_pydantic_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """
    Convert pydantic/fastapi error objects into a list of dicts.
    """
    flat: List[Dict[str, Any]] = []
    for err in exc.errors():
        item: Dict[str, Any] = {
            "loc": list(err.get("loc", [])),
            "msg": str(err.get("msg", "")),
            "type": str(err.get("type", ""))
        }
        flat.append(item)
    return flat

def classify_validation_errors(errors: List[Dict[str, Any]]) -> FitCoachError:
    """
    Only-range failures are InvalidRange (422).
    Anything else (missing, empty, wrong type) is ValidationError (400).
    """
    if errors and all(e["type"] in RANGE_ERROR_TYPES for e in errors):
        if any(e["loc"][:1] == ["path"] for e in errors):
            return InvalidRange("Id is out of range.")
        return InvalidRange("Sets, reps, length and frequency must be positive numbers, and rest time must be zero or a positive number.")
    return ValidationError("Validation failed")

def error_response(exc: FitCoachError, **extra: Any) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, **extra},
        headers=headers,
    )

def register_exception_handlers(app: FastAPI) -> None:
    """
    Attach global exception handlers so every error kind leaves the app
    as status + {"detail": ...}.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = flatten_pydantic_errors(exc)
        return error_response(classify_validation_errors(errors), errors=errors)

    @app.exception_handler(FitCoachError)
    async def fitcoach_exception_handler(request: Request, exc: FitCoachError):
        return error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        # detail stays in the server log, caller gets the generic message
        logger.exception("Store error on %s %s", request.method, request.url.path)
        return error_response(StoreError())
