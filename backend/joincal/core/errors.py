"""
Centralized error handling for service/API failures.
Service code raises the domain errors below; routes stay thin and the app-level
handlers turn them into JSON `{"message": ...}` responses with the matching status.
"""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500
STATUS_SERVICE_UNAVAILABLE = 503

MSG_STORAGE_UNAVAILABLE = "Storage is temporarily unavailable"


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class JoincalError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = STATUS_INTERNAL_ERROR


class ValidationError(JoincalError):
    """Missing or malformed required field."""

    status_code = STATUS_BAD_REQUEST


class Unauthorized(JoincalError):
    status_code = STATUS_UNAUTHORIZED


class NotFound(JoincalError):
    """Unknown event or calendar id (or one that lives in another calendar)."""

    status_code = STATUS_NOT_FOUND


class Conflict(JoincalError):
    status_code = STATUS_CONFLICT


class Unavailable(JoincalError):
    status_code = STATUS_SERVICE_UNAVAILABLE


# ---------------------------------------------------------------------------
# Error rules for exceptions that are not JoincalError: (predicate, status_code, detail)
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

def _is_storage_outage(exc: Exception) -> bool:
    return isinstance(exc, OperationalError)


# First match wins.
SERVICE_ERROR_RULES: list[tuple[Callable[[Exception], bool], int, str]] = [
    (_is_storage_outage, STATUS_SERVICE_UNAVAILABLE, MSG_STORAGE_UNAVAILABLE),
]


def service_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception raised by a service call into an HTTPException.
    JoincalError carries its own status; SERVICE_ERROR_RULES cover known
    infrastructure failures; anything else is a 500 with the exception message.
    """
    if isinstance(exc, JoincalError):
        return HTTPException(status_code=exc.status_code, detail=str(exc))
    for predicate, status_code, detail in SERVICE_ERROR_RULES:
        if predicate(exc):
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path", "header")]
    field = loc[-1] if loc else "request"
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers so every failure body is `{"message": ...}`."""

    @app.exception_handler(JoincalError)
    async def _joincal_error(request: Request, exc: JoincalError) -> JSONResponse:
        if exc.status_code >= STATUS_INTERNAL_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=STATUS_BAD_REQUEST, content={"message": _validation_message(exc)})

    @app.exception_handler(OperationalError)
    async def _storage_error(request: Request, exc: OperationalError) -> JSONResponse:
        logger.exception("%s %s storage failure", request.method, request.url.path)
        http_exc = service_error_to_http(exc)
        return JSONResponse(status_code=http_exc.status_code, content={"message": http_exc.detail})
