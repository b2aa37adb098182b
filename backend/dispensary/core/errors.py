"""
API error types and exception handlers.

- Defines a small ApiError hierarchy for framework-level failures.
- Maps those errors to a consistent JSON envelope for clients.
- Builds the per-listing error bodies returned when a store query fails.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from dispensary.core.logging import get_logger

__all__ = [
    "ApiError",
    "ServerError",
    "ErrorBody",
    "ErrorResponse",
    "listing_error_response",
    "register_exception_handlers",
]

log = get_logger(__name__)


# -------------------------------
# Error response models
# -------------------------------

class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict, description="Optional structured details")


class ErrorResponse(BaseModel):
    error: ErrorBody
    request_id: Optional[str] = Field(default=None, description="Client-supplied correlation/request id")


# -------------------------------
# Exception types
# -------------------------------

class ApiError(Exception):
    """
    Base API error with HTTP status and machine code.
    """
    status_code: int = 400
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class ServerError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "server_error"


# -------------------------------
# Listing failures
# -------------------------------

def listing_error_response(message: str, **empty: Any) -> JSONResponse:
    """
    500 response for a failed listing: {"error": message, **empty}.

    `empty` carries the listing's empty collection (e.g. eps=[]) so callers can
    read the same keys whether or not the query succeeded.
    """
    content: dict[str, Any] = {"error": message}
    content.update(empty)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# -------------------------------
# Handlers
# -------------------------------

def _make_json_response(request: Request, exc: ApiError) -> JSONResponse:
    req_id = request.headers.get("x-request-id") or request.headers.get("x-correlation-id")

    body = ErrorResponse(
        error=ErrorBody(code=exc.code, message=exc.message, details=exc.details or {}),
        request_id=req_id,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    - ApiError: mapped directly.
    - Request/Pydantic validation errors: 422 validation_error with details.
    - Anything else: 500 server_error.
    """
    if isinstance(exc, ApiError):
        return _make_json_response(request, exc)

    if isinstance(exc, (RequestValidationError, ValidationError)):
        err = ApiError(
            "Validation error",
            details={"errors": _jsonable_errors(exc)},
            status_code=422,
            code="validation_error",
        )
        return _make_json_response(request, err)

    return await unhandled_error_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"path": request.url.path},
    )
    return _make_json_response(request, ServerError("Internal server error"))


def _jsonable_errors(exc: Exception) -> list[dict[str, Any]]:
    errors = []
    for item in exc.errors():  # type: ignore[attr-defined]
        errors.append(
            {
                "loc": [str(part) for part in item.get("loc", ())],
                "msg": str(item.get("msg", "")),
                "type": str(item.get("type", "")),
            }
        )
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI app.
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, api_error_handler)
    app.add_exception_handler(ValidationError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
