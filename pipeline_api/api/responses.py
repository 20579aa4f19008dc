"""Response envelope helpers and exception handlers that keep every error in the envelope."""

import logging
from typing import Any, assert_never

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pipeline_api.repositories.errors import ErrorKind, RepositoryError

logger = logging.getLogger(__name__)

# Placeholder payloads used when an error response has no entity to return.
DEFAULT_ERROR_PAYLOADS: dict[int, str] = {
    400: "Data error",
    401: "Error",
    403: "Error",
    404: "Data not found",
    409: "Data error",
    500: "Data error",
}

MISSING_FIELD_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def _is_missing(err: dict[str, Any]) -> bool:
    """Absent, empty, null, or a zero id all count as a missing field."""
    if err.get("type") in MISSING_FIELD_ERROR_TYPES:
        return True
    value = err.get("input")
    if value is None:
        return True
    return err.get("type") == "greater_than" and value == 0



class ApiError(HTTPException):
    """HTTPException carrying the placeholder payload to render in the envelope."""

    def __init__(
        self,
        status_code: int,
        message: str,
        payload: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.payload = payload


def envelope_response(
    status_code: int,
    message: str,
    payload: Any,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "message": message,
            "payload": jsonable_encoder(payload),
        },
        headers=headers,
    )


def repository_http_error(exc: RepositoryError, action: str, not_found_message: str) -> ApiError:
    """Translate a typed repository failure into the HTTP error the caller sees."""
    kind = exc.kind
    if kind is ErrorKind.NOT_FOUND:
        return ApiError(404, not_found_message, payload="Data not found")
    if kind is ErrorKind.CONSTRAINT_VIOLATION:
        return ApiError(400, "Data violates a database constraint", payload="Data error")
    if kind is ErrorKind.TRANSIENT_FAILURE:
        return ApiError(500, f"An error occured while {action} data", payload="Data error")
    assert_never(kind)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    payload = getattr(exc, "payload", None)
    if payload is None:
        payload = DEFAULT_ERROR_PAYLOADS.get(exc.status_code, "Error")
    return envelope_response(
        exc.status_code,
        str(exc.detail),
        payload,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(_is_missing(err) for err in errors):
        message = "All data are required"
    else:
        message = "Invalid data"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return envelope_response(400, message, "Data error")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return envelope_response(500, "Internal server error", "Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
