"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type, the mapping from domain errors to HTTP
status and code, and the handler callables registered by ``create_app``.
Every problem body also carries an ``error`` message so clients that only
read ``error`` keep working.
"""

from __future__ import annotations

from typing import Any, Dict, Type
import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from fastapi.responses import JSONResponse

from collection_service.logic.errors import (
    CollectionError,
    ItemOutOfRangeError,
    ReorderConflictError,
    ReorderValidationError,
    SelectionValidationError,
)

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)

# Single source of truth for domain error -> HTTP mapping
ERROR_MAP: Dict[Type[CollectionError], Dict[str, Any]] = {
    ReorderValidationError: {"title": "Invalid Request", "status": 400, "code": "REORDER_RANGE_INVALID"},
    SelectionValidationError: {"title": "Invalid Request", "status": 400, "code": "SELECTION_PAYLOAD_INVALID"},
    ReorderConflictError: {"title": "Conflict", "status": 409, "code": "REORDER_ANCHOR_NOT_FOUND"},
    ItemOutOfRangeError: {"title": "Internal Server Error", "status": 500, "code": "ITEM_OUT_OF_RANGE"},
}

_DEFAULT_MAPPING = {"title": "Internal Server Error", "status": 500, "code": "INTERNAL_ERROR"}


def problem(title: str, status: int, detail: str, code: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
        "error": detail,
    }
    body.update(extra)
    return body


def problem_for(exc: CollectionError) -> Dict[str, Any]:
    """Build the problem body for a domain error using ``ERROR_MAP``."""
    mapping = _DEFAULT_MAPPING
    for cls in type(exc).__mro__:
        if cls in ERROR_MAP:
            mapping = ERROR_MAP[cls]
            break
    extra: Dict[str, Any] = {}
    if isinstance(exc, ReorderConflictError):
        extra["currentState"] = exc.current_state
        extra["received"] = exc.received
    return problem(mapping["title"], mapping["status"], exc.message, mapping["code"], **extra)


async def handle_collection_error(request: Request, exc: CollectionError) -> JSONResponse:  # noqa: D401
    body = problem_for(exc)
    if body["status"] >= 500:
        logger.error("collection_error path=%s", request.url.path, exc_info=exc)
    else:
        logger.info(
            "error_handler.handle path=%s status=%s code=%s",
            request.url.path,
            body["status"],
            body["code"],
        )
    return JSONResponse(body, status_code=body["status"], media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status_code = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        body = dict(exc.detail)
        body.setdefault("status", status_code)
    else:
        detail = str(exc.detail or "")
        body = problem("Error", status_code, detail, "HTTP_ERROR")
    headers = {str(k): str(v) for k, v in (exc.headers or {}).items()}
    return JSONResponse(
        body,
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers or None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    errors = list(exc.errors())
    code = "REQUEST_BODY_SCHEMA_MISMATCH"
    detail = "Request validation failed"
    for e in errors:
        if str(e.get("type", "")) == "json_invalid":
            code = "REQUEST_BODY_INVALID_JSON"
            detail = "Malformed JSON in request body"
            break
    body = problem(
        "Invalid Request",
        400,
        detail,
        code,
        errors=[{"loc": list(e.get("loc", ())), "msg": str(e.get("msg", ""))} for e in errors],
    )
    return JSONResponse(body, status_code=400, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    body = problem("Internal Server Error", 500, "Internal Server Error", "INTERNAL_ERROR")
    return JSONResponse(body, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "ERROR_MAP",
    "problem",
    "problem_for",
    "handle_collection_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
