"""
FastAPI exception handlers for structured error responses.

Maps tagging error kinds to HTTP status codes. The body always carries the
kind and the user-facing message; raw vendor text stays in the logs.
"""

from datetime import datetime

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from doc_tagger.llm.exceptions import TaggingError
from doc_tagger.tags.catalog import TagCatalogError

logger = structlog.get_logger(__name__)


STATUS_BY_KIND: dict[str, int] = {
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "quota_exhausted": status.HTTP_402_PAYMENT_REQUIRED,
    "input_too_large": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    "rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
    "server_fault": status.HTTP_502_BAD_GATEWAY,
    "bad_endpoint": status.HTTP_502_BAD_GATEWAY,
    "unreachable_endpoint": status.HTTP_502_BAD_GATEWAY,
    "server_overloaded": status.HTTP_503_SERVICE_UNAVAILABLE,
    "generic_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_body(error: str, message: str, details=None) -> dict:
    body = {
        "error": error,
        "message": message,
        "timestamp": datetime.utcnow().isoformat(),
    }
    if details is not None:
        body["details"] = details
    return body


async def tagging_error_handler(request: Request, exc: TaggingError) -> JSONResponse:
    """
    Handle classified tagging errors.

    Args:
        request: FastAPI request
        exc: TaggingError instance

    Returns:
        JSON error response with the status for exc.kind
    """
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.warning(
        "Tagging error",
        kind=exc.kind,
        status_code=status_code,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.kind, exc.message),
    )


async def tag_catalog_error_handler(request: Request, exc: TagCatalogError) -> JSONResponse:
    """
    Handle an unreadable tag source.

    Maps to 500: the service is misconfigured.
    """
    logger.error("Tag catalog unavailable", error=exc.message, details=exc.details)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("tag_catalog_unavailable", exc.message),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request (client error).
    """
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    logger.warning("Invalid request format", errors=errors)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", "Request validation failed", details=errors),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    TaggingError: tagging_error_handler,
    TagCatalogError: tag_catalog_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
