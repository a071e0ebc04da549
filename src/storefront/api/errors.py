"""Translate domain and request-validation errors into ``{"error": message}`` responses.

ValidationError (invalid input) maps to 400, ObjectNotFoundError to 404.
Request bodies that fail schema validation, malformed JSON included, are
invalid input as well and also map to 400 rather than FastAPI's default 422.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_message(exc) -> str:
    """Flatten Protean's ``{field: [messages]}`` into one readable line."""
    messages = getattr(exc, "messages", None)
    if not messages:
        return exc.__class__.__name__
    if not isinstance(messages, dict):
        return str(messages)

    parts = []
    for field, value in messages.items():
        if isinstance(value, (list, tuple)):
            value = "; ".join(str(v) for v in value)
        parts.append(str(value) if field.startswith("_") else f"{field}: {value}")
    return " | ".join(parts)


def request_error_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # Drop the leading "body"/"path" segment
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return " | ".join(parts) or "Invalid payload"


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": error_message(exc)})


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": error_message(exc)})


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": request_error_message(exc)})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
