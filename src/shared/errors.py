"""Error taxonomy shared by every bounded context, and its HTTP mapping.

Domain code raises Protean's ``ValidationError``, ``ObjectNotFoundError`` and
``InvalidOperationError`` for input, lookup and state problems. The classes
below cover what Protean does not model: missing sessions, role and ownership
failures, duplicates and store failures.

Every error leaves the API as ``{"error": "<message>"}``. Validation errors
additionally carry the field-level messages under ``"details"``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class FreshMarketError(Exception):
    """Base class for application errors that map to a fixed HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(FreshMarketError):
    """No session, or the session token is unknown or expired."""

    status_code = 401


class AuthorizationError(FreshMarketError):
    """The caller's role or ownership does not permit the operation."""

    status_code = 403


class ConflictError(FreshMarketError):
    """The operation would create a duplicate (second shop, second account)."""

    status_code = 409


class StoreError(FreshMarketError):
    """The backing store is misconfigured or unreachable."""

    status_code = 500


def flatten_messages(messages) -> str:
    """Join Protean's ``{field: [messages]}`` into one human-readable line."""
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            if isinstance(value, (list, tuple)):
                parts.extend(str(v) for v in value)
            else:
                parts.append(str(value))
        return "; ".join(parts)
    return str(messages)


def _validation_messages(exc: ValidationError) -> dict:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return messages
    return {"_entity": [str(exc)]}


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON error handlers for the whole error taxonomy on ``app``."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        details = _validation_messages(exc)
        return JSONResponse(
            status_code=400,
            content={"error": flatten_messages(details), "details": details},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details: dict[str, list[str]] = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
            details.setdefault(field, []).append(err.get("msg", "Invalid value"))
        return JSONResponse(
            status_code=400,
            content={"error": flatten_messages(details), "details": details},
        )

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": _message_of(exc, "Not found")})

    @app.exception_handler(InvalidOperationError)
    async def handle_invalid_operation(request: Request, exc: InvalidOperationError):
        return JSONResponse(status_code=400, content={"error": _message_of(exc, "Invalid operation")})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.exception("Store failure", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.exception_handler(FreshMarketError)
    async def handle_application_error(request: Request, exc: FreshMarketError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def _message_of(exc: Exception, default: str) -> str:
    messages = getattr(exc, "messages", None)
    if messages:
        return flatten_messages(messages)
    return str(exc) or default
