"""Exception handlers mapping domain errors onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, TransactionError, ValidationError

from storefront.shared.concurrency import is_write_conflict
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


def _message(exc) -> str:
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        return "; ".join(f"{key}: {value}" for key, value in messages.items())
    return str(messages) if messages else exc.__class__.__name__


def _field_errors(messages) -> dict:
    errors = {}
    for field, value in dict(messages).items():
        if isinstance(value, (list, tuple)):
            errors[field] = [str(v) for v in value]
        else:
            errors[field] = [str(value)]
    return errors


async def validation_error_handler(request: Request, exc: ValidationError):
    if is_write_conflict(exc):
        # A unique field was taken between the pre-check and the write
        field = next(iter(exc.messages), None)
        return JSONResponse(status_code=409, content={"error": _message(exc), "field": field})
    return JSONResponse(status_code=400, content={"errors": _field_errors(exc.messages)})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        # Drop the leading "body"/"path"/"query" segment
        location = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(location) or "non_field_errors"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"errors": errors})


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": _message(exc)})


async def conflict_handler(request: Request, exc: ConflictError):
    content = {"error": exc.message}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(status_code=409, content=content)


async def invalid_operation_handler(request: Request, exc: InvalidOperationError):
    return JSONResponse(status_code=400, content={"error": _message(exc)})


async def transaction_error_handler(request: Request, exc: TransactionError):
    if is_write_conflict(exc):
        return JSONResponse(status_code=409, content={"error": "Conflicting concurrent update; retry the request"})
    return await unhandled_error_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error while serving request",
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(TransactionError, transaction_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
