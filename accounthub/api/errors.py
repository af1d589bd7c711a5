"""
Error responders.

Exception handlers that turn internal failures into ``{code, message}``
bodies. Only the classified public error leaves the process; internal
detail goes to the server log.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accounthub.core.errors import (
    AccountError,
    ErrorCode,
    PublicError,
    classify,
    invalid_field_message,
    public_error,
)

logger = logging.getLogger(__name__)

# Pydantic error types meaning the body itself is unusable
_BODY_ERROR_TYPES = {"json_invalid", "model_attributes_type", "dict_type", "model_type"}


def _respond(status_code: int, error: PublicError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))


def validation_error_to_public(exc: RequestValidationError) -> tuple[int, PublicError]:
    """Report the first offending field of a request validation failure."""
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if error.get("type") in _BODY_ERROR_TYPES or loc in (["body"], []):
            return public_error(ErrorCode.INVALID_JSON)
        field = loc[-1]
        return public_error(ErrorCode.INVALID_FIELD, invalid_field_message(field))
    return public_error(ErrorCode.INVALID_JSON)


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    status_code, error = classify(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected with %s: %s", request.method, request.url.path, error.code.value, exc)
    return _respond(status_code, error)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    status_code, error = validation_error_to_public(exc)
    logger.info("%s %s rejected with %s", request.method, request.url.path, error.code.value)
    return _respond(status_code, error)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _respond(*classify(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Install the error responders on an application."""
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
