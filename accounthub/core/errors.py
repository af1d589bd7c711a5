"""
Error taxonomy.

Internal exceptions raised by repositories and services, the closed set of
public error codes, and the classification step that maps one onto the other.
Internal detail never travels past ``classify``.
"""

from enum import Enum
from typing import Optional

from fastapi import status
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Public error codes returned to API callers."""

    INVALID_JSON = "invalid-json"
    INVALID_FIELD = "invalid-field"
    ENTITY_NOT_FOUND = "entity-not-found"
    EMAIL_TAKEN = "email-taken"
    INTERNAL = "internal-error"


class PublicError(BaseModel):
    """Error body sent to API callers."""
    code: ErrorCode
    message: str


# Internal exceptions

class AccountError(Exception):
    """Base class for every failure raised by the account core."""


class InvalidFieldError(AccountError):
    """A caller-supplied value failed validation."""

    def __init__(self, field: str, detail: Optional[str] = None):
        self.field = field
        super().__init__(detail or f"invalid value for field '{field}'")


class EntityNotFoundError(AccountError):
    """A lookup matched no row, or the lookup itself failed."""


class EmailAlreadyTakenError(AccountError):
    """The email uniqueness constraint was violated."""


class BillingProviderError(AccountError):
    """The billing provider call failed or returned an unusable response."""


class ProvisionedUserReadError(AccountError):
    """The user was committed but could not be read back."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"user {user_id} was created but could not be re-read")


_STATUS_BY_CODE = {
    ErrorCode.INVALID_JSON: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_MESSAGE_BY_CODE = {
    ErrorCode.INVALID_JSON: "The request body must be a valid JSON object.",
    ErrorCode.ENTITY_NOT_FOUND: "The requested entity could not be found.",
    ErrorCode.EMAIL_TAKEN: "That email address is already in use.",
    ErrorCode.INTERNAL: "An internal error occurred. Please try again later.",
}


def invalid_field_message(field: str) -> str:
    return f"The field '{field}' is missing or invalid."


def public_error(code: ErrorCode, message: Optional[str] = None) -> tuple[int, PublicError]:
    """Build the (status, body) pair for a public error code."""
    return _STATUS_BY_CODE[code], PublicError(code=code, message=message or _MESSAGE_BY_CODE[code])


def classify(exc: BaseException) -> tuple[int, PublicError]:
    """
    Map any exception to exactly one public error.

    Args:
        exc: The exception raised while serving a request

    Returns:
        HTTP status code and the public error body. Anything not in the
        taxonomy falls back to ``internal-error``.
    """
    if isinstance(exc, InvalidFieldError):
        return public_error(ErrorCode.INVALID_FIELD, invalid_field_message(exc.field))
    if isinstance(exc, EntityNotFoundError):
        return public_error(ErrorCode.ENTITY_NOT_FOUND)
    if isinstance(exc, EmailAlreadyTakenError):
        return public_error(ErrorCode.EMAIL_TAKEN)
    return public_error(ErrorCode.INTERNAL)
