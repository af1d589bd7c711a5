"""
Partial updates for user rows.

Writes a subset of columns in a single UPDATE statement and always stamps
``updated_at``. Column names come from the closed ``UserField`` enum, never
from caller-supplied strings.
"""

from enum import Enum
from typing import Any, Mapping

from sqlalchemy import update
from sqlmodel import Session

from accounthub.models.user import User, utcnow


class UserField(str, Enum):
    """Columns of ``users`` that may be changed through a partial update."""

    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    PICTURE_URL = "picture_url"
    HASHED_PASSWORD = "hashed_password"
    BILLING_CUSTOMER_ID = "billing_customer_id"
    ACTIVE = "active"
    DELETED_AT = "deleted_at"


def update_user_fields(session: Session, user_id: int, changes: Mapping[UserField, Any]) -> int:
    """
    Update the given fields of one user plus ``updated_at``.

    Runs on whatever session is passed in, so inside a ``transaction()``
    block the update commits or rolls back with the rest of that unit of
    work. Errors from the database propagate unchanged.

    Args:
        session: Plain or transactional session
        user_id: Id of the user to update
        changes: Mapping of ``UserField`` to the new value

    Returns:
        Number of rows matched (0 when ``changes`` is empty)

    Raises:
        TypeError: If a key is not a ``UserField``
    """
    if not changes:
        return 0

    values: dict[str, Any] = {}
    for field, value in changes.items():
        if not isinstance(field, UserField):
            raise TypeError(f"partial update keys must be UserField members, got {field!r}")
        values[field.value] = value
    values["updated_at"] = utcnow()

    users = User.__table__
    statement = update(users).where(users.c.id == user_id).values(**values)
    result = session.connection().execute(statement)
    return result.rowcount
