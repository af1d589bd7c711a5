"""
User database model.

Defines the User table for account records and billing linkage.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    User account.

    Rows are never hard-deleted: soft deletion clears ``active`` and
    sets ``deleted_at``.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Profile
    first_name: str = Field(max_length=100, nullable=False)
    last_name: str = Field(max_length=100, nullable=False)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    picture_url: Optional[str] = Field(default=None, max_length=511)

    # Credentials
    hashed_password: str = Field(max_length=255, nullable=False)

    # Billing linkage, empty until provisioning attaches it
    billing_customer_id: str = Field(default="", max_length=255, nullable=False)

    # Lifecycle
    active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
