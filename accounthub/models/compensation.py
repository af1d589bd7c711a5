"""
Pending compensation model.

A durable record of a billing customer that was created remotely while the
matching local user row was rolled back.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from accounthub.models.user import utcnow


class PendingCompensation(SQLModel, table=True):
    """Orphaned billing identity awaiting out-of-band cleanup."""
    __tablename__ = "billing_compensations"

    id: Optional[int] = Field(default=None, primary_key=True)
    billing_customer_id: str = Field(index=True, max_length=255, nullable=False)
    # Local id that was rolled back; not a foreign key since the row never committed
    user_id: Optional[int] = Field(default=None)
    email: str = Field(max_length=255, nullable=False)
    reason: str = Field(sa_type=Text, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
    resolved_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
