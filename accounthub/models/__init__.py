"""SQLModel database models."""

from accounthub.models.compensation import PendingCompensation
from accounthub.models.user import User

__all__ = [
    "PendingCompensation",
    "User",
]
