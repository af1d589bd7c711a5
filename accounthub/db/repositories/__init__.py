"""Database repositories."""

from accounthub.db.repositories.compensation import CompensationRepository
from accounthub.db.repositories.user import UserRepository

__all__ = [
    "CompensationRepository",
    "UserRepository",
]
