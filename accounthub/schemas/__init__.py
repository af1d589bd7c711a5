"""Pydantic schemas for request/response validation."""

from accounthub.schemas.user import UserCreate, UserResponse

__all__ = [
    "UserCreate",
    "UserResponse",
]
