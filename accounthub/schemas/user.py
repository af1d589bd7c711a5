"""
User API schemas.

Pydantic models for user-related request/response validation. The wire
format is camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from accounthub.core.security import is_valid_password


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request schemas
class UserCreate(CamelModel):
    """Schema for account registration."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., description="At least 8 characters with a letter and a digit")
    picture_url: str = Field(..., min_length=1, max_length=511)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not is_valid_password(value):
            raise ValueError("password does not meet the strength policy")
        return value


# Response schemas
class UserResponse(CamelModel):
    """Schema for user data in API responses (no credentials or billing identity)."""
    id: int
    first_name: str
    last_name: str
    email: str
    picture_url: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
