"""
User endpoints.

Handles account registration and lookup.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from accounthub.api.dependencies import get_user_service
from accounthub.schemas.user import UserCreate, UserResponse
from accounthub.services.user_service import UserService

router = APIRouter()

DEFAULT_OFFSET = 0


def _parse_non_negative(raw: Optional[str], default: int) -> int:
    """Parse a query value, falling back to ``default`` when missing, malformed or negative."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


@router.post("",
             summary="Register a new account.",
             response_model=UserResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, service: UserService = Depends(get_user_service)):
    """
    Register a new user and provision their billing identity.

    Returns:
        Created user data (without password or billing identity)

    Raises:
        400 invalid-field: If a field is missing or invalid
        409 email-taken: If the email is already registered
    """
    return service.register(user_data)


@router.get("",
            summary="List accounts.",
            response_model=list[UserResponse])
def list_users(offset: Optional[str] = Query(None, description="Records to skip"),
               limit: Optional[str] = Query(None, description="Max records to return"),
               service: UserService = Depends(get_user_service)):
    """Malformed or missing paging values fall back to the defaults instead of failing."""
    page_default = service.settings.USERS_PAGE_DEFAULT
    return service.list_users(_parse_non_negative(offset, DEFAULT_OFFSET), _parse_non_negative(limit, page_default))


@router.get("/{user_id}",
            summary="Get one account.",
            response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)
