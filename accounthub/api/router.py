"""
API router.

Aggregates all endpoints under ``/api``.
"""

from fastapi import APIRouter

from accounthub.api.endpoints import users

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
