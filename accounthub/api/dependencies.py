"""
Shared API dependencies.

Everything a request needs hangs off ``app.state``, set once by the
application factory.
"""

from fastapi import Depends, Request
from sqlmodel import Session

from accounthub.core.config import Settings
from accounthub.db.session import get_db
from accounthub.services.billing import BillingProvider
from accounthub.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_billing(request: Request) -> BillingProvider:
    return request.app.state.billing


def get_user_service(db: Session = Depends(get_db), billing: BillingProvider = Depends(get_billing),
                     settings: Settings = Depends(get_app_settings), ) -> UserService:
    """Build a UserService bound to the request's session."""
    return UserService(db, billing, settings)
