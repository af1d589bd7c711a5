"""Business logic services."""

from accounthub.services.billing import BillingProvider, StripeBillingClient
from accounthub.services.compensation_service import CompensationService
from accounthub.services.user_service import UserService

__all__ = [
    "BillingProvider",
    "CompensationService",
    "StripeBillingClient",
    "UserService",
]
