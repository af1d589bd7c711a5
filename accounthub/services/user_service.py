"""
User service.

Business logic for account provisioning and lookup.
"""

import logging
from typing import Optional

from sqlmodel import Session

from accounthub.core.config import Settings
from accounthub.core.errors import EntityNotFoundError, ProvisionedUserReadError
from accounthub.core.security import get_password_hash
from accounthub.db.partial_update import UserField, update_user_fields
from accounthub.db.repositories.compensation import CompensationRepository
from accounthub.db.repositories.user import UserRepository
from accounthub.db.session import transaction
from accounthub.models.compensation import PendingCompensation
from accounthub.models.user import User
from accounthub.schemas.user import UserCreate
from accounthub.services.billing import BillingProvider

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session, billing: BillingProvider, settings: Settings):
        """
        Initialize service.

        Args:
            session: Plain database session, used for reads
            billing: Billing provider client
            settings: Application settings
        """
        self.session = session
        self.billing = billing
        self.settings = settings
        self.repository = UserRepository(session, max_page_size=settings.USERS_PAGE_MAX)

    def register(self, user_data: UserCreate) -> User:
        """
        Provision a new account.

        Inserts the user, creates the billing customer, attaches its id and
        commits, all in one local transaction. The insert runs before the
        remote call so a duplicate email never creates a billing customer.

        Args:
            user_data: Validated registration data

        Returns:
            The committed user, read back from the store

        Raises:
            EmailAlreadyTakenError: If the email is already registered
            BillingProviderError: If the billing customer could not be created
            ProvisionedUserReadError: If the committed user could not be read back
        """
        hashed_password = get_password_hash(user_data.password, rounds=self.settings.BCRYPT_ROUNDS)
        engine = self.session.get_bind()

        user_id = None
        customer_id = None
        try:
            with transaction(engine) as tx:
                user_id = UserRepository(tx).create(
                    first_name=user_data.first_name,
                    last_name=user_data.last_name,
                    email=user_data.email,
                    hashed_password=hashed_password,
                    picture_url=user_data.picture_url,
                )
                customer_id = self.billing.create_customer(
                    email=user_data.email,
                    reference_id=user_id,
                    first_name=user_data.first_name,
                    last_name=user_data.last_name,
                )
                update_user_fields(tx, user_id, {UserField.BILLING_CUSTOMER_ID: customer_id})
        except Exception as exc:
            # The remote customer survives the local rollback
            if customer_id is not None:
                self._report_orphan(customer_id, user_id, user_data.email, exc)
            raise

        logger.info("Provisioned user %s with billing customer %s", user_id, customer_id)

        try:
            return self.repository.get_by_id(user_id)
        except EntityNotFoundError as exc:
            logger.error("User %s was committed but could not be read back", user_id)
            raise ProvisionedUserReadError(user_id) from exc

    def get_user(self, user_id: int) -> User:
        return self.repository.get_by_id(user_id)

    def list_users(self, offset: int, limit: int) -> list[User]:
        return self.repository.get_all(offset, limit)

    def _report_orphan(self, customer_id: str, user_id: Optional[int], email: str, exc: Exception) -> None:
        """Log an orphaned billing customer and record it for the compensation sweep."""
        reason = f"{type(exc).__name__}: {exc}"
        logger.critical(
            "Orphaned billing customer %s: local user %s (%s) was rolled back after %s",
            customer_id, user_id, email, reason,
        )
        try:
            with transaction(self.session.get_bind()) as tx:
                CompensationRepository(tx).create(PendingCompensation(
                    billing_customer_id=customer_id,
                    user_id=user_id,
                    email=email,
                    reason=reason,
                ))
        except Exception:
            # The caller re-raises the original error
            logger.critical("Could not record pending compensation for billing customer %s",
                            customer_id, exc_info=True)
