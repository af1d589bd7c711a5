"""
User repository.

Handles database operations for the User model. Lookups report misses and
driver failures the same way so storage details never reach callers.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from accounthub.core.errors import EmailAlreadyTakenError, EntityNotFoundError, InvalidFieldError
from accounthub.models.user import User, utcnow

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE_SIZE = 100


def _is_email_conflict(exc: IntegrityError) -> bool:
    """Tell an email uniqueness violation apart from other integrity errors."""
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return "email" in constraint
    message = str(exc.orig).lower()
    return ("unique" in message or "duplicate" in message) and "email" in message


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session, max_page_size: int = DEFAULT_MAX_PAGE_SIZE):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session, plain or transactional
            max_page_size: Upper bound applied to ``get_all`` limits
        """
        self.session = session
        self.max_page_size = max_page_size

    def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        hashed_password: str,
        picture_url: str,
    ) -> int:
        """
        Insert a new active user with no billing identity yet.

        The row is flushed, not committed; the caller owns the transaction.

        Returns:
            Id of the new user

        Raises:
            EmailAlreadyTakenError: If the email is already registered
        """
        now = utcnow()
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            hashed_password=hashed_password,
            picture_url=picture_url,
            billing_customer_id="",
            active=True,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise EmailAlreadyTakenError(email) from exc
            raise
        return user.id

    def get_by_id(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises:
            EntityNotFoundError: If no row matches or the query fails
        """
        try:
            user = self.session.get(User, user_id)
        except SQLAlchemyError:
            logger.exception("Lookup of user %s failed", user_id)
            raise EntityNotFoundError(f"user {user_id}")
        if user is None:
            raise EntityNotFoundError(f"user {user_id}")
        return user

    def get_by_email(self, email: str) -> User:
        """
        Get user by email address (exact, case-sensitive match).

        Raises:
            EntityNotFoundError: If no row matches or the query fails
        """
        statement = select(User).where(User.email == email)
        try:
            user = self.session.exec(statement).first()
        except SQLAlchemyError:
            logger.exception("Lookup of user by email failed")
            raise EntityNotFoundError("user by email")
        if user is None:
            raise EntityNotFoundError("user by email")
        return user

    def get_all(self, offset: int = 0, limit: int = 20) -> list[User]:
        """
        Get users in insertion order with pagination.

        Inactive (soft-deleted) users are included.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return, capped at ``max_page_size``

        Returns:
            List of users, empty when ``offset`` is past the end

        Raises:
            InvalidFieldError: If offset or limit is negative
        """
        if offset < 0:
            raise InvalidFieldError("offset")
        if limit < 0:
            raise InvalidFieldError("limit")
        limit = min(limit, self.max_page_size)

        statement = select(User).order_by(User.id).offset(offset).limit(limit)
        return list(self.session.exec(statement).all())
