"""
Pending compensation repository.

Handles database operations for PendingCompensation rows.
"""

from sqlmodel import Session, select

from accounthub.models.compensation import PendingCompensation
from accounthub.models.user import utcnow


class CompensationRepository:
    """Repository for PendingCompensation database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: PendingCompensation) -> PendingCompensation:
        """Add an entry and flush it; the caller commits."""
        self.session.add(entry)
        self.session.flush()
        return entry

    def get_pending(self, limit: int = 100) -> list[PendingCompensation]:
        """Get unresolved entries, oldest first."""
        statement = (
            select(PendingCompensation)
            .where(PendingCompensation.resolved_at.is_(None))
            .order_by(PendingCompensation.id)
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def mark_resolved(self, entry: PendingCompensation) -> PendingCompensation:
        entry.resolved_at = utcnow()
        self.session.add(entry)
        self.session.flush()
        return entry
