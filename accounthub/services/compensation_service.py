"""
Compensation service.

Out-of-band sweep that deletes orphaned billing customers recorded by
provisioning and marks their ledger rows resolved.
"""

import logging

from sqlmodel import Session

from accounthub.core.errors import BillingProviderError
from accounthub.db.repositories.compensation import CompensationRepository
from accounthub.services.billing import BillingProvider

logger = logging.getLogger(__name__)


class CompensationService:
    """Service that resolves pending billing compensations."""

    def __init__(self, session: Session, billing: BillingProvider):
        self.session = session
        self.billing = billing
        self.repository = CompensationRepository(session)

    def sweep(self, limit: int = 100) -> int:
        """
        Delete the remote customer of each pending compensation.

        Entries whose delete fails stay pending for the next sweep.

        Args:
            limit: Maximum number of entries to process

        Returns:
            Number of entries resolved
        """
        resolved = 0
        for entry in self.repository.get_pending(limit):
            try:
                self.billing.delete_customer(entry.billing_customer_id)
            except BillingProviderError as exc:
                logger.warning("Compensation %s for billing customer %s still pending: %s",
                               entry.id, entry.billing_customer_id, exc)
                continue
            self.repository.mark_resolved(entry)
            self.session.commit()
            resolved += 1
            logger.info("Resolved compensation %s (billing customer %s)", entry.id, entry.billing_customer_id)
        return resolved
