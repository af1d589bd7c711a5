"""
Compensation sweep.

Deletes billing customers left behind by failed provisioning and marks
their ledger rows resolved. Meant to run from cron.

Usage:
    python scripts/sweep_compensations.py [limit]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from accounthub.core.config import get_settings
from accounthub.core.logging import configure_logging
from accounthub.db.session import create_db_engine
from accounthub.services.billing import StripeBillingClient
from accounthub.services.compensation_service import CompensationService

if __name__ == "__main__":
    limit = int(sys.argv[1]) if len(sys.argv) > 1 else 100

    settings = get_settings()
    logger = configure_logging(settings)
    billing = StripeBillingClient.from_settings(settings)

    with Session(create_db_engine(settings)) as session:
        resolved = CompensationService(session, billing).sweep(limit)

    logger.info("Compensation sweep resolved %d entries", resolved)
