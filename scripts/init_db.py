"""
Database initialization script.

Run this script to create database tables without going through Alembic.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from accounthub.core.config import get_settings
from accounthub.core.logging import configure_logging
from accounthub.db.init_db import init_db
from accounthub.db.session import create_db_engine

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings)

    try:
        init_db(create_db_engine(settings))
    except Exception as e:
        print(f"ERROR: Database initialization failed: {e}")
        sys.exit(1)

    print("SUCCESS: Database initialized!")
