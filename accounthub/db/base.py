"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from accounthub.models.user import User  # noqa: F401
from accounthub.models.compensation import PendingCompensation  # noqa: F401
