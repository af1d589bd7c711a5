"""
Alembic environment configuration.

Migrations target the accounthub tables (users, billing_compensations); the
database URL comes from accounthub settings rather than alembic.ini.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from accounthub.core.config import get_settings
# Import all models so Alembic can detect schema changes
from accounthub.db.base import *  # noqa

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", get_settings().database_url)

target_metadata = SQLModel.metadata

# Column length changes (e.g. picture_url) matter for these tables
CONFIGURE_OPTIONS = {
    "target_metadata": target_metadata,
    "compare_type": True,
}


def run_migrations_offline() -> None:
    """Emit migration SQL to the script output without connecting."""
    context.configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True,
                      dialect_opts={"paramstyle": "named"}, **CONFIGURE_OPTIONS)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    connectable = engine_from_config(config.get_section(config.config_ini_section, {}), prefix="sqlalchemy.",
                                     poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **CONFIGURE_OPTIONS)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
