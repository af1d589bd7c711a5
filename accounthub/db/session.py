"""
Database session management.

Provides the SQLModel engine, the per-request session dependency and the
scoped transaction used by units of work that must be atomic.
"""

from contextlib import contextmanager
from typing import Generator, Iterator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from accounthub.core.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the database engine from settings.

    SQLite URLs (used by tests and local runs) get no pool sizing, since
    SQLAlchemy picks a dedicated pool class for them.
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.DEBUG, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        echo=settings.DEBUG,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get a plain database session.

    Yields:
        SQLModel Session bound to the application's engine

    Example:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.exec(select(Item)).all()
    """
    with Session(request.app.state.engine) as session:
        yield session


@contextmanager
def transaction(engine: Engine) -> Iterator[Session]:
    """
    Open a session that runs inside exactly one transaction.

    The transaction is committed when the block exits cleanly and rolled
    back if it raises; either way the session is closed afterwards. Work
    done through the yielded session must not also go through another
    session, or it falls outside the transaction.

    Example:
        with transaction(engine) as tx:
            tx.add(user)
    """
    with Session(engine) as session:
        with session.begin():
            yield session
