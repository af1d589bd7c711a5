"""Shared fixtures: a file-backed SQLite store, a fake billing provider and an API client."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, func, select

from accounthub.core.config import Settings
from accounthub.core.errors import BillingProviderError
from accounthub.db.init_db import init_db
from accounthub.db.session import create_db_engine, transaction
from accounthub.main import create_app
from accounthub.models.user import User
from accounthub.services.billing import BillingProvider
from accounthub.services.user_service import UserService


class FakeBilling(BillingProvider):
    """In-memory billing provider that records every call."""

    def __init__(self):
        self.customers: dict[str, dict] = {}
        self.created: list[str] = []
        self.deleted: list[str] = []
        self.fail_create = False
        self.fail_delete = False

    def create_customer(self, *, email, reference_id, first_name, last_name):
        if self.fail_create:
            raise BillingProviderError("provider unavailable: upstream 503 from billing-node-7")
        customer_id = f"cus_test{len(self.created) + 1}"
        self.customers[customer_id] = {
            "email": email,
            "reference_id": reference_id,
            "name": f"{first_name} {last_name}",
        }
        self.created.append(customer_id)
        return customer_id

    def delete_customer(self, customer_id):
        if self.fail_delete:
            raise BillingProviderError("provider unavailable")
        self.customers.pop(customer_id, None)
        self.deleted.append(customer_id)


def _insert_user(engine, email: str, **overrides) -> int:
    stamp = datetime(2020, 1, 1, tzinfo=timezone.utc)
    values = dict(
        first_name="Test",
        last_name="User",
        email=email,
        hashed_password="not-a-real-hash",
        picture_url="http://x/t.png",
        billing_customer_id="",
        active=True,
        created_at=stamp,
        updated_at=stamp,
    )
    values.update(overrides)
    with transaction(engine) as tx:
        user = User(**values)
        tx.add(user)
        tx.flush()
        return user.id


def _count_users(engine) -> int:
    with Session(engine) as session:
        return session.exec(select(func.count()).select_from(User)).one()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'accounthub.db'}",
        BCRYPT_ROUNDS=4,
        BILLING_API_KEY="sk_test_123",
        USERS_PAGE_DEFAULT=20,
        USERS_PAGE_MAX=100,
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def billing():
    return FakeBilling()


@pytest.fixture
def user_service(session, billing, settings):
    return UserService(session, billing, settings)


@pytest.fixture
def app(settings, billing, engine):
    # The app opens its own engine on the same database file
    app = create_app(settings, billing)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_user(engine):
    """Insert a user row directly, bypassing provisioning; returns its id."""
    def _make(email: str, **overrides) -> int:
        return _insert_user(engine, email, **overrides)
    return _make


@pytest.fixture
def user_count(engine):
    """Count user rows through a fresh session."""
    return lambda: _count_users(engine)
