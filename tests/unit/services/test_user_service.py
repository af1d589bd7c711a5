"""Tests for account provisioning."""

import logging

import bcrypt
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import SessionTransaction
from sqlmodel import Session, select

from accounthub.core.errors import (
    BillingProviderError,
    EmailAlreadyTakenError,
    EntityNotFoundError,
    ProvisionedUserReadError,
)
from accounthub.models.compensation import PendingCompensation
from accounthub.models.user import User
from accounthub.schemas.user import UserCreate


def _signup(email="ada@example.com", **overrides) -> UserCreate:
    data = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": email,
        "password": "Str0ngPass!",
        "pictureUrl": "http://x/a.png",
    }
    data.update(overrides)
    return UserCreate.model_validate(data)


def _compensations(engine) -> list[PendingCompensation]:
    with Session(engine) as session:
        return list(session.exec(select(PendingCompensation)).all())


# ======================================================================
# Successful provisioning
# ======================================================================


class TestRegister:
    def test_creates_user_with_billing_identity(self, user_service, billing, engine):
        user = user_service.register(_signup())

        assert user.id > 0
        assert user.email == "ada@example.com"
        assert user.active is True
        assert user.billing_customer_id == billing.created[0]
        assert billing.customers[user.billing_customer_id]["reference_id"] == user.id
        assert billing.customers[user.billing_customer_id]["name"] == "Ada Lovelace"

        with Session(engine) as session:
            stored = session.get(User, user.id)
        assert stored.billing_customer_id == user.billing_customer_id

    def test_password_is_hashed(self, user_service):
        user = user_service.register(_signup())
        assert user.hashed_password != "Str0ngPass!"
        assert bcrypt.checkpw(b"Str0ngPass!", user.hashed_password.encode("utf-8"))

    def test_attach_stamps_updated_at(self, user_service):
        user = user_service.register(_signup())
        assert user.updated_at >= user.created_at

    def test_distinct_emails_get_distinct_ids(self, user_service):
        users = [user_service.register(_signup(f"user{i}@example.com")) for i in range(3)]
        assert len({u.id for u in users}) == 3
        assert [u.email for u in users] == [f"user{i}@example.com" for i in range(3)]


# ======================================================================
# Failure handling
# ======================================================================


class TestRegisterFailures:
    def test_duplicate_email_conflicts_before_billing(self, user_service, billing, user_count):
        user_service.register(_signup())

        with pytest.raises(EmailAlreadyTakenError):
            user_service.register(_signup())

        assert user_count() == 1
        assert len(billing.created) == 1

    def test_billing_failure_rolls_back_insert(self, user_service, billing, engine, user_count):
        billing.fail_create = True

        with pytest.raises(BillingProviderError):
            user_service.register(_signup())

        assert user_count() == 0
        assert _compensations(engine) == []

    def test_email_reusable_after_rollback(self, user_service, billing):
        billing.fail_create = True
        with pytest.raises(BillingProviderError):
            user_service.register(_signup())

        billing.fail_create = False
        assert user_service.register(_signup()).email == "ada@example.com"

    def test_attach_failure_records_orphan(self, user_service, billing, engine, user_count, monkeypatch, caplog):
        def broken_update(*args, **kwargs):
            raise OperationalError("UPDATE users", {}, Exception("database is locked"))

        monkeypatch.setattr("accounthub.services.user_service.update_user_fields", broken_update)

        with caplog.at_level(logging.CRITICAL, logger="accounthub"):
            with pytest.raises(OperationalError):
                user_service.register(_signup())

        assert user_count() == 0

        [entry] = _compensations(engine)
        assert entry.billing_customer_id == billing.created[0]
        assert entry.email == "ada@example.com"
        assert entry.user_id is not None
        assert entry.resolved_at is None
        assert "OperationalError" in entry.reason

        assert any(r.levelno == logging.CRITICAL and billing.created[0] in r.getMessage()
                   for r in caplog.records)

    def test_commit_failure_records_orphan(self, user_service, billing, engine, user_count, monkeypatch,
                                           caplog):
        armed = {"commit": False}
        create_customer = billing.create_customer
        original_commit = SessionTransaction.commit

        def create_then_arm(**kwargs):
            customer_id = create_customer(**kwargs)
            armed["commit"] = True
            return customer_id

        def failing_commit(self, *args, **kwargs):
            # flush() commits a nested subtransaction; only the outer COMMIT fails
            if armed["commit"] and self._parent is None:
                armed["commit"] = False
                raise OperationalError("COMMIT", {}, Exception("disk I/O error"))
            return original_commit(self, *args, **kwargs)

        monkeypatch.setattr(billing, "create_customer", create_then_arm)
        monkeypatch.setattr(SessionTransaction, "commit", failing_commit)

        with caplog.at_level(logging.CRITICAL, logger="accounthub"):
            with pytest.raises(OperationalError, match="disk I/O error"):
                user_service.register(_signup())

        monkeypatch.undo()
        assert user_count() == 0

        [entry] = _compensations(engine)
        assert entry.billing_customer_id == billing.created[0]
        assert entry.email == "ada@example.com"
        assert "OperationalError" in entry.reason

        assert any(r.levelno == logging.CRITICAL and billing.created[0] in r.getMessage()
                   for r in caplog.records)

    def test_ledger_write_failure_keeps_original_error(self, user_service, billing, engine, monkeypatch,
                                                        caplog):
        def broken_update(*args, **kwargs):
            raise OperationalError("UPDATE users", {}, Exception("database is locked"))

        def broken_ledger(self, entry):
            raise ValueError("ledger unavailable")

        monkeypatch.setattr("accounthub.services.user_service.update_user_fields", broken_update)
        monkeypatch.setattr("accounthub.services.user_service.CompensationRepository.create", broken_ledger)

        with caplog.at_level(logging.CRITICAL, logger="accounthub"):
            with pytest.raises(OperationalError, match="database is locked"):
                user_service.register(_signup())

        assert _compensations(engine) == []
        ledger_failures = [r for r in caplog.records
                           if r.levelno == logging.CRITICAL
                           and r.getMessage().startswith("Could not record pending compensation")]
        assert len(ledger_failures) == 1
        assert billing.created[0] in ledger_failures[0].getMessage()
        assert ledger_failures[0].exc_info[0] is ValueError

    def test_no_orphan_when_billing_never_succeeded(self, user_service, billing, engine, caplog):
        billing.fail_create = True

        with caplog.at_level(logging.CRITICAL, logger="accounthub"):
            with pytest.raises(BillingProviderError):
                user_service.register(_signup())

        assert not [r for r in caplog.records if r.levelno == logging.CRITICAL]
        assert _compensations(engine) == []

    def test_reread_failure_is_a_read_error(self, user_service, user_count, monkeypatch):
        def missing(user_id):
            raise EntityNotFoundError(f"user {user_id}")

        monkeypatch.setattr(user_service.repository, "get_by_id", missing)

        with pytest.raises(ProvisionedUserReadError):
            user_service.register(_signup())

        # The row is durable regardless
        assert user_count() == 1


# ======================================================================
# Reads
# ======================================================================


class TestReads:
    def test_get_user(self, user_service, make_user):
        user_id = make_user("ada@example.com")
        assert user_service.get_user(user_id).id == user_id

    def test_get_user_missing(self, user_service):
        with pytest.raises(EntityNotFoundError):
            user_service.get_user(404)

    def test_list_users_caps_limit(self, user_service, make_user, settings):
        for i in range(3):
            make_user(f"user{i}@example.com")
        user_service.repository.max_page_size = 2
        assert len(user_service.list_users(0, settings.USERS_PAGE_MAX)) == 2
