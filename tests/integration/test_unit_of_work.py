"""Integration tests for unit-of-work rollback behaviour"""

from decimal import Decimal

import pytest

from wallet_transfer.domain.exceptions import InsufficientFundsError, PersistenceError
from wallet_transfer.domain.models import TransferRequest
from wallet_transfer.infrastructure.database.unit_of_work import SqlUnitOfWork

pytestmark = pytest.mark.integration


def fail_rollbacks(monkeypatch) -> None:
    def rollback(self):
        raise PersistenceError("rollback failed")

    monkeypatch.setattr(SqlUnitOfWork, "rollback", rollback)


def test_uncommitted_work_is_discarded(uow_factory, clock, alice, balance_of):
    with uow_factory() as uow:
        uow.ledger.adjust(alice.account_id, -10000, clock())

    assert balance_of(alice.account_id) == Decimal("10000.00")


def test_failed_rollback_on_clean_exit_raises(uow_factory, alice, monkeypatch):
    fail_rollbacks(monkeypatch)

    with pytest.raises(PersistenceError, match="rollback failed"):
        with uow_factory() as uow:
            uow.directory.get_account(alice.account_id)


def test_failed_rollback_keeps_error_in_flight(uow_factory, alice, monkeypatch):
    fail_rollbacks(monkeypatch)

    with pytest.raises(InsufficientFundsError):
        with uow_factory() as uow:
            uow.directory.get_account(alice.account_id)
            raise InsufficientFundsError("Insufficient balance.")


def test_engine_reports_business_error_when_rollback_fails(engine, bob, alice, monkeypatch):
    """A rejection is still reported as itself, not as a storage failure"""
    fail_rollbacks(monkeypatch)

    result = engine.execute(
        TransferRequest(
            sender_account_id=bob.account_id,
            recipient_number=alice.mobile_number,
            amount=Decimal("1000.00"),
        )
    )

    assert result.error_code == "INSUFFICIENT_FUNDS"
