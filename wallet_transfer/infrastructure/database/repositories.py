"""Data access layer for accounts, balances and transfer records"""

import functools
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wallet_transfer.domain.exceptions import PersistenceError
from wallet_transfer.domain.models import Account, NewTransaction, TransactionRecord, TransferStatus
from wallet_transfer.infrastructure.database.models import AccountBalance, TransferTransaction, WalletAccount
from wallet_transfer.utils.date_utils import ensure_utc, utc_now
from wallet_transfer.utils.money import from_cents, to_cents


def translate_errors(method):
    """Re-raise SQLAlchemy failures as the domain's PersistenceError"""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as e:
            raise PersistenceError(f"{method.__qualname__} failed: {e}") from e

    return wrapper


class DirectoryRepository:
    """Mobile number <-> account lookups"""

    def __init__(self, db: Session):
        self.db = db

    @translate_errors
    def get_account(self, account_id: int) -> Optional[Account]:
        row = self.db.query(WalletAccount).filter(WalletAccount.id == account_id).first()
        return _to_account(row) if row else None

    @translate_errors
    def resolve(self, mobile_number: str) -> Optional[int]:
        return (
            self.db.query(WalletAccount.id)
            .filter(WalletAccount.mobile_number == mobile_number)
            .scalar()
        )

    @translate_errors
    def display_name(self, account_id: int) -> Optional[str]:
        return (
            self.db.query(WalletAccount.holder_name)
            .filter(WalletAccount.id == account_id)
            .scalar()
        )

    @translate_errors
    def open_account(self, holder_name: str, mobile_number: str, opening_balance: Decimal = Decimal("0.00")) -> Account:
        """Create an account with its balance row (seeding and fixtures only)"""
        now = utc_now()
        db_account = WalletAccount(holder_name=holder_name, mobile_number=mobile_number, created_at=now)
        self.db.add(db_account)
        self.db.flush()  # Get ID without committing

        self.db.add(
            AccountBalance(
                account_id=db_account.id,
                balance_cents=to_cents(opening_balance),
                updated_at=now,
            )
        )
        self.db.flush()
        return _to_account(db_account)


class BalanceRepository:
    """Ledger store: balances in integer cents"""

    def __init__(self, db: Session):
        self.db = db

    @translate_errors
    def get_balance(self, account_id: int) -> Optional[int]:
        return (
            self.db.query(AccountBalance.balance_cents)
            .filter(AccountBalance.account_id == account_id)
            .scalar()
        )

    @translate_errors
    def lock_balances(self, account_ids: Iterable[int]) -> Dict[int, int]:
        """
        Row-lock balances for the rest of the unit of work.

        Rows are locked in ascending account id order so two transfers between
        the same pair in opposite directions cannot deadlock. SQLite has no
        FOR UPDATE; there the BEGIN IMMEDIATE issued by build_engine already
        holds the database write lock.
        """
        rows = (
            self.db.query(AccountBalance.account_id, AccountBalance.balance_cents)
            .filter(AccountBalance.account_id.in_(sorted(set(account_ids))))
            .order_by(AccountBalance.account_id)
            .with_for_update()
            .all()
        )
        return {account_id: balance_cents for account_id, balance_cents in rows}

    @translate_errors
    def adjust(self, account_id: int, delta_cents: int, now: datetime) -> Optional[int]:
        """
        Add delta_cents to a balance in place.

        Debits only apply while the balance covers them. Returns the new
        balance, or None when no row matched (missing account or insufficient
        funds for a debit).
        """
        stmt = update(AccountBalance).where(AccountBalance.account_id == account_id)
        if delta_cents < 0:
            stmt = stmt.where(AccountBalance.balance_cents >= -delta_cents)
        stmt = stmt.values(
            balance_cents=AccountBalance.balance_cents + delta_cents,
            updated_at=now,
        ).execution_options(synchronize_session=False)

        result = self.db.execute(stmt)
        if result.rowcount == 0:
            return None
        return self.get_balance(account_id)


class TransactionRepository:
    """Transaction log: append-only transfer records"""

    def __init__(self, db: Session):
        self.db = db

    @translate_errors
    def append(self, transaction: NewTransaction) -> TransactionRecord:
        """Persist a record inside the current unit of work; the id is assigned on flush"""
        db_transaction = TransferTransaction(
            amount_cents=to_cents(transaction.amount),
            fee_cents=to_cents(transaction.fee),
            sender_account_id=transaction.sender_account_id,
            recipient_account_id=transaction.recipient_account_id,
            sender_number=transaction.sender_number,
            recipient_number=transaction.recipient_number,
            status=transaction.status.value,
            description=transaction.description,
            created_at=transaction.timestamp,
        )
        self.db.add(db_transaction)
        self.db.flush()
        return _to_record(db_transaction)

    @translate_errors
    def get(self, transaction_id: int) -> Optional[TransactionRecord]:
        row = self.db.query(TransferTransaction).filter(TransferTransaction.id == transaction_id).first()
        return _to_record(row) if row else None

    @translate_errors
    def list_for_account(self, account_id: int, limit: int = 20) -> List[TransactionRecord]:
        """Fetch recent transfers sent or received by an account"""
        rows = (
            self.db.query(TransferTransaction)
            .filter(
                or_(
                    TransferTransaction.sender_account_id == account_id,
                    TransferTransaction.recipient_account_id == account_id,
                )
            )
            .order_by(TransferTransaction.created_at.desc(), TransferTransaction.id.desc())
            .limit(limit)
            .all()
        )
        return [_to_record(row) for row in rows]

    @translate_errors
    def completed_totals_for_day(self, account_id: int, start: datetime, end: datetime) -> Tuple[int, int]:
        """Sum of amount_cents and count of COMPLETED transfers sent in [start, end)"""
        total_cents, count = (
            self.db.query(
                func.coalesce(func.sum(TransferTransaction.amount_cents), 0),
                func.count(TransferTransaction.id),
            )
            .filter(
                TransferTransaction.sender_account_id == account_id,
                TransferTransaction.status == TransferStatus.COMPLETED.value,
                TransferTransaction.created_at >= start,
                TransferTransaction.created_at < end,
            )
            .one()
        )
        return int(total_cents), int(count)


def _to_account(row: WalletAccount) -> Account:
    return Account(account_id=row.id, holder_name=row.holder_name, mobile_number=row.mobile_number)


def _to_record(row: TransferTransaction) -> TransactionRecord:
    return TransactionRecord(
        transaction_id=row.id,
        amount=from_cents(row.amount_cents),
        fee=from_cents(row.fee_cents),
        sender_account_id=row.sender_account_id,
        recipient_account_id=row.recipient_account_id,
        sender_number=row.sender_number,
        recipient_number=row.recipient_number,
        timestamp=ensure_utc(row.created_at),
        status=TransferStatus(row.status),
        description=row.description,
    )
