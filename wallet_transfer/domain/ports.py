"""Storage protocols the transfer engine depends on"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from wallet_transfer.domain.models import Account, NewTransaction, TransactionRecord


class Directory(Protocol):
    """Maps public mobile numbers to internal account ids"""

    def get_account(self, account_id: int) -> Optional[Account]:
        ...

    def resolve(self, mobile_number: str) -> Optional[int]:
        ...

    def display_name(self, account_id: int) -> Optional[str]:
        ...


class Ledger(Protocol):
    """Per-account balances in integer cents"""

    def get_balance(self, account_id: int) -> Optional[int]:
        ...

    def lock_balances(self, account_ids: Iterable[int]) -> Dict[int, int]:
        ...

    def adjust(self, account_id: int, delta_cents: int, now: datetime) -> Optional[int]:
        ...


class TransactionLog(Protocol):
    """Append-only transfer records"""

    def append(self, transaction: NewTransaction) -> TransactionRecord:
        ...

    def get(self, transaction_id: int) -> Optional[TransactionRecord]:
        ...

    def list_for_account(self, account_id: int, limit: int = 20) -> List[TransactionRecord]:
        ...

    def completed_totals_for_day(self, account_id: int, start: datetime, end: datetime) -> Tuple[int, int]:
        ...


class UnitOfWork(Protocol):
    """
    One atomic storage transaction shared by directory, ledger and log.

    Leaving the context without commit() rolls everything back. A failed
    rollback raises PersistenceError on a clean exit; when the block is
    already raising, that exception propagates unchanged.
    """

    directory: Directory
    ledger: Ledger
    transactions: TransactionLog

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        ...
