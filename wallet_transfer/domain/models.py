"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from wallet_transfer.domain.exceptions import TransferError


class TransferStatus(str, Enum):
    """Lifecycle status stored on a transaction record"""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Account:
    """Wallet account as known to the directory"""

    account_id: int
    holder_name: str
    mobile_number: str


@dataclass(frozen=True)
class TransferRequest:
    """Ephemeral request to move money; never persisted as-is"""

    sender_account_id: int
    recipient_number: str
    amount: Decimal
    description: Optional[str] = None


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable record of a committed transfer"""

    transaction_id: int
    amount: Decimal
    fee: Decimal
    sender_account_id: int
    recipient_account_id: int
    sender_number: str
    recipient_number: str
    timestamp: datetime
    status: TransferStatus
    description: str

    @property
    def total_debit(self) -> Decimal:
        return self.amount + self.fee


@dataclass(frozen=True)
class NewTransaction:
    """Transaction record before the log assigns an id"""

    amount: Decimal
    fee: Decimal
    sender_account_id: int
    recipient_account_id: int
    sender_number: str
    recipient_number: str
    timestamp: datetime
    status: TransferStatus
    description: str


@dataclass
class TransferResult:
    """Outcome returned to callers of the engine"""

    success: bool
    message: str
    record: Optional[TransactionRecord] = None
    error: Optional[TransferError] = None

    @classmethod
    def ok(cls, message: str, record: TransactionRecord) -> "TransferResult":
        return cls(success=True, message=message, record=record)

    @classmethod
    def failure(cls, error: TransferError) -> "TransferResult":
        return cls(success=False, message=error.message, error=error)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None


@dataclass(frozen=True)
class DailyUsage:
    """Outgoing COMPLETED transfers of one sender on one UTC day"""

    total_amount_out: Decimal
    transfer_count: int


@dataclass(frozen=True)
class DailySummary:
    """Daily usage plus what is left under the limits"""

    total_amount_out: Decimal
    transfer_count: int
    remaining_amount: Decimal
    remaining_count: int
