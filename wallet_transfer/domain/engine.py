"""Funds-transfer engine - validates, prices, limits and atomically moves money"""

import logging
import time
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, List, Optional

from wallet_transfer.domain.exceptions import (
    INFRASTRUCTURE,
    InsufficientFundsError,
    PersistenceError,
    PersistenceFailureError,
    RecipientNotFoundError,
    SelfTransferError,
    SenderNotFoundError,
    TransferError,
)
from wallet_transfer.domain.fees import FeePolicy
from wallet_transfer.domain.limits import LimitTracker
from wallet_transfer.domain.models import (
    DailySummary,
    NewTransaction,
    TransactionRecord,
    TransferRequest,
    TransferResult,
    TransferStatus,
)
from wallet_transfer.domain.ports import UnitOfWork
from wallet_transfer.domain.validation import TransferRules
from wallet_transfer.utils.date_utils import ensure_utc, utc_now
from wallet_transfer.utils.money import format_amount, from_cents, to_cents

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Cash Transfer"


class TransferEngine:
    """
    Executes peer-to-peer transfers between wallet accounts.

    The engine keeps no state of its own beyond its collaborators, so one
    instance can be shared by concurrent callers. Each execute() call runs in
    its own unit of work.

    Flow:
    1. Validate amount and recipient format (no storage access)
    2. Resolve sender and recipient, reject self-transfer
    3. Lock both balance rows in ascending id order
    4. Compute fee, check balance >= amount + fee
    5. Check daily count and amount limits
    6. Debit sender (conditional), credit recipient, append COMPLETED record
    7. Commit; any storage failure rolls back and is reported
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], UnitOfWork],
        fee_policy: FeePolicy | None = None,
        limit_tracker: LimitTracker | None = None,
        rules: TransferRules | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.unit_of_work_factory = unit_of_work_factory
        self.fee_policy = fee_policy or FeePolicy()
        self.limit_tracker = limit_tracker or LimitTracker()
        self.rules = rules or TransferRules()
        self.clock = clock

    def execute(self, request: TransferRequest) -> TransferResult:
        """
        Main entry point: run one transfer request to a terminal state.

        Input and business rejections come back as failed results carrying a
        TransferError; nothing is raised for them. Storage failures are rolled
        back and reported as PersistenceFailureError, never retried here.
        """
        started = time.perf_counter()

        try:
            amount = self.rules.validate_amount(request.amount)
            self.rules.validate_recipient(request.recipient_number)
        except TransferError as error:
            return self._finish(request, TransferResult.failure(error), started)

        try:
            with self.unit_of_work_factory() as uow:
                record = self._transfer(uow, request, amount)
        except TransferError as error:
            return self._finish(request, TransferResult.failure(error), started)
        except PersistenceError as e:
            logger.error(
                f"Transfer rolled back after storage error: {e}",
                extra={"sender_account_id": request.sender_account_id, "step": "commit"},
            )
            error = PersistenceFailureError("Database error occurred. Transfer cancelled.")
            return self._finish(request, TransferResult.failure(error), started)

        message = (
            f"Transfer successful! {format_amount(record.amount)} sent to {record.recipient_number}. "
            f"Service fee: {format_amount(record.fee)}"
        )
        return self._finish(request, TransferResult.ok(message, record), started)

    def _transfer(self, uow: UnitOfWork, request: TransferRequest, amount: Decimal) -> TransactionRecord:
        sender = uow.directory.get_account(request.sender_account_id)
        if sender is None:
            raise SenderNotFoundError("Sender account not found. Please log in again.")

        recipient_id = uow.directory.resolve(request.recipient_number)
        if recipient_id is None:
            raise RecipientNotFoundError("Recipient account not found. Please verify the mobile number.")

        if recipient_id == sender.account_id:
            raise SelfTransferError("Cannot transfer to your own account.")

        balances = uow.ledger.lock_balances([sender.account_id, recipient_id])
        if sender.account_id not in balances:
            raise SenderNotFoundError("Sender balance not found. Please contact support.")
        if recipient_id not in balances:
            raise RecipientNotFoundError("Recipient balance not found. Transfer cannot proceed.")

        fee = self.fee_policy.fee(amount)
        total_debit = amount + fee
        available = from_cents(balances[sender.account_id])
        if available < total_debit:
            raise self._insufficient(total_debit, available)

        now = ensure_utc(self.clock())
        usage = self.limit_tracker.daily_usage(uow.transactions, sender.account_id, now.date())
        limit_error = self.limit_tracker.check(usage, amount)
        if limit_error is not None:
            raise limit_error

        # Conditional debit re-validates sufficiency against the row being written
        if uow.ledger.adjust(sender.account_id, -to_cents(total_debit), now) is None:
            current = uow.ledger.get_balance(sender.account_id) or 0
            raise self._insufficient(total_debit, from_cents(current))
        if uow.ledger.adjust(recipient_id, to_cents(amount), now) is None:
            raise PersistenceError(f"Balance row for account {recipient_id} vanished during transfer")

        record = uow.transactions.append(
            NewTransaction(
                amount=amount,
                fee=fee,
                sender_account_id=sender.account_id,
                recipient_account_id=recipient_id,
                sender_number=sender.mobile_number,
                recipient_number=request.recipient_number,
                timestamp=now,
                status=TransferStatus.COMPLETED,
                description=request.description or DEFAULT_DESCRIPTION,
            )
        )
        uow.commit()
        return record

    @staticmethod
    def _insufficient(required: Decimal, available: Decimal) -> InsufficientFundsError:
        return InsufficientFundsError(
            f"Insufficient balance. Required: {format_amount(required)}, Available: {format_amount(available)}"
        )

    def _finish(self, request: TransferRequest, result: TransferResult, started: float) -> TransferResult:
        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        extra = {
            "sender_account_id": request.sender_account_id,
            "recipient_number": request.recipient_number,
            "outcome": "completed" if result.success else result.error_code,
            "duration_ms": duration_ms,
        }
        if result.success:
            extra["transaction_id"] = result.record.transaction_id
            logger.info("Transfer completed", extra=extra)
        elif result.error.category == INFRASTRUCTURE:
            logger.error("Transfer failed", extra=extra)
        else:
            logger.info(f"Transfer rejected: {result.message}", extra=extra)
        return result

    def preview_fee(self, amount: Any) -> Decimal:
        """
        Fee that would be charged for an amount; no storage access.

        Raises:
            InvalidAmountError: amount is missing, non-numeric, non-positive or too precise
        """
        return self.fee_policy.fee(self.rules.parse_amount(amount))

    def daily_summary(self, account_id: int) -> DailySummary:
        """Today's (UTC) outgoing usage and remaining allowance for an account"""
        today = ensure_utc(self.clock()).date()
        with self.unit_of_work_factory() as uow:
            usage = self.limit_tracker.daily_usage(uow.transactions, account_id, today)
        return self.limit_tracker.summary(usage)

    def transfer_history(self, account_id: int, limit: int = 20) -> List[TransactionRecord]:
        """Transfers sent or received by an account, newest first"""
        with self.unit_of_work_factory() as uow:
            return uow.transactions.list_for_account(account_id, limit)

    def find_transfer(self, transaction_id: int) -> Optional[TransactionRecord]:
        with self.unit_of_work_factory() as uow:
            return uow.transactions.get(transaction_id)

    def recipient_name(self, mobile_number: str) -> Optional[str]:
        """Display name for a confirmation screen, None when the number is unknown"""
        with self.unit_of_work_factory() as uow:
            account_id = uow.directory.resolve(mobile_number)
            if account_id is None:
                return None
            return uow.directory.display_name(account_id)

    def is_valid_mobile_number(self, mobile_number: str | None) -> bool:
        return self.rules.is_valid_mobile_number(mobile_number)
