"""Per-account daily transfer limits derived from the transaction log"""

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Tuple

from wallet_transfer.config import settings
from wallet_transfer.domain.exceptions import DailyLimitExceededError
from wallet_transfer.domain.models import DailySummary, DailyUsage
from wallet_transfer.utils.date_utils import day_bounds
from wallet_transfer.utils.money import format_amount, from_cents


class CompletedTransfers(Protocol):
    def completed_totals_for_day(self, account_id: int, start, end) -> Tuple[int, int]:
        ...


class LimitTracker:
    """
    Daily outgoing totals per sender, recomputed from COMPLETED log records.

    Nothing is cached: every check reads the log, so usage is always
    reconcilable with what was actually committed.
    """

    def __init__(self, max_daily_amount: Decimal | None = None, max_daily_transfers: int | None = None):
        self.max_daily_amount = settings.max_daily_amount if max_daily_amount is None else max_daily_amount
        self.max_daily_transfers = (
            settings.max_daily_transfers if max_daily_transfers is None else max_daily_transfers
        )

    def daily_usage(self, log: CompletedTransfers, account_id: int, as_of_day: date) -> DailyUsage:
        start, end = day_bounds(as_of_day)
        total_cents, count = log.completed_totals_for_day(account_id, start, end)
        return DailyUsage(total_amount_out=from_cents(total_cents), transfer_count=count)

    def check(self, usage: DailyUsage, amount: Decimal) -> Optional[DailyLimitExceededError]:
        """Count cap is checked before the amount cap; the fee does not count toward the amount"""
        if usage.transfer_count >= self.max_daily_transfers:
            return DailyLimitExceededError(
                f"Daily transfer limit exceeded. Maximum {self.max_daily_transfers} transfers per day.",
                limit="count",
            )

        if usage.total_amount_out + amount > self.max_daily_amount:
            return DailyLimitExceededError(
                "Daily transfer limit exceeded. "
                f"Limit: {format_amount(self.max_daily_amount)}, "
                f"Already used: {format_amount(usage.total_amount_out)}, "
                f"Requested: {format_amount(amount)}",
                limit="amount",
            )

        return None

    def summary(self, usage: DailyUsage) -> DailySummary:
        return DailySummary(
            total_amount_out=usage.total_amount_out,
            transfer_count=usage.transfer_count,
            remaining_amount=max(self.max_daily_amount - usage.total_amount_out, Decimal("0.00")),
            remaining_count=max(self.max_daily_transfers - usage.transfer_count, 0),
        )
