"""Service fee policy for peer-to-peer transfers"""

from decimal import Decimal

from wallet_transfer.config import settings

ZERO = Decimal("0.00")


class FeePolicy:
    """
    Flat fee below a threshold, free at or above it.

    Requirements:
    - amount >= free_threshold -> 0.00
    - otherwise -> flat_fee
    - Computed from the requested amount, never from amount + fee
    """

    def __init__(self, flat_fee: Decimal | None = None, free_threshold: Decimal | None = None):
        self.flat_fee = settings.service_fee if flat_fee is None else flat_fee
        self.free_threshold = settings.free_transfer_threshold if free_threshold is None else free_threshold

    def fee(self, amount: Decimal) -> Decimal:
        if amount >= self.free_threshold:
            return ZERO
        return self.flat_fee
