"""Syntactic checks on transfer input, run before any storage access"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from wallet_transfer.config import settings
from wallet_transfer.domain.exceptions import InvalidAmountError, InvalidRecipientFormatError
from wallet_transfer.utils.money import CENT, format_amount


class TransferRules:
    """Amount range and mobile number format accepted by the engine"""

    def __init__(
        self,
        min_amount: Decimal | None = None,
        max_amount: Decimal | None = None,
        mobile_number_pattern: str | None = None,
    ):
        self.min_amount = settings.min_transfer_amount if min_amount is None else min_amount
        self.max_amount = settings.max_transfer_amount if max_amount is None else max_amount
        self.mobile_pattern = re.compile(mobile_number_pattern or settings.mobile_number_pattern)

    def parse_amount(self, value: Any) -> Decimal:
        """
        Coerce caller input to a positive Decimal with at most 2 decimal places.

        Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.

        Raises:
            InvalidAmountError: missing, non-numeric, non-positive or over-precise amount
        """
        if value is None or isinstance(value, bool):
            raise InvalidAmountError("Transfer amount is required.")
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidAmountError("Transfer amount must be a number.") from e

        if not amount.is_finite():
            raise InvalidAmountError("Transfer amount must be a number.")
        if amount <= 0:
            raise InvalidAmountError("Transfer amount must be greater than zero.")
        try:
            quantized = amount.quantize(CENT)
        except InvalidOperation as e:
            raise InvalidAmountError("Transfer amount is too large.") from e
        if amount != quantized:
            raise InvalidAmountError("Transfer amount cannot have more than 2 decimal places.")
        return quantized

    def validate_amount(self, value: Any) -> Decimal:
        """parse_amount plus the configured min/max range"""
        amount = self.parse_amount(value)
        if amount < self.min_amount:
            raise InvalidAmountError(f"Minimum transfer amount is {format_amount(self.min_amount)}")
        if amount > self.max_amount:
            raise InvalidAmountError(f"Maximum transfer amount is {format_amount(self.max_amount)}")
        return amount

    def is_valid_mobile_number(self, mobile_number: str | None) -> bool:
        return bool(mobile_number) and self.mobile_pattern.fullmatch(mobile_number) is not None

    def validate_recipient(self, mobile_number: str | None) -> str:
        if mobile_number is None or not mobile_number.strip():
            raise InvalidRecipientFormatError("Recipient mobile number is required.")
        if not self.is_valid_mobile_number(mobile_number):
            raise InvalidRecipientFormatError("Invalid mobile number format. Must be 11 digits starting with 09.")
        return mobile_number
