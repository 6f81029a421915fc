"""Unit tests for transfer input validation"""

from decimal import Decimal

import pytest

from wallet_transfer.domain.exceptions import InvalidAmountError, InvalidRecipientFormatError
from wallet_transfer.domain.validation import TransferRules


@pytest.fixture
def rules() -> TransferRules:
    return TransferRules()


def test_validate_amount_accepts_two_decimals(rules):
    assert rules.validate_amount(Decimal("100.50")) == Decimal("100.50")
    assert rules.validate_amount("250") == Decimal("250.00")


def test_validate_amount_float_input(rules):
    """Floats are read through their repr, not their binary value"""
    assert rules.validate_amount(10.1) == Decimal("10.10")


@pytest.mark.parametrize(
    "value, fragment",
    [
        (None, "required"),
        ("abc", "must be a number"),
        ("NaN", "must be a number"),
        ("0", "greater than zero"),
        ("-10.00", "greater than zero"),
        ("10.005", "more than 2 decimal places"),
        ("0.50", "Minimum transfer amount is ₱1.00"),
        ("50000.01", "Maximum transfer amount is ₱50,000.00"),
    ],
)
def test_validate_amount_rejections(rules, value, fragment):
    with pytest.raises(InvalidAmountError) as exc_info:
        rules.validate_amount(value)

    assert fragment in str(exc_info.value)
    assert exc_info.value.code == "INVALID_AMOUNT"
    assert exc_info.value.category == "input"


def test_validate_amount_range_is_inclusive(rules):
    assert rules.validate_amount("1.00") == Decimal("1.00")
    assert rules.validate_amount("50000.00") == Decimal("50000.00")


def test_validate_amount_trailing_zeros_are_not_extra_precision(rules):
    assert rules.validate_amount("100.000") == Decimal("100.00")


@pytest.mark.parametrize("number", ["09171234567", "09990000000"])
def test_validate_recipient_accepts_canonical_numbers(rules, number):
    assert rules.validate_recipient(number) == number
    assert rules.is_valid_mobile_number(number)


@pytest.mark.parametrize(
    "number",
    [
        "1234567890",  # 10 digits
        "9171234567",  # Missing leading 0
        "0917123456",  # Too short
        "091712345678",  # Too long
        "08171234567",  # Wrong prefix
        "0917123456a",
        "+639171234567",
    ],
)
def test_validate_recipient_rejects_malformed_numbers(rules, number):
    with pytest.raises(InvalidRecipientFormatError):
        rules.validate_recipient(number)
    assert not rules.is_valid_mobile_number(number)


@pytest.mark.parametrize("number", [None, "", "   "])
def test_validate_recipient_required(rules, number):
    with pytest.raises(InvalidRecipientFormatError, match="required"):
        rules.validate_recipient(number)


def test_custom_rules():
    rules = TransferRules(min_amount=Decimal("10.00"), max_amount=Decimal("20.00"), mobile_number_pattern=r"^\d{4}$")

    assert rules.validate_amount("15.00") == Decimal("15.00")
    with pytest.raises(InvalidAmountError):
        rules.validate_amount("9.99")
    assert rules.is_valid_mobile_number("1234")
