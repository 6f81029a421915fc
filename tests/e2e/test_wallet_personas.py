"""
E2E tests for wallet personas driving the HTTP API end to end.

Personas:
- sari_sari_owner: many small payouts in one day, runs into the count cap
- remitter: large transfers, runs into the daily amount cap
- newcomer: empty wallet, receives first and then spends everything
- fat_finger: mistypes numbers and amounts, nothing moves
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def send(client: TestClient, sender_id: int, number: str, amount: str):
    return client.post(
        "/v1/transfers",
        json={"sender_account_id": sender_id, "recipient_number": number, "amount": amount},
    )


def test_sari_sari_owner_hits_count_cap(client: TestClient, open_account, balance_of, clock):
    """
    sari_sari_owner: 20 payouts of 10.00 go through, the 21st is refused
    Expected: cap resets at the next UTC midnight
    """
    owner = open_account("Nena Cruz", "09051112222", "1000.00")
    supplier = open_account("Tony Lim", "09053334444")

    for _ in range(20):
        assert send(client, owner.account_id, supplier.mobile_number, "10.00").status_code == 201

    refused = send(client, owner.account_id, supplier.mobile_number, "10.00")
    assert refused.status_code == 422
    assert refused.json()["error_code"] == "DAILY_LIMIT_EXCEEDED"
    assert "Maximum 20 transfers per day" in refused.json()["message"]

    summary = client.get(f"/v1/accounts/{owner.account_id}/daily-summary").json()
    assert summary["transfer_count"] == 20
    assert summary["remaining_count"] == 0

    # 20 x (10.00 + 5.00 fee)
    assert balance_of(owner.account_id) == Decimal("700.00")

    clock.now = clock.now.replace(hour=0, minute=0) + timedelta(days=1)
    assert send(client, owner.account_id, supplier.mobile_number, "10.00").status_code == 201


def test_remitter_hits_amount_cap(client: TestClient, open_account, balance_of):
    """
    remitter: two 50,000.00 transfers use the whole 100,000.00 allowance
    Expected: even 1.00 more is refused, balances untouched by the refusal
    """
    remitter = open_account("Carlo Dizon", "09061112222", "200000.00")
    family = open_account("Maria Dizon", "09063334444")

    assert send(client, remitter.account_id, family.mobile_number, "50000.00").status_code == 201
    assert send(client, remitter.account_id, family.mobile_number, "50000.00").status_code == 201

    refused = send(client, remitter.account_id, family.mobile_number, "1.00")
    assert refused.status_code == 422
    assert refused.json()["error_code"] == "DAILY_LIMIT_EXCEEDED"
    assert "Already used: ₱100,000.00" in refused.json()["message"]

    # Both transfers were above the free threshold
    assert balance_of(remitter.account_id) == Decimal("100000.00")
    assert balance_of(family.account_id) == Decimal("100000.00")


def test_newcomer_receives_then_spends_all(client: TestClient, open_account, alice, balance_of):
    """
    newcomer: starts at zero, is paid 105.00, then sends 100.00 + 5.00 fee
    Expected: ends at exactly 0.00, one more peso is insufficient
    """
    newcomer = open_account("Joy Ramos", "09071112222")

    assert send(client, newcomer.account_id, alice.mobile_number, "1.00").json()["error_code"] == (
        "INSUFFICIENT_FUNDS"
    )
    assert send(client, alice.account_id, newcomer.mobile_number, "105.00").status_code == 201
    assert send(client, newcomer.account_id, alice.mobile_number, "100.00").status_code == 201

    assert balance_of(newcomer.account_id) == Decimal("0.00")
    assert send(client, newcomer.account_id, alice.mobile_number, "1.00").json()["error_code"] == (
        "INSUFFICIENT_FUNDS"
    )

    history = client.get(f"/v1/accounts/{newcomer.account_id}/transfers").json()["transfers"]
    assert [t["amount"] for t in history] == ["100.00", "105.00"]


def test_fat_finger_moves_nothing(client: TestClient, alice, bob, balance_of):
    """
    fat_finger: malformed numbers and amounts
    Expected: every attempt rejected, no history, balances untouched
    """
    attempts = [
        (bob.mobile_number[:-1], "100.00", "INVALID_RECIPIENT_FORMAT"),
        ("+639181234567", "100.00", "INVALID_RECIPIENT_FORMAT"),
        (bob.mobile_number, "100.001", "INVALID_AMOUNT"),
        (bob.mobile_number, "0.99", "INVALID_AMOUNT"),
        (bob.mobile_number, "50000.01", "INVALID_AMOUNT"),
        (alice.mobile_number, "100.00", "SELF_TRANSFER"),
    ]

    for number, amount, code in attempts:
        response = send(client, alice.account_id, number, amount)
        assert response.status_code == 422
        assert response.json()["error_code"] == code

    assert balance_of(alice.account_id) == Decimal("10000.00")
    assert balance_of(bob.account_id) == Decimal("250.00")
    assert client.get(f"/v1/accounts/{alice.account_id}/transfers").json()["transfers"] == []
