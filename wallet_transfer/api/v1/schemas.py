"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from wallet_transfer.domain.models import DailySummary, TransactionRecord


class TransferRequestBody(BaseModel):
    """Request body for POST /v1/transfers"""

    sender_account_id: int = Field(..., description="Internal id of the sending account")
    recipient_number: str = Field(..., description="Recipient mobile number, e.g. 09171234567")
    # Range and precision are enforced by the engine so rejections carry its messages
    amount: Decimal = Field(..., description="Amount to send, at most 2 decimal places")
    description: Optional[str] = Field(None, max_length=255)


class TransactionSchema(BaseModel):
    """Persisted transfer record"""

    transaction_id: int
    amount: Decimal
    fee: Decimal
    sender_account_id: int
    recipient_account_id: int
    sender_number: str
    recipient_number: str
    timestamp: datetime
    status: str
    description: str

    @classmethod
    def from_record(cls, record: TransactionRecord) -> "TransactionSchema":
        return cls(
            transaction_id=record.transaction_id,
            amount=record.amount,
            fee=record.fee,
            sender_account_id=record.sender_account_id,
            recipient_account_id=record.recipient_account_id,
            sender_number=record.sender_number,
            recipient_number=record.recipient_number,
            timestamp=record.timestamp,
            status=record.status.value,
            description=record.description,
        )


class TransferResponse(BaseModel):
    """Response for POST /v1/transfers"""

    success: bool
    message: str
    error_code: Optional[str] = None
    transaction: Optional[TransactionSchema] = None


class FeePreviewResponse(BaseModel):
    """Response for GET /v1/transfers/fee-preview"""

    amount: Decimal
    fee: Decimal
    total_debit: Decimal


class DailySummaryResponse(BaseModel):
    """Response for GET /v1/accounts/{account_id}/daily-summary"""

    account_id: int
    total_amount_out: Decimal
    transfer_count: int
    remaining_amount: Decimal
    remaining_count: int

    @classmethod
    def from_summary(cls, account_id: int, summary: DailySummary) -> "DailySummaryResponse":
        return cls(
            account_id=account_id,
            total_amount_out=summary.total_amount_out,
            transfer_count=summary.transfer_count,
            remaining_amount=summary.remaining_amount,
            remaining_count=summary.remaining_count,
        )


class HistoryResponse(BaseModel):
    """Response for GET /v1/accounts/{account_id}/transfers"""

    account_id: int
    transfers: List[TransactionSchema]


class RecipientResponse(BaseModel):
    """Response for GET /v1/directory/{mobile_number}"""

    mobile_number: str
    name: str
