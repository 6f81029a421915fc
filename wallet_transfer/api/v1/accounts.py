"""Read-only account endpoints: daily limit summary, history, recipient lookup"""

from fastapi import APIRouter, Depends, HTTPException, Query

from wallet_transfer.api.dependencies import get_transfer_engine
from wallet_transfer.api.v1.schemas import (
    DailySummaryResponse,
    HistoryResponse,
    RecipientResponse,
    TransactionSchema,
)
from wallet_transfer.domain.engine import TransferEngine

router = APIRouter()


@router.get("/accounts/{account_id}/daily-summary", response_model=DailySummaryResponse)
def get_daily_summary(account_id: int, engine: TransferEngine = Depends(get_transfer_engine)):
    """Amount and count sent today (UTC) and what remains under the daily limits"""
    summary = engine.daily_summary(account_id)
    return DailySummaryResponse.from_summary(account_id, summary)


@router.get("/accounts/{account_id}/transfers", response_model=HistoryResponse)
def get_transfer_history(
    account_id: int,
    limit: int = Query(20, ge=1, le=100, description="Maximum number of records"),
    engine: TransferEngine = Depends(get_transfer_engine),
):
    """
    Retrieve recent transfers sent or received by an account.

    Returns:
        Records ordered newest first
    """
    records = engine.transfer_history(account_id, limit=limit)
    return HistoryResponse(
        account_id=account_id,
        transfers=[TransactionSchema.from_record(r) for r in records],
    )


@router.get("/directory/{mobile_number}", response_model=RecipientResponse)
def lookup_recipient(mobile_number: str, engine: TransferEngine = Depends(get_transfer_engine)):
    """Resolve a mobile number to the holder's name for a confirmation screen"""
    if not engine.is_valid_mobile_number(mobile_number):
        raise HTTPException(status_code=422, detail="Invalid mobile number format")

    name = engine.recipient_name(mobile_number)
    if name is None:
        raise HTTPException(status_code=404, detail="Recipient not found")
    return RecipientResponse(mobile_number=mobile_number, name=name)
