"""POST /v1/transfers - peer-to-peer transfer endpoint, plus fee preview and lookup"""

import time

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from wallet_transfer.api.dependencies import get_request_id, get_transfer_engine
from wallet_transfer.api.v1.schemas import (
    FeePreviewResponse,
    TransactionSchema,
    TransferRequestBody,
    TransferResponse,
)
from wallet_transfer.domain.engine import TransferEngine
from wallet_transfer.domain.exceptions import INFRASTRUCTURE, InvalidAmountError
from wallet_transfer.domain.models import TransferRequest
from wallet_transfer.infrastructure.observability.logging import log_transfer
from wallet_transfer.infrastructure.observability.metrics import record_transfer

router = APIRouter()


@router.post("/transfers", response_model=TransferResponse, status_code=201)
def create_transfer(
    body: TransferRequestBody,
    request: Request,
    response: Response,
    engine: TransferEngine = Depends(get_transfer_engine),
):
    """
    Send money from an account to a mobile number.

    Status codes:
    - 201: transfer committed
    - 422: rejected (invalid input, insufficient funds, limit reached, ...)
    - 503: storage failure, rolled back; safe to retry
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    result = engine.execute(
        TransferRequest(
            sender_account_id=body.sender_account_id,
            recipient_number=body.recipient_number,
            amount=body.amount,
            description=body.description,
        )
    )

    duration = time.perf_counter() - start_time
    record_transfer(result, duration)

    if not result.success:
        response.status_code = 503 if result.error.category == INFRASTRUCTURE else 422

    log_transfer(
        request_id,
        body.sender_account_id,
        response.status_code or 201,
        result.record.transaction_id if result.record else None,
    )

    return TransferResponse(
        success=result.success,
        message=result.message,
        error_code=result.error_code,
        transaction=TransactionSchema.from_record(result.record) if result.record else None,
    )


@router.get("/transfers/fee-preview", response_model=FeePreviewResponse)
def preview_fee(
    amount: str = Query(..., description="Amount to price, e.g. 100.00"),
    engine: TransferEngine = Depends(get_transfer_engine),
):
    """Fee and total debit for an amount; nothing is stored"""
    try:
        parsed = engine.rules.parse_amount(amount)
        fee = engine.preview_fee(parsed)
    except InvalidAmountError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return FeePreviewResponse(amount=parsed, fee=fee, total_debit=parsed + fee)


@router.get("/transfers/{transaction_id}", response_model=TransactionSchema)
def get_transfer(transaction_id: int, engine: TransferEngine = Depends(get_transfer_engine)):
    """Retrieve a single transfer record"""
    record = engine.find_transfer(transaction_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Transfer not found")
    return TransactionSchema.from_record(record)
