"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request

from wallet_transfer.domain.engine import TransferEngine
from wallet_transfer.infrastructure.database.unit_of_work import SqlUnitOfWork


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_transfer_engine() -> TransferEngine:
    """Provide the shared transfer engine bound to the application database"""
    return TransferEngine(unit_of_work_factory=SqlUnitOfWork)
