"""Pytest fixtures for testing"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from wallet_transfer.api.dependencies import get_transfer_engine
from wallet_transfer.api.main import create_app
from wallet_transfer.domain.engine import TransferEngine
from wallet_transfer.domain.models import Account
from wallet_transfer.infrastructure.database.models import Base
from wallet_transfer.infrastructure.database.session import build_engine
from wallet_transfer.infrastructure.database.unit_of_work import SqlUnitOfWork

FIXED_NOW = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


class FixedClock:
    """Settable clock so tests control which UTC day a transfer lands on"""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def db_engine(tmp_path) -> Generator[Engine, None, None]:
    """File-backed SQLite so several threads can share one database"""
    engine = build_engine(f"sqlite:///{tmp_path / 'wallet_test.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def uow_factory(session_factory: sessionmaker) -> Callable[[], SqlUnitOfWork]:
    return lambda: SqlUnitOfWork(session_factory)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def engine(uow_factory, clock: FixedClock) -> TransferEngine:
    """Transfer engine with default fee/limit rules and a fixed clock"""
    return TransferEngine(unit_of_work_factory=uow_factory, clock=clock)


@pytest.fixture
def open_account(uow_factory) -> Callable[..., Account]:
    """Create an account with an opening balance, committed immediately"""

    def _open(name: str, mobile_number: str, balance: str = "0.00") -> Account:
        with uow_factory() as uow:
            account = uow.directory.open_account(name, mobile_number, Decimal(balance))
            uow.commit()
        return account

    return _open


@pytest.fixture
def balance_of(uow_factory) -> Callable[[int], Decimal]:
    """Read a committed balance as a Decimal"""

    def _balance(account_id: int) -> Decimal:
        with uow_factory() as uow:
            cents = uow.ledger.get_balance(account_id)
        return (Decimal(cents) / 100).quantize(Decimal("0.01"))

    return _balance


@pytest.fixture
def alice(open_account) -> Account:
    return open_account("Alice Santos", "09171234567", "10000.00")


@pytest.fixture
def bob(open_account) -> Account:
    return open_account("Bob Reyes", "09181234567", "250.00")


@pytest.fixture
def client(engine: TransferEngine) -> TestClient:
    """Create FastAPI test client wired to the test database"""
    app = create_app()
    app.dependency_overrides[get_transfer_engine] = lambda: engine
    return TestClient(app)
