"""Unit of work: one session shared by directory, ledger and transaction log"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from wallet_transfer.config import settings
from wallet_transfer.domain.exceptions import PersistenceError
from wallet_transfer.infrastructure.database.repositories import (
    BalanceRepository,
    DirectoryRepository,
    TransactionRepository,
)
from wallet_transfer.infrastructure.database.session import SessionLocal

logger = logging.getLogger(__name__)


class SqlUnitOfWork:
    """
    Wraps a single database transaction.

    Usage:
        with SqlUnitOfWork() as uow:
            uow.ledger.adjust(...)
            uow.transactions.append(...)
            uow.commit()

    Anything not committed when the block exits is rolled back, including
    when the block raises. If that rollback fails, PersistenceError is raised
    unless the block is already raising, in which case its exception wins.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal, lock_timeout_seconds: float | None = None):
        self.session_factory = session_factory
        self.lock_timeout_seconds = (
            settings.lock_timeout_seconds if lock_timeout_seconds is None else lock_timeout_seconds
        )
        self.session: Session | None = None

    def __enter__(self) -> "SqlUnitOfWork":
        self.session = self.session_factory()
        self.directory = DirectoryRepository(self.session)
        self.ledger = BalanceRepository(self.session)
        self.transactions = TransactionRepository(self.session)
        try:
            self._apply_lock_timeout()
        except SQLAlchemyError as e:
            self.session.close()
            raise PersistenceError(f"Could not start unit of work: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        except PersistenceError:
            if exc is None:
                raise
            # Keep the error already propagating; the failed rollback is only logged
            logger.exception("Rollback failed while handling %s", exc_type.__name__)
        finally:
            self.session.close()

    def _apply_lock_timeout(self) -> None:
        # SQLite gets its busy timeout from connect_args instead
        if self.session.get_bind().dialect.name == "postgresql":
            timeout_ms = int(self.lock_timeout_seconds * 1000)
            self.session.execute(text(f"SET LOCAL lock_timeout = '{timeout_ms}ms'"))

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.rollback()
            raise PersistenceError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        """Safe to call after commit; there is then nothing left to undo"""
        try:
            self.session.rollback()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Rollback failed: {e}") from e
