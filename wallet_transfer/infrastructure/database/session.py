"""Database engine and session factory"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from wallet_transfer.config import settings


def build_engine(database_url: str | None = None) -> Engine:
    """
    Create an engine for the configured database.

    SQLite waits up to lock_timeout_seconds for the write lock; server
    databases get a bounded connection pool recycled hourly.
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": settings.lock_timeout_seconds},
        )
        _begin_immediate(engine)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=3600,
    )


def _begin_immediate(engine: Engine) -> None:
    """
    Open every SQLite transaction with BEGIN IMMEDIATE.

    SQLite ignores FOR UPDATE and pysqlite defers BEGIN until the first
    write, so balance and daily-usage reads would otherwise run unlocked.
    Taking the write lock up front serializes transfers for their whole
    read-check-write span.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
