"""SQLAlchemy ORM models for accounts, balances and transfer records"""

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import declarative_base, relationship

from wallet_transfer.utils.date_utils import utc_now

Base = declarative_base()


class WalletAccount(Base):
    """Registered wallet account; the mobile number is its public identifier"""

    __tablename__ = "wallet_account"

    id = Column(Integer, primary_key=True, autoincrement=True)
    holder_name = Column(Text, nullable=False)
    mobile_number = Column(Text, nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    balance = relationship("AccountBalance", back_populates="account", uselist=False)


class AccountBalance(Base):
    """Current balance in cents, one row per account"""

    __tablename__ = "account_balance"
    __table_args__ = (CheckConstraint("balance_cents >= 0", name="ck_account_balance_non_negative"),)

    account_id = Column(Integer, ForeignKey("wallet_account.id", ondelete="RESTRICT"), primary_key=True)
    balance_cents = Column(BigInteger, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    account = relationship("WalletAccount", back_populates="balance")


class TransferTransaction(Base):
    """Immutable transfer record; the limit tracker scans it by sender and day"""

    __tablename__ = "transfer_transaction"
    __table_args__ = (Index("ix_transfer_transaction_sender_created", "sender_account_id", "created_at"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount_cents = Column(BigInteger, nullable=False)
    fee_cents = Column(BigInteger, nullable=False, default=0)
    sender_account_id = Column(Integer, ForeignKey("wallet_account.id"), nullable=False)
    recipient_account_id = Column(Integer, ForeignKey("wallet_account.id"), nullable=False, index=True)
    sender_number = Column(Text, nullable=False)
    recipient_number = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
