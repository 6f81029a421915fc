"""Domain-specific exceptions"""

INPUT = "input"
BUSINESS = "business"
INFRASTRUCTURE = "infrastructure"


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PersistenceError(DomainException):
    """Storage layer failed (I/O, lock timeout, constraint violation)"""

    pass


class TransferError(DomainException):
    """
    A transfer was not carried out.

    Input and business errors are returned to callers inside a TransferResult
    rather than raised out of the engine.
    """

    code = "TRANSFER_ERROR"
    category = BUSINESS
    retryable = False

    @property
    def message(self) -> str:
        return str(self)


class InvalidAmountError(TransferError):
    """Amount is non-numeric, not positive, out of range, or too precise"""

    code = "INVALID_AMOUNT"
    category = INPUT


class InvalidRecipientFormatError(TransferError):
    """Recipient mobile number fails the canonical pattern"""

    code = "INVALID_RECIPIENT_FORMAT"
    category = INPUT


class SelfTransferError(TransferError):
    """Recipient resolves to the sender's own account"""

    code = "SELF_TRANSFER"


class SenderNotFoundError(TransferError):
    """Sender account or its balance row does not exist"""

    code = "SENDER_NOT_FOUND"


class RecipientNotFoundError(TransferError):
    """No account is registered under the recipient number"""

    code = "RECIPIENT_NOT_FOUND"


class InsufficientFundsError(TransferError):
    """Amount plus fee exceeds the sender's balance"""

    code = "INSUFFICIENT_FUNDS"


class DailyLimitExceededError(TransferError):
    """Daily transfer count or amount cap would be breached"""

    code = "DAILY_LIMIT_EXCEEDED"

    def __init__(self, message: str, limit: str):
        super().__init__(message)
        self.limit = limit  # "count" | "amount"


class PersistenceFailureError(TransferError):
    """The atomic commit step failed and was rolled back"""

    code = "PERSISTENCE_FAILURE"
    category = INFRASTRUCTURE
    retryable = True
