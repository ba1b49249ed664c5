"""
Ledger Error Module

Error taxonomy for registry, teller and transaction log failures.
Every error is recoverable at the call boundary and leaves registry state unchanged.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Machine-readable error kinds surfaced to front-ends"""
    ACCOUNT_NOT_FOUND = "account_not_found"
    DUPLICATE_ACCOUNT = "duplicate_account"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INVALID_NUMERIC_INPUT = "invalid_numeric_input"
    INVALID_AMOUNT = "invalid_amount"
    TRANSACTION_LOG_FAILED = "transaction_log_failed"


class LedgerError(ValueError):
    """Base class for all ledger errors"""

    kind: ErrorKind
    default_message = "Ledger error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AccountNotFound(LedgerError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND
    default_message = "Account does not exist."

    def __init__(self, account_number: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message)
        self.account_number = account_number


class DuplicateAccount(LedgerError):
    kind = ErrorKind.DUPLICATE_ACCOUNT
    default_message = "Account already exists."

    def __init__(self, account_number: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message)
        self.account_number = account_number


class InsufficientBalance(LedgerError):
    """Withdrawal amount exceeds the current balance"""
    kind = ErrorKind.INSUFFICIENT_BALANCE
    default_message = "Insufficient balance"


class InvalidNumericInput(LedgerError):
    """Caller-supplied text does not parse as the expected number"""
    kind = ErrorKind.INVALID_NUMERIC_INPUT
    default_message = "Invalid input. Please enter valid numbers."

    def __init__(self, value: Optional[str] = None, message: Optional[str] = None):
        super().__init__(message)
        self.value = value


class InvalidAmount(LedgerError):
    """Amount is well-formed but not acceptable for the operation"""
    kind = ErrorKind.INVALID_AMOUNT
    default_message = "Amount must be positive"


class TransactionLogError(LedgerError):
    """Transaction log could not be written"""
    kind = ErrorKind.TRANSACTION_LOG_FAILED
    default_message = "Failed to write transaction log"
