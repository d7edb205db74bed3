"""
Ledger Error Kinds

Every failure raised by the ledger carries an ErrorKind so front ends can
branch on the kind without matching exception classes.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of ledger failures"""
    INVALID_ARGUMENT = "invalid_argument"      # Negative or non-positive amount, bad field
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Withdrawal/transfer exceeds balance
    ACCOUNT_NOT_FOUND = "account_not_found"    # Identifier absent from loaded set
    IO_FAILURE = "io_failure"                  # Backing file unreadable/unwritable


class LedgerError(Exception):
    """Base class for all ledger errors"""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(LedgerError, ValueError):
    """Raised when an amount or record field is out of range"""
    kind = ErrorKind.INVALID_ARGUMENT


class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal or transfer would drop a balance below zero"""
    kind = ErrorKind.INSUFFICIENT_FUNDS


class AccountNotFoundError(LedgerError, LookupError):
    """Raised when an account id is missing from the store"""
    kind = ErrorKind.ACCOUNT_NOT_FOUND

    def __init__(self, message: str, account_id: int = None):
        super().__init__(message)
        self.account_id = account_id


class LedgerIOError(LedgerError, OSError):
    """Raised when a backing file cannot be read or written"""
    kind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path
