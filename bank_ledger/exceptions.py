"""Custom exception hierarchy for bank-ledger."""


class BankLedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class EntityNotFoundError(BankLedgerError):
    """Raised when a referenced entity does not exist."""


class AccountNotFoundError(EntityNotFoundError):
    """Raised when no account exists with the given id."""


class TransactionNotFoundError(EntityNotFoundError):
    """Raised when no transaction matches the given id or reference."""


class InvalidRequestError(BankLedgerError):
    """Raised when operation arguments are rejected before any mutation."""


class InvalidAmountError(InvalidRequestError):
    """Raised when an amount is zero, negative, or not a number."""


class SameAccountError(InvalidRequestError):
    """Raised when a transfer names the same source and destination."""


class InvalidAccountTypeError(InvalidRequestError):
    """Raised when an account type name is not recognized."""


class InvalidPageError(InvalidRequestError):
    """Raised when pagination arguments are out of range."""


class InsufficientFundsError(BankLedgerError):
    """Raised when an account balance cannot cover a debit."""


class InvalidTransactionStateError(BankLedgerError):
    """Raised on a transaction status transition that is not allowed."""


class ConfigurationError(BankLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(BankLedgerError):
    """Raised when a sink operation fails."""
