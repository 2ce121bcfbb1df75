"""Domain models for the banking ledger."""

from bank_ledger.models.account import Account
from bank_ledger.models.enums import AccountType, TransactionStatus, TransactionType
from bank_ledger.models.transaction import (
    DEPOSIT_CATEGORY,
    PAYMENT_CATEGORIES,
    TRANSFER_CATEGORY,
    WITHDRAWAL_CATEGORY,
    Transaction,
)

__all__ = [
    "Account",
    "AccountType",
    "DEPOSIT_CATEGORY",
    "PAYMENT_CATEGORIES",
    "TRANSFER_CATEGORY",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "WITHDRAWAL_CATEGORY",
]
