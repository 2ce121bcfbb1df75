"""In-memory account store and transaction ledger."""

from bank_ledger.store.accounts import AccountStore
from bank_ledger.store.ledger import TransactionLedger

__all__ = ["AccountStore", "TransactionLedger"]
