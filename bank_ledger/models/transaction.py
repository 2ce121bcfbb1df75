"""Transaction model and status transitions."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from bank_ledger.exceptions import InvalidTransactionStateError
from bank_ledger.models.enums import TransactionStatus, TransactionType

DEPOSIT_CATEGORY = "Income"
WITHDRAWAL_CATEGORY = "Withdrawal"
TRANSFER_CATEGORY = "Transfer"

PAYMENT_CATEGORIES = (
    "Food & Dining",
    "Shopping",
    "Entertainment",
    "Transportation",
    "Utilities",
    "Housing",
    "Insurance",
    "Medical",
    "Education",
    "Personal Care",
    "Travel",
    "Gifts & Donations",
    "Business",
    "Other",
)

_ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.COMPLETED, TransactionStatus.FAILED}),
    TransactionStatus.COMPLETED: frozenset(),
    TransactionStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class Transaction:
    """Ledger entry against one account.

    ``amount`` is signed: positive for money entering ``account_id``,
    negative for money leaving it.
    """

    transaction_id: str
    reference_number: str
    transaction_type: TransactionType
    amount: Decimal
    description: str
    category: str
    timestamp: datetime
    status: TransactionStatus
    account_id: str
    merchant_name: str | None = None
    destination_account_id: str | None = None  # transfers only
    source_account_id: str | None = None  # credit leg of a paired transfer

    @property
    def is_debit(self) -> bool:
        return self.amount < 0

    def transition(self, status: TransactionStatus) -> "Transaction":
        """Return a copy of this transaction moved to ``status``.

        Raises
        ------
        InvalidTransactionStateError
            If the move is not PENDING -> COMPLETED or PENDING -> FAILED.
        """
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransactionStateError(
                f"Transaction {self.reference_number} cannot move from "
                f"{self.status.value} to {status.value}"
            )
        return replace(self, status=status)
