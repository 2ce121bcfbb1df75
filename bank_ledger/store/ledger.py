"""Transaction ledger: validates requests, moves balances, records entries."""

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from bank_ledger.config import LedgerConfig
from bank_ledger.exceptions import (
    BankLedgerError,
    ConfigurationError,
    InvalidPageError,
    InvalidRequestError,
    SameAccountError,
    TransactionNotFoundError,
)
from bank_ledger.generators.identifiers import IdentifierGenerator
from bank_ledger.logging import transaction_context
from bank_ledger.models import (
    DEPOSIT_CATEGORY,
    TRANSFER_CATEGORY,
    WITHDRAWAL_CATEGORY,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from bank_ledger.money import AmountLike, to_positive_amount
from bank_ledger.store.accounts import AccountStore

logger = logging.getLogger(__name__)


@dataclass
class TransactionLedger:
    """Ordered record of deposits, withdrawals, transfers and payments.

    Each operation drafts a PENDING transaction, applies the balance change
    through the account store, and only then appends the COMPLETED record.
    When the balance change is refused the draft is marked FAILED, logged,
    and the error is re-raised; nothing is appended.

    Parameters
    ----------
    accounts : AccountStore
        Store whose balances this ledger moves.
    config : LedgerConfig | None
        Defaults to the store's config. Its ``currency_places`` must match
        the store's.
    ids : IdentifierGenerator | None
        Defaults to a generator sharing the store's value pool.
    clock : Callable[[], datetime] | None
        Defaults to the store's clock.
    """

    accounts: AccountStore
    config: LedgerConfig | None = None
    ids: IdentifierGenerator | None = None
    clock: Callable[[], datetime] | None = None

    _transactions: list[Transaction] = field(default_factory=list)
    _account_transactions: dict[str, list[int]] = field(default_factory=dict)
    _by_id: dict[str, int] = field(default_factory=dict)
    _by_reference: dict[str, int] = field(default_factory=dict)
    _lock: Any = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = self.accounts.config
        elif self.config.currency_places != self.accounts.config.currency_places:
            raise ConfigurationError(
                f"Ledger currency_places ({self.config.currency_places}) must match "
                f"the account store ({self.accounts.config.currency_places})"
            )
        if self.ids is None:
            self.ids = IdentifierGenerator(pool=self.accounts.ids.pool)
        if self.clock is None:
            self.clock = self.accounts.clock

    # Queries
    @property
    def transactions(self) -> list[Transaction]:
        """All recorded transactions in insertion order."""
        with self._lock:
            return list(self._transactions)

    def list_by_account(
        self, account_id: str, page: int | None = None, size: int | None = None
    ) -> list[Transaction]:
        """Transactions recorded against ``account_id``, newest first.

        Parameters
        ----------
        account_id : str
            Account to list. Unknown accounts give an empty list.
        page : int | None
            Zero-based page number; applied only together with ``size``.
        size : int | None
            Page size; applied only together with ``page``.

        Returns
        -------
        list[Transaction]
            Matching transactions sorted by timestamp descending. Entries
            with equal timestamps keep reverse insertion order.
        """
        if page is not None and size is not None:
            if page < 0:
                raise InvalidPageError(f"page must be >= 0, got {page}")
            if size <= 0:
                raise InvalidPageError(f"size must be > 0, got {size}")

        with self._lock:
            indices = self._account_transactions.get(account_id, [])
            ordered = sorted(
                indices,
                key=lambda i: (self._transactions[i].timestamp, i),
                reverse=True,
            )
            result = [self._transactions[i] for i in ordered]

        if page is not None and size is not None:
            start = page * size
            result = result[start : start + size]
        return result

    def get(self, transaction_id: str) -> Transaction:
        with self._lock:
            idx = self._by_id.get(transaction_id)
            if idx is None:
                raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
            return self._transactions[idx]

    def get_by_reference(self, reference_number: str) -> Transaction:
        with self._lock:
            idx = self._by_reference.get(reference_number)
            if idx is None:
                raise TransactionNotFoundError(f"No transaction with reference {reference_number}")
            return self._transactions[idx]

    def summary(self) -> dict[str, int]:
        """Return transaction counts, overall and per type."""
        with self._lock:
            counts = {"transactions": len(self._transactions)}
            for tx_type in TransactionType:
                counts[tx_type.value.lower()] = sum(
                    1 for t in self._transactions if t.transaction_type == tx_type
                )
            return counts

    # Operations
    def deposit(
        self,
        account_id: str,
        amount: AmountLike,
        description: str,
        merchant_name: str | None = None,
    ) -> Transaction:
        """Credit ``amount`` to an account.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        AccountNotFoundError
            If the account does not exist.
        """
        self._simulate_latency()
        amount = to_positive_amount(amount, self.config.quantum, label="Deposit amount")
        draft = self._draft(
            TransactionType.DEPOSIT,
            account_id,
            amount,
            description,
            DEPOSIT_CATEGORY,
            merchant_name=merchant_name,
        )
        return self._post(draft, lambda: self.accounts.adjust_balance(account_id, amount))

    def withdraw(self, account_id: str, amount: AmountLike, description: str) -> Transaction:
        """Debit ``amount`` from an account.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        AccountNotFoundError
            If the account does not exist.
        InsufficientFundsError
            If the balance is lower than ``amount``.
        """
        self._simulate_latency()
        amount = to_positive_amount(amount, self.config.quantum, label="Withdrawal amount")
        draft = self._draft(
            TransactionType.WITHDRAWAL,
            account_id,
            -amount,
            description,
            WITHDRAWAL_CATEGORY,
        )
        return self._post(draft, lambda: self.accounts.adjust_if_sufficient(account_id, -amount))

    def transfer(
        self,
        source_id: str,
        destination_id: str,
        amount: AmountLike,
        description: str,
    ) -> Transaction:
        """Move ``amount`` from ``source_id`` to ``destination_id``.

        The returned record lives on the source account, carries the
        destination id and a negative amount. With
        ``config.paired_transfers`` a credit leg is also recorded on the
        destination account.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        SameAccountError
            If source and destination are the same account.
        AccountNotFoundError
            If either account does not exist.
        InsufficientFundsError
            If the source balance is lower than ``amount``.
        """
        self._simulate_latency()
        amount = to_positive_amount(amount, self.config.quantum, label="Transfer amount")
        if source_id == destination_id:
            logger.warning("Rejected transfer: source and destination are both %s", source_id)
            raise SameAccountError("Source and destination accounts cannot be the same")

        debit = self._draft(
            TransactionType.TRANSFER,
            source_id,
            -amount,
            description,
            TRANSFER_CATEGORY,
            destination_account_id=destination_id,
        )
        legs = [debit]
        if self.config.paired_transfers:
            legs.append(
                self._draft(
                    TransactionType.TRANSFER,
                    destination_id,
                    amount,
                    description,
                    TRANSFER_CATEGORY,
                    destination_account_id=destination_id,
                    source_account_id=source_id,
                    timestamp=debit.timestamp,
                )
            )
        posted = self._post_all(
            legs, lambda: self.accounts.move_funds(source_id, destination_id, amount)
        )
        return posted[0]

    def payment(
        self,
        account_id: str,
        amount: AmountLike,
        description: str,
        merchant_name: str,
        category: str,
    ) -> Transaction:
        """Pay ``merchant_name`` from an account.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        InvalidRequestError
            If ``category`` is not a non-blank string.
        AccountNotFoundError
            If the account does not exist.
        InsufficientFundsError
            If the balance is lower than ``amount``.
        """
        self._simulate_latency()
        amount = to_positive_amount(amount, self.config.quantum, label="Payment amount")
        if not isinstance(category, str) or not category.strip():
            raise InvalidRequestError(f"Payment category is required, got {category!r}")
        draft = self._draft(
            TransactionType.PAYMENT,
            account_id,
            -amount,
            description,
            category,
            merchant_name=merchant_name,
        )
        return self._post(draft, lambda: self.accounts.adjust_if_sufficient(account_id, -amount))

    # Internals
    def _draft(
        self,
        tx_type: TransactionType,
        account_id: str,
        amount: Decimal,
        description: str,
        category: str,
        merchant_name: str | None = None,
        destination_account_id: str | None = None,
        source_account_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> Transaction:
        return Transaction(
            transaction_id=self.ids.transaction_id(),
            reference_number=self.ids.reference_number(),
            transaction_type=tx_type,
            amount=amount,
            description=description,
            category=category,
            timestamp=timestamp or self.clock(),
            status=TransactionStatus.PENDING,
            account_id=account_id,
            merchant_name=merchant_name,
            destination_account_id=destination_account_id,
            source_account_id=source_account_id,
        )

    def _post(self, draft: Transaction, apply: Callable[[], object]) -> Transaction:
        return self._post_all([draft], apply)[0]

    def _post_all(self, drafts: list[Transaction], apply: Callable[[], object]) -> list[Transaction]:
        try:
            apply()
        except BankLedgerError as exc:
            for draft in drafts:
                failed = draft.transition(TransactionStatus.FAILED)
                logger.warning(
                    "Rejected %s %s on account %s: %s",
                    failed.transaction_type.value,
                    failed.reference_number,
                    failed.account_id,
                    exc,
                    extra=transaction_context(failed),
                )
            raise

        completed = [draft.transition(TransactionStatus.COMPLETED) for draft in drafts]
        with self._lock:
            for tx in completed:
                idx = len(self._transactions)
                self._transactions.append(tx)
                self._account_transactions.setdefault(tx.account_id, []).append(idx)
                self._by_id[tx.transaction_id] = idx
                self._by_reference[tx.reference_number] = idx

        for tx in completed:
            logger.info(
                "Posted %s %s on account %s: %s",
                tx.transaction_type.value,
                tx.reference_number,
                tx.account_id,
                tx.amount,
                extra=transaction_context(tx),
            )
        return completed

    def _simulate_latency(self) -> None:
        if self.config.simulated_latency > 0:
            time.sleep(self.config.simulated_latency)
