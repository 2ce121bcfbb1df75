"""In-memory account store with atomic balance updates."""

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from bank_ledger.config import LedgerConfig
from bank_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAccountTypeError,
    SameAccountError,
)
from bank_ledger.generators.identifiers import IdentifierGenerator
from bank_ledger.models import Account, AccountType
from bank_ledger.money import AmountLike, to_amount, to_positive_amount

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AccountStore:
    """Accounts keyed by id, owned by users.

    Every balance change happens under ``_lock``. Callers that need a
    funds check use :meth:`adjust_if_sufficient` or :meth:`move_funds`,
    which check and apply in one critical section.
    """

    config: LedgerConfig = field(default_factory=LedgerConfig)
    ids: IdentifierGenerator = field(default_factory=IdentifierGenerator)
    clock: Callable[[], datetime] = utc_now

    _accounts: dict[str, Account] = field(default_factory=dict, repr=False)
    _user_accounts: dict[str, list[str]] = field(default_factory=dict)
    _lock: Any = field(default_factory=threading.RLock, repr=False)

    def create(self, account_type: AccountType | str, user_id: str | None = None) -> Account:
        """Open a new active account with zero balance.

        Parameters
        ----------
        account_type : AccountType | str
            CHECKING, SAVINGS or CREDIT.
        user_id : str | None
            Owner; defaults to ``config.default_user_id``.

        Returns
        -------
        Account
            Copy of the stored account.
        """
        if isinstance(account_type, str):
            account_type = account_type.upper()
        try:
            account_type = AccountType(account_type)
        except ValueError as exc:
            raise InvalidAccountTypeError(f"Unknown account type: {account_type!r}") from exc
        owner = user_id if user_id is not None else self.config.default_user_id

        with self._lock:
            account = Account(
                account_id=self.ids.account_id(),
                account_number=self.ids.account_number(),
                account_type=account_type,
                balance=Decimal(0).quantize(self.config.quantum),
                active=True,
                created_at=self.clock(),
                user_id=owner,
            )
            self._accounts[account.account_id] = account
            self._user_accounts.setdefault(owner, []).append(account.account_id)

        logger.info(
            "Opened %s account %s for user %s",
            account_type.value,
            account.account_number,
            owner,
        )
        return replace(account)

    def get(self, account_id: str) -> Account:
        """Return a copy of the account or raise AccountNotFoundError."""
        with self._lock:
            return replace(self._require(account_id))

    def list_for_user(self, user_id: str) -> list[Account]:
        """Get all accounts for a user, oldest first."""
        with self._lock:
            account_ids = self._user_accounts.get(user_id, [])
            return [replace(self._accounts[aid]) for aid in account_ids]

    def set_active(self, account_id: str, active: bool) -> Account:
        """Set the active flag and return the updated account."""
        with self._lock:
            account = self._require(account_id)
            account.active = active
            logger.info("Account %s %s", account.account_number, "activated" if active else "deactivated")
            return replace(account)

    def activate(self, account_id: str) -> Account:
        return self.set_active(account_id, True)

    def deactivate(self, account_id: str) -> Account:
        return self.set_active(account_id, False)

    def adjust_balance(self, account_id: str, delta: AmountLike) -> Account:
        """Add ``delta`` to the balance without any floor check."""
        delta = to_amount(delta, self.config.quantum)
        with self._lock:
            account = self._require(account_id)
            account.balance += delta
            logger.debug("Adjusted %s by %s -> %s", account_id, delta, account.balance)
            return replace(account)

    def adjust_if_sufficient(self, account_id: str, delta: AmountLike) -> Account:
        """Apply ``delta`` only if the balance stays at or above zero.

        Credits always apply. A debit larger than the balance raises
        InsufficientFundsError and leaves the account untouched.
        """
        delta = to_amount(delta, self.config.quantum)
        with self._lock:
            account = self._require(account_id)
            if delta < 0 and account.balance + delta < 0:
                raise InsufficientFundsError(
                    f"Insufficient funds in account {account_id}: "
                    f"balance {account.balance}, requested {-delta}"
                )
            account.balance += delta
            logger.debug("Adjusted %s by %s -> %s", account_id, delta, account.balance)
            return replace(account)

    def move_funds(
        self, source_id: str, destination_id: str, amount: AmountLike
    ) -> tuple[Account, Account]:
        """Debit ``source_id`` and credit ``destination_id`` atomically.

        Returns
        -------
        tuple[Account, Account]
            Updated copies of the source and destination accounts.
        """
        amount = to_positive_amount(amount, self.config.quantum, label="Transfer amount")
        if source_id == destination_id:
            raise SameAccountError("Source and destination accounts cannot be the same")

        with self._lock:
            source = self._require(source_id)
            destination = self._require(destination_id)
            if source.balance < amount:
                raise InsufficientFundsError(
                    f"Insufficient funds in account {source_id}: "
                    f"balance {source.balance}, requested {amount}"
                )
            source.balance -= amount
            destination.balance += amount
            logger.debug("Moved %s from %s to %s", amount, source_id, destination_id)
            return replace(source), replace(destination)

    def total_balance(self, user_id: str) -> Decimal:
        """Sum of balances across a user's accounts."""
        return sum(
            (a.balance for a in self.list_for_user(user_id)),
            Decimal(0).quantize(self.config.quantum),
        )

    def summary(self) -> dict[str, int]:
        """Return account counts, overall and per type."""
        with self._lock:
            counts = {"accounts": len(self._accounts)}
            for account_type in AccountType:
                counts[account_type.value.lower()] = sum(
                    1 for a in self._accounts.values() if a.account_type == account_type
                )
            return counts

    def _require(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account
