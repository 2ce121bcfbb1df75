"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bank_ledger.config import LedgerConfig
from bank_ledger.generators import IdentifierGenerator
from bank_ledger.models import Account, AccountType
from bank_ledger.store import AccountStore, TransactionLedger


class TickingClock:
    """Clock that advances by ``step`` on every call."""

    def __init__(
        self,
        start: datetime = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ledger_config() -> LedgerConfig:
    return LedgerConfig()


@pytest.fixture
def store(seed: int, clock: TickingClock, ledger_config: LedgerConfig) -> AccountStore:
    """Create a fresh account store for each test."""
    return AccountStore(config=ledger_config, ids=IdentifierGenerator(seed=seed), clock=clock)


@pytest.fixture
def ledger(store: AccountStore) -> TransactionLedger:
    """Create a ledger bound to the test store."""
    return TransactionLedger(accounts=store)


@pytest.fixture
def checking(store: AccountStore) -> Account:
    return store.create(AccountType.CHECKING)


@pytest.fixture
def savings(store: AccountStore) -> Account:
    return store.create(AccountType.SAVINGS)


@pytest.fixture
def funded_checking(ledger: TransactionLedger, checking: Account) -> Account:
    """Checking account holding 1000.00."""
    ledger.deposit(checking.account_id, Decimal("1000.00"), "Salary Deposit")
    return ledger.accounts.get(checking.account_id)
