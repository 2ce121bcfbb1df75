"""Demo scenario that populates a fresh store and ledger."""

import logging
import random
from decimal import Decimal
from typing import Any

from bank_ledger.config import LedgerConfig, SeedConfig
from bank_ledger.generators import FakerPool, IdentifierGenerator
from bank_ledger.models import PAYMENT_CATEGORIES, AccountType
from bank_ledger.store import AccountStore, TransactionLedger

logger = logging.getLogger(__name__)


class DemoScenario:
    """Dashboard demo data for a single user.

    Opens one account of each type, funds them with opening deposits,
    records payments to generated merchants and moves money from
    checking to savings. All data goes through ledger operations, so
    balances always agree with the recorded transactions.
    """

    SAVINGS_TRANSFER = Decimal("500.00")

    def __init__(
        self,
        seed_config: SeedConfig | None = None,
        ledger_config: LedgerConfig | None = None,
    ) -> None:
        """Initialize demo scenario.

        Parameters
        ----------
        seed_config : SeedConfig | None
            Seed, Faker locale and volume settings.
        ledger_config : LedgerConfig | None
            Configuration shared by the store and ledger.
        """
        self.seed_config = seed_config or SeedConfig()
        self.ledger_config = ledger_config or LedgerConfig()

        seed = self.seed_config.seed
        locale = self.seed_config.locale
        self.pool = FakerPool(locale=locale, seed=seed)
        self.store = AccountStore(
            config=self.ledger_config,
            ids=IdentifierGenerator(seed=seed, locale=locale, pool=self.pool),
        )
        self.ledger = TransactionLedger(
            accounts=self.store,
            ids=IdentifierGenerator(seed=seed, locale=locale, pool=self.pool),
        )
        if seed is not None:
            random.seed(seed)

    @property
    def user_id(self) -> str:
        return self.ledger_config.default_user_id

    def generate(self) -> TransactionLedger:
        """Populate the store and ledger.

        Returns
        -------
        TransactionLedger
            Ledger holding all generated transactions; its ``accounts``
            attribute is the populated store.
        """
        logger.info("Starting demo scenario for user %s", self.user_id)
        opening = self.seed_config.opening_deposit

        checking = self.store.create(AccountType.CHECKING, self.user_id)
        savings = self.store.create(AccountType.SAVINGS, self.user_id)
        credit = self.store.create(AccountType.CREDIT, self.user_id)

        self.ledger.deposit(
            checking.account_id, opening, "Salary Deposit", merchant_name=self.pool.employer()
        )
        self.ledger.deposit(savings.account_id, opening * 2, "Opening Savings Deposit")
        self.ledger.deposit(credit.account_id, opening / 2, "Credit Line Funding")

        for account in (checking, savings, credit):
            self._generate_payments(account.account_id)

        balance = self.store.get(checking.account_id).balance
        if balance >= self.SAVINGS_TRANSFER:
            self.ledger.transfer(
                checking.account_id,
                savings.account_id,
                self.SAVINGS_TRANSFER,
                "Transfer to Savings",
            )

        logger.info(
            "Generated demo data: %d accounts, %d transactions",
            self.store.summary()["accounts"],
            len(self.ledger.transactions),
        )
        return self.ledger

    def _generate_payments(self, account_id: str) -> None:
        """Record payments that never exceed a quarter of the balance each."""
        for _ in range(self.seed_config.payments_per_account):
            cap = self.store.get(account_id).balance / 4
            if cap < 1:
                break
            amount = Decimal(str(round(random.uniform(1, float(min(cap, 150))), 2)))
            category = random.choice(PAYMENT_CATEGORIES)
            self.ledger.payment(
                account_id,
                amount,
                self.pool.memo(),
                merchant_name=self.pool.merchant(),
                category=category,
            )

    def export(self, sinks: list[Any]) -> None:
        """Export accounts and transactions to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances exposing ``write_batch(entity_type, records)``.
        """
        for sink in sinks:
            sink.write_batch("accounts", self.store.list_for_user(self.user_id))
            sink.write_batch("transactions", self.ledger.transactions)

        logger.info("Exported demo data to %d sinks", len(sinks))

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics for the generated data."""
        return {
            **self.store.summary(),
            **self.ledger.summary(),
            "total_balance": self.store.total_balance(self.user_id),
        }
