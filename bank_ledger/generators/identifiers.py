"""Identifier generation for accounts and transactions."""

import string
import threading

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.generators.pool import FakerPool

REFERENCE_PREFIX = "TXN"
REFERENCE_LENGTH = 12
ACCOUNT_NUMBER_LENGTH = 10

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


class IdentifierGenerator(BaseGenerator):
    """Generate ids and display numbers for accounts and transactions.

    Account numbers and reference numbers are unique for the lifetime of
    the generator; a store and its ledger each own one instance.
    """

    MAX_ATTEMPTS = 100

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        pool: FakerPool | None = None,
    ) -> None:
        super().__init__(seed, locale=locale, pool=pool)
        self._account_numbers: set[str] = set()
        self._reference_numbers: set[str] = set()
        self._lock = threading.Lock()

    def account_id(self) -> str:
        return self.pool.uuid()

    def transaction_id(self) -> str:
        return self.pool.uuid()

    def account_number(self) -> str:
        """Return an unused 10-digit account number with a non-zero first digit."""
        return self._unique(
            self._account_numbers,
            lambda: self.fake.numerify("%" + "#" * (ACCOUNT_NUMBER_LENGTH - 1)),
        )

    def reference_number(self) -> str:
        """Return an unused reference such as ``TXN4K7Q0ZP2M9XA``."""
        return self._unique(
            self._reference_numbers,
            lambda: REFERENCE_PREFIX
            + self.fake.lexify("?" * REFERENCE_LENGTH, letters=_REFERENCE_ALPHABET),
        )

    def _unique(self, issued: set[str], make) -> str:
        with self._lock:
            for _ in range(self.MAX_ATTEMPTS):
                candidate = make()
                if candidate not in issued:
                    issued.add(candidate)
                    return candidate
        raise RuntimeError(f"Could not generate a unique identifier after {self.MAX_ATTEMPTS} attempts")
