"""Base generator class for identifier and demo data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker

from bank_ledger.generators.pool import FakerPool


class BaseGenerator(ABC):
    """Base class for all generators.

    Provides common initialization: Faker instance creation,
    seed-based reproducibility, and a shared FakerPool.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    pool : FakerPool | None
        Pre-generated value pool shared between generators.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        pool: FakerPool | None = None,
    ) -> None:
        self.fake = Faker(locale)
        self.pool = pool or FakerPool(locale=locale, seed=seed)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)
