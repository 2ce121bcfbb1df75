"""Pre-generated value pools for demo data.

Faker calls are comparatively slow, so merchant names and payment
descriptions are generated once and then sampled with ``random.choice``.
UUIDs come from a batch pool filled from ``os.urandom``.

Usage::

    pool = FakerPool(seed=42)
    merchant = pool.merchant()
    uid = pool.uuid()
"""

from __future__ import annotations

import os
import random
import threading
import uuid as _uuid

from faker import Faker


class UUIDPool:
    """Batch-generated UUID4 hex strings.

    Parameters
    ----------
    batch_size : int
        Number of UUIDs to generate per batch (default 1024).
    """

    __slots__ = ("_batch_size", "_pool", "_index", "_lock")

    def __init__(self, batch_size: int = 1024) -> None:
        self._batch_size = batch_size
        self._pool: list[str] = []
        self._index = 0
        self._lock = threading.Lock()
        self._refill()

    def _refill(self) -> None:
        raw = os.urandom(16 * self._batch_size)
        self._pool = [
            _uuid.UUID(bytes=raw[i : i + 16], version=4).hex
            for i in range(0, len(raw), 16)
        ]
        self._index = 0

    def next(self) -> str:
        """Return next UUID hex string, refilling pool when exhausted."""
        with self._lock:
            if self._index >= len(self._pool):
                self._refill()
            val = self._pool[self._index]
            self._index += 1
            return val


class FakerPool:
    """Pre-generated pools of Faker values for demo transactions.

    Parameters
    ----------
    locale : str
        Faker locale (default ``en_US``).
    seed : int | None
        Random seed for reproducibility.
    pool_sizes : dict[str, int] | None
        Override default pool sizes per field.
    """

    DEFAULT_SIZES: dict[str, int] = {
        "merchant": 200,
        "employer": 50,
        "memo": 200,
    }

    def __init__(
        self,
        locale: str = "en_US",
        seed: int | None = None,
        pool_sizes: dict[str, int] | None = None,
    ) -> None:
        sizes = {**self.DEFAULT_SIZES, **(pool_sizes or {})}
        fake = Faker(locale)
        if seed is not None:
            fake.seed_instance(seed)
            random.seed(seed)

        self._merchants: list[str] = [fake.company() for _ in range(sizes["merchant"])]
        self._employers: list[str] = [fake.company() for _ in range(sizes["employer"])]
        self._memos: list[str] = [
            fake.sentence(nb_words=3).rstrip(".") for _ in range(sizes["memo"])
        ]

        self._uuid_pool = UUIDPool()

    def uuid(self) -> str:
        """Return a unique UUID4 hex string."""
        return self._uuid_pool.next()

    def merchant(self) -> str:
        """Return a random merchant name."""
        return random.choice(self._merchants)

    def employer(self) -> str:
        """Return a random employer name for salary deposits."""
        return random.choice(self._employers)

    def memo(self) -> str:
        """Return a short free-text description."""
        return random.choice(self._memos)
