"""Identifier and demo value generators."""

from bank_ledger.generators.identifiers import IdentifierGenerator
from bank_ledger.generators.pool import FakerPool

__all__ = ["FakerPool", "IdentifierGenerator"]
