"""Scenarios that populate a store and ledger with demo data."""

from bank_ledger.scenarios.demo import DemoScenario

__all__ = ["DemoScenario"]
