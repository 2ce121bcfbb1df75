"""Tests for AccountStore."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bank_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAccountTypeError,
    InvalidAmountError,
    SameAccountError,
)
from bank_ledger.models import Account, AccountType
from bank_ledger.store import AccountStore


class TestAccountStoreCreate:
    """Tests for account creation."""

    def test_create_defaults(self, store: AccountStore) -> None:
        account = store.create(AccountType.CHECKING)

        assert account.account_type == AccountType.CHECKING
        assert account.balance == Decimal("0.00")
        assert account.active is True
        assert account.user_id == "1"
        assert account.created_at == datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
        assert store.get(account.account_id) == account

    def test_account_number_format(self, store: AccountStore) -> None:
        numbers = [store.create(AccountType.SAVINGS).account_number for _ in range(20)]

        assert len(set(numbers)) == 20
        for number in numbers:
            assert len(number) == 10
            assert number.isdigit()
            assert number[0] != "0"

    def test_create_from_string(self, store: AccountStore) -> None:
        assert store.create("savings").account_type == AccountType.SAVINGS
        assert store.create("CREDIT").account_type == AccountType.CREDIT

    def test_create_unknown_type(self, store: AccountStore) -> None:
        with pytest.raises(InvalidAccountTypeError, match="BROKERAGE"):
            store.create("BROKERAGE")

    def test_create_for_other_user(self, store: AccountStore) -> None:
        account = store.create(AccountType.CHECKING, user_id="42")
        assert account.user_id == "42"
        assert store.list_for_user("1") == []


class TestAccountStoreRead:
    """Tests for get and list."""

    def test_get(self, store: AccountStore, checking: Account) -> None:
        assert store.get(checking.account_id) == checking

    def test_get_missing(self, store: AccountStore) -> None:
        with pytest.raises(AccountNotFoundError, match="Account .* not found"):
            store.get("missing")

    def test_get_returns_copy(self, store: AccountStore, checking: Account) -> None:
        copy = store.get(checking.account_id)
        copy.balance = Decimal("1000000")

        assert store.get(checking.account_id).balance == Decimal("0.00")

    def test_list_for_user(self, store: AccountStore) -> None:
        first = store.create(AccountType.CHECKING)
        second = store.create(AccountType.SAVINGS)
        store.create(AccountType.CREDIT, user_id="2")

        accounts = store.list_for_user("1")

        assert [a.account_id for a in accounts] == [first.account_id, second.account_id]

    def test_list_unknown_user(self, store: AccountStore) -> None:
        assert store.list_for_user("nobody") == []

    def test_list_returns_copies(self, store: AccountStore, checking: Account) -> None:
        store.list_for_user("1")[0].balance = Decimal("1000000")

        assert store.get(checking.account_id).balance == Decimal("0.00")

    def test_account_map_is_private(self, store: AccountStore, checking: Account) -> None:
        assert not hasattr(store, "accounts")


class TestAccountStoreActivation:
    """Tests for activation toggles."""

    def test_deactivate_and_activate(self, store: AccountStore, checking: Account) -> None:
        assert store.deactivate(checking.account_id).active is False
        assert store.get(checking.account_id).active is False
        assert store.activate(checking.account_id).active is True

    def test_set_active_missing(self, store: AccountStore) -> None:
        with pytest.raises(AccountNotFoundError):
            store.set_active("missing", False)


class TestAccountStoreBalances:
    """Tests for balance updates."""

    def test_adjust_balance_has_no_floor(self, store: AccountStore, checking: Account) -> None:
        updated = store.adjust_balance(checking.account_id, -50)
        assert updated.balance == Decimal("-50.00")

    def test_adjust_balance_missing(self, store: AccountStore) -> None:
        with pytest.raises(AccountNotFoundError):
            store.adjust_balance("missing", 10)

    def test_adjust_balance_rejects_garbage(self, store: AccountStore, checking: Account) -> None:
        with pytest.raises(InvalidAmountError):
            store.adjust_balance(checking.account_id, "lots")

    def test_adjust_if_sufficient(self, store: AccountStore, checking: Account) -> None:
        store.adjust_balance(checking.account_id, 100)

        with pytest.raises(InsufficientFundsError):
            store.adjust_if_sufficient(checking.account_id, Decimal("-100.01"))
        assert store.get(checking.account_id).balance == Decimal("100.00")

        assert store.adjust_if_sufficient(checking.account_id, -100).balance == Decimal("0.00")
        assert store.adjust_if_sufficient(checking.account_id, 5).balance == Decimal("5.00")

    def test_move_funds(self, store: AccountStore, checking: Account, savings: Account) -> None:
        store.adjust_balance(checking.account_id, 100)

        source, destination = store.move_funds(checking.account_id, savings.account_id, 40)

        assert source.balance == Decimal("60.00")
        assert destination.balance == Decimal("40.00")

    def test_move_funds_same_account(self, store: AccountStore, checking: Account) -> None:
        with pytest.raises(SameAccountError):
            store.move_funds(checking.account_id, checking.account_id, 1)

    def test_move_funds_missing_destination(self, store: AccountStore, checking: Account) -> None:
        store.adjust_balance(checking.account_id, 100)

        with pytest.raises(AccountNotFoundError):
            store.move_funds(checking.account_id, "missing", 10)
        assert store.get(checking.account_id).balance == Decimal("100.00")

    def test_move_funds_insufficient(
        self, store: AccountStore, checking: Account, savings: Account
    ) -> None:
        with pytest.raises(InsufficientFundsError):
            store.move_funds(checking.account_id, savings.account_id, 1)
        assert store.get(savings.account_id).balance == Decimal("0.00")

    def test_move_funds_invalid_amount(
        self, store: AccountStore, checking: Account, savings: Account
    ) -> None:
        with pytest.raises(InvalidAmountError):
            store.move_funds(checking.account_id, savings.account_id, 0)


class TestAccountStoreSummary:
    """Tests for aggregate helpers."""

    def test_total_balance(self, store: AccountStore) -> None:
        a = store.create(AccountType.CHECKING)
        b = store.create(AccountType.SAVINGS)
        other = store.create(AccountType.CHECKING, user_id="2")
        store.adjust_balance(a.account_id, "10.25")
        store.adjust_balance(b.account_id, "4.75")
        store.adjust_balance(other.account_id, 999)

        assert store.total_balance("1") == Decimal("15.00")
        assert store.total_balance("nobody") == Decimal("0.00")

    def test_summary(self, store: AccountStore) -> None:
        store.create(AccountType.CHECKING)
        store.create(AccountType.CHECKING)
        store.create(AccountType.CREDIT)

        assert store.summary() == {"accounts": 3, "checking": 2, "savings": 0, "credit": 1}
