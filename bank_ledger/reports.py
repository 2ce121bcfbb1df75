"""Read-only views over accounts and transactions for dashboard pages."""

import calendar
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable

from bank_ledger.exceptions import InvalidRequestError
from bank_ledger.models import Transaction, TransactionType
from bank_ledger.store import AccountStore, TransactionLedger

DATE_RANGES = ("all", "today", "week", "month", "year")


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_range_start(name: str, now: datetime) -> datetime | None:
    """Lower timestamp bound for a named range ending at ``now``.

    ``"all"`` has no bound and returns None.
    """
    if name == "all":
        return None
    if name == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if name == "week":
        return now - timedelta(days=7)
    if name == "month":
        return _shift_months(now, -1)
    if name == "year":
        return _shift_months(now, -12)
    raise ValueError(f"Unknown date range {name!r}; expected one of {', '.join(DATE_RANGES)}")


def filter_transactions(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType | str | None = None,
    since: datetime | None = None,
    query: str | None = None,
) -> list[Transaction]:
    """Filter by type, minimum timestamp and free-text query.

    ``transaction_type`` may be a TransactionType or its name in any case;
    an unknown name raises InvalidRequestError. The query matches
    case-insensitively against description, merchant name, category and
    reference number. Blank queries match everything.
    """
    if isinstance(transaction_type, str):
        transaction_type = transaction_type.upper()
    if transaction_type is not None:
        try:
            transaction_type = TransactionType(transaction_type)
        except ValueError as exc:
            raise InvalidRequestError(f"Unknown transaction type: {transaction_type!r}") from exc
    needle = query.strip().lower() if query else ""

    result = []
    for tx in transactions:
        if transaction_type is not None and tx.transaction_type != transaction_type:
            continue
        if since is not None and tx.timestamp < since:
            continue
        if needle:
            haystack = (tx.description, tx.merchant_name or "", tx.category, tx.reference_number)
            if not any(needle in field.lower() for field in haystack):
                continue
        result.append(tx)
    return result


def spending_by_category(
    transactions: Iterable[Transaction], top_n: int | None = 6
) -> list[tuple[str, Decimal]]:
    """Total outflow per category, largest first.

    Only negative amounts count as spending; totals are absolute values.
    """
    totals: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.amount < 0:
            totals[tx.category] = totals.get(tx.category, Decimal(0)) + abs(tx.amount)

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked[:top_n] if top_n is not None else ranked


def net_flow(ledger: TransactionLedger, account_id: str) -> Decimal:
    """Signed sum of all ledger movements for an account.

    When transfers are recorded on the source side only, incoming
    transfers are found through ``destination_account_id``. For any
    account, opening balance plus this value equals the current balance.
    """
    total = sum((tx.amount for tx in ledger.list_by_account(account_id)), Decimal(0))
    if not ledger.config.paired_transfers:
        total += sum(
            (
                -tx.amount
                for tx in ledger.transactions
                if tx.transaction_type == TransactionType.TRANSFER
                and tx.destination_account_id == account_id
                and tx.account_id != account_id
            ),
            Decimal(0),
        )
    return total


def account_overview(
    store: AccountStore, ledger: TransactionLedger, user_id: str
) -> dict[str, Any]:
    """Accounts, total balance and merged history for one user."""
    accounts = store.list_for_user(user_id)

    history: list[Transaction] = []
    for account in accounts:
        history.extend(ledger.list_by_account(account.account_id))
    history.sort(key=lambda tx: tx.timestamp, reverse=True)

    return {
        "user_id": user_id,
        "accounts": accounts,
        "total_balance": store.total_balance(user_id),
        "active_accounts": sum(1 for a in accounts if a.active),
        "transactions": history,
        "spending": spending_by_category(history),
    }
