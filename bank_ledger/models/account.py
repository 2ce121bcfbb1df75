"""Account model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_ledger.models.enums import AccountType


@dataclass
class Account:
    """Bank account owned by a single user.

    Account types:
    - CHECKING: everyday account, the usual source of payments
    - SAVINGS: interest-free savings in this demo
    - CREDIT: credit account; balance is tracked like any other
    """

    account_id: str
    account_number: str  # 10 digits, display only
    account_type: AccountType
    balance: Decimal
    active: bool
    created_at: datetime
    user_id: str
