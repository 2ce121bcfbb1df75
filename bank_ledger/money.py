"""Currency amount parsing."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from bank_ledger.exceptions import InvalidAmountError

AmountLike = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_amount(value: AmountLike, quantum: Decimal = CENT) -> Decimal:
    """Convert ``value`` to a Decimal rounded to ``quantum``.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.10")``
    rather than its binary expansion.

    Raises
    ------
    InvalidAmountError
        If ``value`` is not a finite number or is too large to
        represent at ``quantum``.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value!r}")
        # Raises InvalidOperation when the result exceeds context precision
        return amount.quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from exc


def to_positive_amount(value: AmountLike, quantum: Decimal = CENT, label: str = "Amount") -> Decimal:
    """Like :func:`to_amount` but also rejects zero and negative values."""
    amount = to_amount(value, quantum)
    if amount <= 0:
        raise InvalidAmountError(f"{label} must be positive, got {amount}")
    return amount
