"""Decimal money helpers.

Amounts stay unrounded through every pricing stage; rounding to cents happens only
when a value is displayed.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
DEFAULT_ROUNDING = decimal.ROUND_DOWN

ROUNDING_MODES = {
    name: getattr(decimal, name)
    for name in (
        "ROUND_DOWN",
        "ROUND_UP",
        "ROUND_HALF_UP",
        "ROUND_HALF_DOWN",
        "ROUND_HALF_EVEN",
        "ROUND_CEILING",
        "ROUND_FLOOR",
        "ROUND_05UP",
    )
}


def to_money(value: Any) -> Decimal:
    """Convert ``value`` to a finite ``Decimal``.

    Floats go through ``str`` so ``32.95`` becomes ``Decimal("32.95")`` rather than its
    binary expansion.

    Raises:
        ValueError: if the value is not numeric or not finite.
    """

    if isinstance(value, bool):
        raise ValueError(f"Expected a monetary amount, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation as exc:
            raise ValueError(f"Expected a monetary amount, got {value!r}") from exc
    else:
        raise ValueError(f"Expected a monetary amount, got {type(value).__name__}")
    if not amount.is_finite():
        raise ValueError(f"Monetary amount must be finite, got {value!r}")
    return amount


def quantize_money(amount: Decimal, rounding: str = DEFAULT_ROUNDING) -> Decimal:
    return amount.quantize(CENT, rounding=rounding)


def format_money(amount: Decimal, symbol: str = "$", rounding: str = DEFAULT_ROUNDING) -> str:
    return f"{symbol}{quantize_money(amount, rounding)}"
