from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

MONEY_QUANTIZER = Decimal("0.01")
MONEY_PLACES = 2
# Bounds of a Numeric(12, 2) column
MIN_POSITIVE_AMOUNT = Decimal("0.01")
MAX_MONEY_AMOUNT = Decimal("9999999999.99")


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def quantize_money(value: Any) -> Decimal:
    return to_decimal(value).quantize(MONEY_QUANTIZER, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    return f"{quantize_money(value):.2f}"
