from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CURRENCY_CODE = "USD"


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str


SUPPORTED_CURRENCIES: tuple[Currency, ...] = (
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("JPY", "¥", "Japanese Yen"),
    Currency("CAD", "C$", "Canadian Dollar"),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("CHF", "Fr", "Swiss Franc"),
    Currency("INR", "₹", "Indian Rupee"),
    Currency("BRL", "R$", "Brazilian Real"),
    Currency("XOF", "CFA", "West African CFA Franc"),
)

_CURRENCIES_BY_CODE = {currency.code: currency for currency in SUPPORTED_CURRENCIES}
SUPPORTED_CURRENCY_CODES = tuple(_CURRENCIES_BY_CODE)


def normalize_currency_code(code: str) -> str:
    return code.strip().upper()


def get_currency(code: str) -> Currency:
    """Look up a catalog entry; raises ``KeyError`` for unknown codes."""
    return _CURRENCIES_BY_CODE[normalize_currency_code(code)]


def symbol_for(code: str) -> str:
    return get_currency(code).symbol
