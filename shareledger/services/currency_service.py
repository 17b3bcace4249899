"""Currency minor units and display symbols"""

from decimal import Decimal
from typing import Dict, NamedTuple

from shareledger.utils.decimal_utils import round_decimal

DEFAULT_MINOR_UNITS = 2


class CurrencyInfo(NamedTuple):
    """Minor-unit precision and display symbol for a currency"""

    minor_units: int
    symbol: str


CURRENCIES: Dict[str, CurrencyInfo] = {
    # Two decimal places
    "USD": CurrencyInfo(2, "$"),
    "EUR": CurrencyInfo(2, "€"),
    "GBP": CurrencyInfo(2, "£"),
    "INR": CurrencyInfo(2, "₹"),
    "CAD": CurrencyInfo(2, "CA$"),
    "AUD": CurrencyInfo(2, "A$"),
    "NZD": CurrencyInfo(2, "NZ$"),
    "CHF": CurrencyInfo(2, "CHF"),
    "CNY": CurrencyInfo(2, "¥"),
    "HKD": CurrencyInfo(2, "HK$"),
    "SGD": CurrencyInfo(2, "S$"),
    "SEK": CurrencyInfo(2, "kr"),
    "NOK": CurrencyInfo(2, "kr"),
    "DKK": CurrencyInfo(2, "kr"),
    "MXN": CurrencyInfo(2, "MX$"),
    "BRL": CurrencyInfo(2, "R$"),
    "ZAR": CurrencyInfo(2, "R"),
    "PLN": CurrencyInfo(2, "zł"),
    "TRY": CurrencyInfo(2, "₺"),
    "AED": CurrencyInfo(2, "AED"),
    "THB": CurrencyInfo(2, "฿"),
    "PHP": CurrencyInfo(2, "₱"),
    # Zero decimal places
    "JPY": CurrencyInfo(0, "¥"),
    "KRW": CurrencyInfo(0, "₩"),
    "VND": CurrencyInfo(0, "₫"),
    "CLP": CurrencyInfo(0, "CLP$"),
    "ISK": CurrencyInfo(0, "kr"),
    "HUF": CurrencyInfo(0, "Ft"),
    "PYG": CurrencyInfo(0, "₲"),
    "UGX": CurrencyInfo(0, "USh"),
    # Three decimal places
    "KWD": CurrencyInfo(3, "KD"),
    "BHD": CurrencyInfo(3, "BD"),
    "OMR": CurrencyInfo(3, "OMR"),
    "TND": CurrencyInfo(3, "TND"),
    "JOD": CurrencyInfo(3, "JD"),
    "IQD": CurrencyInfo(3, "IQD"),
    "LYD": CurrencyInfo(3, "LD"),
}


def normalize_code(currency_code: str) -> str:
    """Currency code as stored: trimmed and upper-case"""
    return currency_code.strip().upper()


def minor_units(currency_code: str) -> int:
    """
    Number of decimal places for a currency.

    Unknown or malformed codes fall back to 2.

    Args:
        currency_code: ISO 4217 code, e.g. "USD", "JPY"

    Returns:
        Minor-unit precision (0, 2 or 3)
    """
    info = CURRENCIES.get(normalize_code(currency_code))
    return info.minor_units if info else DEFAULT_MINOR_UNITS


def symbol(currency_code: str) -> str:
    """Display symbol for a currency, or the code itself when unknown"""
    info = CURRENCIES.get(normalize_code(currency_code))
    return info.symbol if info else currency_code


def format_amount(amount: Decimal, currency_code: str) -> str:
    """
    Render an amount for display at the currency's precision.

    Negative amounts keep the sign in front of the symbol ("-$3.50").

    Args:
        amount: Decimal amount
        currency_code: ISO 4217 code

    Returns:
        Display string
    """
    rounded = round_decimal(amount, minor_units(currency_code))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol(currency_code)}{abs(rounded):,}"
