"""Currency formatting for display. No conversion, only presentation."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "C$",
    "AUD": "A$",
}

# Currencies displayed without minor units
_ZERO_DECIMAL_CURRENCIES = {"JPY"}


def format_currency(amount: Union[Decimal, float, int], currency_code: str = "USD") -> str:
    """
    Format an amount for display.

    Args:
        amount: Amount to format
        currency_code: ISO 4217 code; unknown codes are used as the prefix

    Returns:
        Formatted string, e.g. "$1,499.00" or "CHF 12.50"
    """
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))

    code = currency_code.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    digits = 0 if code in _ZERO_DECIMAL_CURRENCIES else 2
    quantized = amount.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    text = f"{abs(quantized):,.{digits}f}"

    if quantized < 0:
        return f"-{symbol}{text}"
    return f"{symbol}{text}"
