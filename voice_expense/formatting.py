"""
Currency Formatting

Display strings for parsed amounts, used by confirmation prompts and
audit descriptions. Always Western numerals with "," grouping and two
decimals, regardless of locale.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from voice_expense.models.expense import CurrencyCode
from voice_expense.reference.currencies import get_currency

_CENTS = Decimal("0.01")

# Symbol written flush against the number: "$50.00", "£50.00", "₹50.00"
_TIGHT_PREFIX = frozenset({CurrencyCode.USD, CurrencyCode.GBP, CurrencyCode.INR})
# Symbol written after the number: "50.00€"
_TIGHT_SUFFIX = frozenset({CurrencyCode.EUR})


def format_amount(
    amount: Optional[Decimal],
    currency: Union[CurrencyCode, str],
    show_code: bool = False,
) -> str:
    """
    Format an amount with its currency symbol.

    Args:
        amount: Amount to format
        currency: ISO code of the amount
        show_code: Append the ISO code, e.g. "$1,234.50 (USD)"

    Returns:
        Formatted string, or "N/A" when amount is None.

    Examples:
        format_amount(Decimal("1234.5"), "INR")  -> "₹1,234.50"
        format_amount(Decimal("1234.5"), "AED")  -> "د.إ 1,234.50"
        format_amount(Decimal("12"), "EUR")      -> "12.00€"

    Raises:
        UnknownCurrencyError: If the currency is not supported
    """
    if amount is None:
        return "N/A"

    definition = get_currency(currency)
    number = f"{Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP):,.2f}"

    if definition.code in _TIGHT_PREFIX:
        text = f"{definition.symbol}{number}"
    elif definition.code in _TIGHT_SUFFIX:
        text = f"{number}{definition.symbol}"
    else:
        text = f"{definition.symbol} {number}"

    if show_code:
        text = f"{text} ({definition.code.value})"
    return text
