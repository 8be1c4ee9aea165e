"""
Confidence Scorer

DESIGN DECISION: A documented weighted sum, not a learned model.
Each field contributes only if it was actually extracted:

    amount present                   0.50
    currency named in the transcript 0.25
    category other than Other        0.15
    merchant found                   0.10

The amount dominates because a record without it is nearly useless.
The auto-save threshold is UI policy and lives in settings, not here.
"""

from decimal import Decimal
from typing import Optional

from voice_expense.models.expense import CategoryTag, CurrencyCode

AMOUNT_WEIGHT = 0.50
CURRENCY_WEIGHT = 0.25
CATEGORY_WEIGHT = 0.15
MERCHANT_WEIGHT = 0.10


def score(
    amount: Optional[Decimal],
    currency: Optional[CurrencyCode],
    category: CategoryTag,
    merchant_found: bool,
) -> float:
    """
    Score how complete an extraction is.

    Args:
        amount: Extracted amount, None if not found
        currency: The detected currency, or None when the default was used
        category: Resolved category
        merchant_found: Whether a merchant name was extracted

    Returns:
        Score in [0.0, 1.0], rounded to 2 places.
    """
    total = 0.0
    if amount is not None:
        total += AMOUNT_WEIGHT
    if currency is not None:
        total += CURRENCY_WEIGHT
    if category != CategoryTag.OTHER:
        total += CATEGORY_WEIGHT
    if merchant_found:
        total += MERCHANT_WEIGHT
    return round(min(max(total, 0.0), 1.0), 2)
