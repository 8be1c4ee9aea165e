"""
Amount Extractor

Finds the monetary quantity in a transcript.

CRITICAL: Numerals always beat number words. In "I spent 2 dollars, I have
two kids" the amount is 2; the spelled-out phrase is only consulted when
the transcript contains no numeral at all.

Tiers (first success wins, results are never merged):
1. Numeral with thousands separators   "2,000.50", "2,00,000"
2. Plain decimal numeral               "2000.50"
3. Plain integer numeral               "2000"
4. Spelled-out phrase                  "two thousand"

A numeral directly followed by a scale word is scaled: "5 lakh" is 500000
and "2.5 million" is 2500000.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog

from voice_expense.parsing import number_phrase
from voice_expense.reference.numbers import SCALE_BY_TOKEN

logger = structlog.get_logger(__name__)

# Western "1,234,567" and Indian "12,34,567" grouping
_SEPARATED = re.compile(
    r"(?<![\d.,])\d{1,3}(?:(?:,\d{3})+|(?:,\d{2})+,\d{3})(?:\.\d+)?(?!\d|,\d)"
)
_DECIMAL = re.compile(r"(?<![\d.,])\d+\.\d+(?!\d|,\d)")
_INTEGER = re.compile(r"(?<![\d.,])\d+(?!\d|,\d)")

_NUMERAL_TIERS: tuple[tuple[str, re.Pattern], ...] = (
    ("separated", _SEPARATED),
    ("decimal", _DECIMAL),
    ("integer", _INTEGER),
)

_SCALE_SUFFIX = re.compile(r"\s*([A-Za-z]+)")

# "3 days ago" is a date, not an amount
_ELAPSED_TIME = re.compile(r"\s*(?:days?|weeks?|months?)\s+ago\b", re.IGNORECASE)


def _to_decimal(numeral: str) -> Optional[Decimal]:
    try:
        return Decimal(numeral.replace(",", ""))
    except InvalidOperation:
        return None


def _apply_scale_suffix(value: Decimal, text: str, end: int) -> Decimal:
    suffix = _SCALE_SUFFIX.match(text, end)
    if suffix:
        unit = SCALE_BY_TOKEN.get(suffix.group(1).lower())
        if unit is not None:
            return value * unit.multiplier
    return value


def extract(transcript: str) -> Optional[Decimal]:
    """
    Extract the amount from a transcript.

    Returns None when no tier matches; the caller treats that as
    "amount unknown", not as an error.
    """
    if not transcript:
        return None

    for tier, pattern in _NUMERAL_TIERS:
        for match in pattern.finditer(transcript):
            if _ELAPSED_TIME.match(transcript, match.end()):
                continue
            value = _to_decimal(match.group(0))
            if value is None:
                continue
            value = _apply_scale_suffix(value, transcript, match.end())
            logger.debug("amount_extracted", tier=tier, numeral=match.group(0), value=str(value))
            return value

    value = number_phrase.parse(transcript, skip_elapsed_time=True)
    if value is not None:
        logger.debug("amount_extracted", tier="phrase", value=str(value))
    return value
