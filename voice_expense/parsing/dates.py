"""
Transaction-Date Resolver

Turns relative day phrases into a calendar date anchored on a reference
date supplied by the caller. Everything not recognised resolves to the
reference date itself, which covers "today", "just", "tonight" and
"this morning/afternoon/evening".
"""

import re
from datetime import date, timedelta
from typing import Optional

from voice_expense.parsing import number_phrase
from voice_expense.parsing.text import contains_term

_WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

_LAST_WEEKDAY = re.compile(
    r"\blast\s+(" + "|".join(_WEEKDAYS) + r")\b",
    re.IGNORECASE,
)

# "3 days ago", "two days ago"
_DAYS_AGO = re.compile(r"\b(\d+|[a-z]+(?:[\s-][a-z]+)?)\s+days?\s+ago\b", re.IGNORECASE)

# A slip of the tongue should not move an expense years back
MAX_DAYS_AGO = 366


def _days_ago(transcript: str) -> Optional[int]:
    match = _DAYS_AGO.search(transcript)
    if match is None:
        return None
    quantity = match.group(1)
    if quantity.isdigit():
        days = int(quantity)
    else:
        value = number_phrase.parse(quantity)
        if value is None or value != value.to_integral_value():
            return None
        days = int(value)
    if days > MAX_DAYS_AGO:
        return None
    return days


def resolve_date(transcript: str, reference_date: date) -> date:
    """
    Resolve the day an expense happened.

    Args:
        transcript: Raw speech-to-text output
        reference_date: The day the transcript was spoken

    Returns:
        reference_date shifted by any recognised relative phrase.
    """
    if not transcript:
        return reference_date

    if contains_term(transcript, "day before yesterday"):
        return reference_date - timedelta(days=2)
    if contains_term(transcript, "yesterday"):
        return reference_date - timedelta(days=1)

    days = _days_ago(transcript)
    if days is not None:
        return reference_date - timedelta(days=days)

    match = _LAST_WEEKDAY.search(transcript)
    if match:
        target = _WEEKDAYS.index(match.group(1).lower())
        # Strictly before the reference date: "last monday" said on a Monday is a week ago
        delta = (reference_date.weekday() - target) % 7 or 7
        return reference_date - timedelta(days=delta)

    return reference_date
