"""
Number-Phrase Parser

Resolves spelled-out quantities ("two thousand five hundred",
"five lakh fifty thousand", "two point five million") into Decimals.

DESIGN DECISION: Accumulator grammar, scanned left to right.
- current group: value built from ones/tens/hundreds since the last scale word
- total: value accumulated across scale boundaries

The input may be a whole transcript. Words before the first number word are
skipped, and the first word that cannot continue the number ends it, so
"I spent two thousand dirhams on two kids" reads as 2000.

Consecutive scale words with no numeral between them multiply the total:
"thousand million" is 10^9 and "two lakh crore" is 2 * 10^12. "hundred"
scales the group instead, so "hundred thousand" is 100000 as usual.
"""

import re
from decimal import Decimal
from typing import Optional

from voice_expense.reference.numbers import (
    ARTICLE_WORDS,
    CONNECTOR_WORDS,
    DECIMAL_POINT_WORDS,
    MINOR_UNIT_WORDS,
    ONES,
    SCALE_BY_TOKEN,
    TENS,
)

_TOKEN = re.compile(r"[^\W_]+|[^\w\s]")

# "two days ago" is a duration, not a quantity
_ELAPSED_UNITS = frozenset({"day", "days", "week", "weeks", "month", "months"})

_ZERO = Decimal(0)
_ONE = Decimal(1)
_HUNDREDTH = Decimal("0.01")


def _tokenize(text: str) -> list[str]:
    """Lowercase, split hyphenated compounds, keep punctuation as separate tokens."""
    return _TOKEN.findall(text.lower().replace("-", " "))


def _is_basic(token: str) -> bool:
    return token in ONES or token in TENS


def _basic_value(token: str) -> int:
    return ONES[token] if token in ONES else TENS[token]


def _peek(tokens: list[str], index: int) -> Optional[str]:
    return tokens[index] if index < len(tokens) else None


def _starts_fraction(tokens: list[str], index: int) -> bool:
    nxt = _peek(tokens, index + 1)
    return tokens[index] in DECIMAL_POINT_WORDS and nxt is not None and _is_basic(nxt)


def _starts_number(tokens: list[str], index: int) -> bool:
    token = tokens[index]
    if _is_basic(token) or token in SCALE_BY_TOKEN:
        return True
    if token in ARTICLE_WORDS:
        return _peek(tokens, index + 1) in SCALE_BY_TOKEN
    return _starts_fraction(tokens, index)


def _read_fraction(tokens: list[str], index: int) -> tuple[str, int]:
    """
    Read the digit words after "point".

    "point five" -> "5", "point two five" -> "25". A teen or tens word is
    only taken as the first fractional token: "point twenty five" -> "25".
    """
    digits = ""
    while index < len(tokens):
        token = tokens[index]
        if token in ONES and ONES[token] < 10:
            digits += str(ONES[token])
            index += 1
        elif not digits and _is_basic(token):
            value = _basic_value(token)
            index += 1
            nxt = _peek(tokens, index)
            if token in TENS and nxt in ONES and ONES[nxt] < 10:
                value += ONES[nxt]
                index += 1
            digits = str(value)
            break
        else:
            break
    return digits, index


def _parse_run(tokens: list[str], start: int) -> tuple[Decimal, int, bool]:
    """
    Parse one contiguous number phrase beginning at `start`.

    Returns (value, index after the phrase, ended_in_minor_unit).
    """
    total = _ZERO
    group = _ZERO
    last_was_scale = False
    index = start

    while index < len(tokens):
        token = tokens[index]

        if _is_basic(token):
            group += _basic_value(token)
            last_was_scale = False

        elif token in ARTICLE_WORDS and _peek(tokens, index + 1) in SCALE_BY_TOKEN:
            # "a hundred", "a thousand"
            group = max(group, _ONE)
            last_was_scale = False

        elif token in CONNECTOR_WORDS:
            nxt_index = index + 1
            if nxt_index >= len(tokens) or not _starts_number(tokens, nxt_index):
                break

        elif token in SCALE_BY_TOKEN:
            unit = SCALE_BY_TOKEN[token]
            if not unit.closes_group:
                group = max(group, _ONE) * unit.multiplier
                last_was_scale = False
            elif last_was_scale and group == _ZERO:
                total = max(total, _ONE) * unit.multiplier
                last_was_scale = True
            else:
                total += max(group, _ONE) * unit.multiplier
                group = _ZERO
                last_was_scale = True

        elif _starts_fraction(tokens, index):
            digits, index = _read_fraction(tokens, index + 1)
            value = group + Decimal("0." + digits)
            scale = SCALE_BY_TOKEN.get(_peek(tokens, index))
            if scale is not None:
                total += value * scale.multiplier
                group = _ZERO
                index += 1
            else:
                group = value
            break

        elif token in MINOR_UNIT_WORDS:
            return (total + group) * _HUNDREDTH, index + 1, True

        else:
            break

        index += 1

    # "fifty cents", "two point five cents"
    if _peek(tokens, index) in MINOR_UNIT_WORDS:
        return (total + group) * _HUNDREDTH, index + 1, True

    return total + group, index, False


def _is_elapsed_time(tokens: list[str], index: int) -> bool:
    return _peek(tokens, index) in _ELAPSED_UNITS and _peek(tokens, index + 1) == "ago"


def _find_start(tokens: list[str], index: int) -> Optional[int]:
    while index < len(tokens):
        if _starts_number(tokens, index):
            return index
        index += 1
    return None


def parse(text: str, skip_elapsed_time: bool = False) -> Optional[Decimal]:
    """
    Parse the first spelled-out number in `text`.

    Args:
        text: A number phrase or a whole transcript
        skip_elapsed_time: Pass over runs followed by "days ago",
                           "weeks ago" or "months ago"

    Returns:
        The value as a Decimal, or None if no number word was found.

    A trailing minor-unit phrase after the currency word is added on:
    "two dollars and fifty cents" -> 2.50.
    """
    if not text:
        return None

    tokens = _tokenize(text)
    start = _find_start(tokens, 0)
    while start is not None:
        value, end, minor = _parse_run(tokens, start)
        if not (skip_elapsed_time and _is_elapsed_time(tokens, end)):
            break
        start = _find_start(tokens, end)
    if start is None:
        return None

    if minor:
        return value

    # <number> <currency word> [and] <number> cents
    follow = end + 1
    if _peek(tokens, follow) in CONNECTOR_WORDS:
        follow += 1
    if follow < len(tokens) and _starts_number(tokens, follow):
        cents, _, is_minor = _parse_run(tokens, follow)
        if is_minor:
            value += cents

    return value


def contains_number_phrase(text: str) -> bool:
    """Does the text contain a spelled-out number?"""
    return parse(text) is not None
