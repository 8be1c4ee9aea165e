"""
Currency Detector

Scans a transcript for currency symbols, ISO codes and spoken names across
all 36 supported currencies.

Matching rules:
- Keywords and ISO codes match case-insensitively on word boundaries,
  except codes that are also English words (see CASE_SENSITIVE_CODES).
- Symbols that contain letters ("Rs", "RM") match exactly as written.
- Keywords that are also English words ("won", "rand") match only right
  after a number.
- Pure symbols ("$", "₹") match wherever they appear.

DESIGN DECISION: When several currencies match, the longest matched term
wins ("canadian dollars" beats "dollars", "C$" beats "$"). Remaining ties go
to the first currency in COMMON_CURRENCY_PRIORITY, then to table order.
This is a heuristic for the app's primary markets, not a general solution.
"""

import re
from typing import Optional, Union

import structlog

from voice_expense.models.expense import CurrencyCode
from voice_expense.parsing.text import collapse_whitespace, term_pattern
from voice_expense.reference.currencies import (
    CASE_SENSITIVE_CODES,
    COMMON_CURRENCY_PRIORITY,
    CURRENCIES,
    get_currency,
)
from voice_expense.reference.numbers import NUMBER_WORDS

logger = structlog.get_logger(__name__)


# A numeral or number word, then optional whitespace: "5000 won", "ten rand"
_AFTER_NUMBER = r"(?:\d|(?<![^\W\d_])(?:{words}))\s*".format(
    words="|".join(sorted(NUMBER_WORDS, key=len, reverse=True))
)


def _after_number_pattern(keyword: str) -> re.Pattern:
    return re.compile(_AFTER_NUMBER + term_pattern(keyword).pattern, re.IGNORECASE)


def _compile_terms(definition) -> tuple[tuple[str, re.Pattern], ...]:
    terms = [
        (keyword, term_pattern(keyword))
        for keyword in definition.keywords
    ]
    terms.extend(
        (keyword, _after_number_pattern(keyword))
        for keyword in definition.amount_keywords
    )
    code = definition.code.value
    terms.append((code, term_pattern(code, case_sensitive=definition.code in CASE_SENSITIVE_CODES)))
    terms.extend(
        (symbol, term_pattern(symbol, case_sensitive=True))
        for symbol in definition.symbols
    )
    return tuple(terms)


# Compiled once at import, read-only afterwards
_CURRENCY_TERMS: tuple[tuple[CurrencyCode, tuple[tuple[str, re.Pattern], ...]], ...] = tuple(
    (definition.code, _compile_terms(definition)) for definition in CURRENCIES
)

_TABLE_RANK = {code: rank for rank, (code, _) in enumerate(_CURRENCY_TERMS)}
_PRIORITY_RANK = {code: rank for rank, code in enumerate(COMMON_CURRENCY_PRIORITY)}

_SYMBOL_TO_CODE: dict[str, CurrencyCode] = {}
for _definition in CURRENCIES:
    for _symbol in _definition.symbols:
        _SYMBOL_TO_CODE.setdefault(_symbol, _definition.code)

# Longest symbols first so "C$" is replaced before "$"
_SYMBOL_PATTERN = re.compile("|".join(
    f"(?:{term_pattern(symbol, case_sensitive=True).pattern})"
    for symbol in sorted(_SYMBOL_TO_CODE, key=len, reverse=True)
))


def _match_lengths(transcript: str) -> dict[CurrencyCode, int]:
    """Longest matched term per currency."""
    matches: dict[CurrencyCode, int] = {}
    for code, terms in _CURRENCY_TERMS:
        for term, pattern in terms:
            if len(term) > matches.get(code, 0) and pattern.search(transcript):
                matches[code] = len(term)
    return matches


def _rank(code: CurrencyCode, length: int) -> tuple[int, int, int]:
    return (
        -length,
        _PRIORITY_RANK.get(code, len(_PRIORITY_RANK)),
        _TABLE_RANK[code],
    )


def find(transcript: str) -> Optional[CurrencyCode]:
    """
    Find the currency named in a transcript.

    Returns None when nothing matches. Use detect() for the version
    with a fallback.
    """
    if not transcript:
        return None

    matches = _match_lengths(transcript)
    if not matches:
        return None

    winner = min(matches, key=lambda code: _rank(code, matches[code]))
    if len(matches) > 1:
        logger.debug(
            "currency_ambiguous",
            candidates={code.value: length for code, length in matches.items()},
            winner=winner.value,
        )
    return winner


def detect(
    transcript: str,
    default_currency: Union[CurrencyCode, str],
) -> CurrencyCode:
    """
    Detect the currency of a transcript.

    Args:
        transcript: Raw speech-to-text output
        default_currency: Returned when the transcript names no currency

    Returns:
        Always a CurrencyCode, never None.
    """
    found = find(transcript)
    if found is not None:
        return found
    return get_currency(default_currency).code


def contains_currency(text: str) -> bool:
    """Does the text mention any supported currency?"""
    return find(text) is not None


def normalize_symbols(text: str) -> str:
    """
    Replace written currency symbols with ISO codes.

    "₹20 for tea" -> "INR 20 for tea". Spoken names are left alone.
    """
    if not text:
        return text
    replaced = _SYMBOL_PATTERN.sub(
        lambda match: f" {_SYMBOL_TO_CODE[match.group(0)].value} ",
        text,
    )
    return collapse_whitespace(replaced)
