"""
Merchant Extractor

Pulls a free-text merchant name out of prepositional phrases:
"... at Carrefour yesterday" -> "Carrefour", "... from Amazon" -> "Amazon".

The span after the preposition ends at the first boundary word ("for",
"on", "yesterday", ...), digit or clause punctuation. Trailing currency
words, category keywords and filler are then trimmed, but a single
remaining word is always kept: "at Carrefour" names the merchant even
though "carrefour" is also a Grocery keyword.

No plausibility check beyond trimming; the UI shows the result for review.
"""

import re
from typing import Optional

from voice_expense.reference.categories import all_category_keywords
from voice_expense.reference.currencies import CURRENCIES

MAX_MERCHANT_LENGTH = 100

# Tried in order; the first one that leaves a name wins
_MERCHANT_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\bat\s+(.+)", re.IGNORECASE),
    re.compile(r"\bfrom\s+(.+)", re.IGNORECASE),
)

_BOUNDARY_WORDS = frozenset({
    "for", "on", "in", "with", "to", "and", "by", "via", "using",
    "yesterday", "today", "tonight", "tomorrow", "this", "last",
    "when", "because", "while", "around", "about",
})

_FILLER_WORDS = frozenset({"the", "a", "an", "my", "our", "some"})

_NAME_WORD = re.compile(r"[A-Za-z][A-Za-z0-9&'.\-]*|&")
_CLAUSE_END = ",;:!?"


def _currency_words() -> frozenset[str]:
    words = set()
    for definition in CURRENCIES:
        words.add(definition.code.value.lower())
        words.update(k for k in definition.keywords if " " not in k)
    return frozenset(words)


_CURRENCY_WORDS = _currency_words()
_STOP_WORDS = (
    _FILLER_WORDS
    | _CURRENCY_WORDS
    | frozenset(k for k in all_category_keywords() if " " not in k)
)


def _name_words(span: str) -> list[str]:
    """Words of the span up to the first boundary."""
    words = []
    for raw in span.split():
        word = raw.rstrip(_CLAUSE_END + ".")
        ends_clause = raw[-1] in _CLAUSE_END
        if not word or word.lower() in _BOUNDARY_WORDS or not _NAME_WORD.fullmatch(word):
            break
        words.append(word)
        if ends_clause:
            break
    return words


def _trim(words: list[str]) -> list[str]:
    while words and words[0].lower() in _FILLER_WORDS:
        words = words[1:]
    while len(words) > 1 and words[-1].lower() in _STOP_WORDS:
        words = words[:-1]
    if len(words) == 1 and words[0].lower() in _CURRENCY_WORDS:
        return []
    return words


def extract_merchant(transcript: str) -> Optional[str]:
    """
    Extract a merchant name, preserving its original casing.

    Returns None if no pattern yields a name.
    """
    if not transcript:
        return None

    for pattern in _MERCHANT_PATTERNS:
        for match in pattern.finditer(transcript):
            words = _trim(_name_words(match.group(1)))
            if words:
                return " ".join(words)[:MAX_MERCHANT_LENGTH].rstrip()
    return None
