"""
Shared text matching helpers for the parsing stages.

Every stage re-scans the full transcript on its own, but they all agree on
what a "word boundary" is: a keyword must not be glued to other letters on
the side where it starts or ends with a letter. "franc" never matches
inside "France", and "Rs" still matches in "Rs500".
"""

import re
from functools import lru_cache

# Matches when the neighbouring character is not a letter. Digits and
# underscores count as non-letters so "Rs500" and "50dh" still match.
_NOT_AFTER_LETTER = r"(?<![^\W\d_])"
_NOT_BEFORE_LETTER = r"(?![^\W\d_])"

_WHITESPACE = re.compile(r"\s+")


def _is_letter(char: str) -> bool:
    return char.isalpha()


@lru_cache(maxsize=None)
def term_pattern(term: str, case_sensitive: bool = False) -> re.Pattern:
    """
    Compile a boundary-aware pattern for a keyword, phrase or symbol.

    Inner whitespace in multi-word terms matches any run of whitespace.
    Terms made only of symbols ("$", "₹") match by plain containment.
    """
    body = r"\s+".join(re.escape(part) for part in term.split())
    if _is_letter(term[0]):
        body = _NOT_AFTER_LETTER + body
    if _is_letter(term[-1]):
        body = body + _NOT_BEFORE_LETTER
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(body, flags)


def contains_term(text: str, term: str, case_sensitive: bool = False) -> bool:
    return term_pattern(term, case_sensitive).search(text) is not None


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()
