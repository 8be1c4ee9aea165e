"""
Category Classifier

Ordered first-match over CATEGORY_RULES. The first rule with any keyword
present in the transcript wins; no match means Other.
"""

import re
from typing import Optional

from voice_expense.models.expense import CategoryTag
from voice_expense.parsing.text import term_pattern
from voice_expense.reference.categories import CATEGORY_RULES

_RULE_PATTERNS: tuple[tuple[CategoryTag, tuple[re.Pattern, ...]], ...] = tuple(
    (rule.category, tuple(term_pattern(keyword) for keyword in rule.keywords))
    for rule in CATEGORY_RULES
)


def classify(transcript: str) -> CategoryTag:
    """Classify a transcript into one of the fixed categories."""
    if not transcript:
        return CategoryTag.OTHER

    for category, patterns in _RULE_PATTERNS:
        if any(pattern.search(transcript) for pattern in patterns):
            return category
    return CategoryTag.OTHER


def matched_keyword(transcript: str) -> Optional[str]:
    """The keyword that decided the category, for diagnostics."""
    for rule in CATEGORY_RULES:
        for keyword in rule.keywords:
            if term_pattern(keyword).search(transcript or ""):
                return keyword
    return None
