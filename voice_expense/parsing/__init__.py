"""
Transcript parsing stages.

Each stage scans the full transcript on its own and can be tested in
isolation; the pipeline combines their results.
"""

from voice_expense.parsing.amount import extract as extract_amount
from voice_expense.parsing.category import classify
from voice_expense.parsing.confidence import score
from voice_expense.parsing.currency import contains_currency, detect, find, normalize_symbols
from voice_expense.parsing.dates import resolve_date
from voice_expense.parsing.merchant import extract_merchant
from voice_expense.parsing.notes import extract_notes
from voice_expense.parsing.number_phrase import contains_number_phrase
from voice_expense.parsing.number_phrase import parse as parse_number_phrase

__all__ = [
    "classify",
    "contains_currency",
    "contains_number_phrase",
    "detect",
    "extract_amount",
    "extract_merchant",
    "extract_notes",
    "find",
    "normalize_symbols",
    "parse_number_phrase",
    "resolve_date",
    "score",
]
