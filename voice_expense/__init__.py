"""
Voice Expense - Transcript Interpretation Core

Turns a raw speech-to-text transcript ("I spent 50 dirhams on groceries")
into a structured expense record for a voice-driven expense tracker.

DESIGN PRINCIPLES:
1. Same transcript in, same record out (pure, deterministic)
2. Always return a best-effort result, never raise on bad input
3. Partial extraction is normal and shows up in the confidence score
4. Reference tables are built once and never mutated
5. The UI decides between auto-save and confirmation, not the parser
"""

from voice_expense.models.expense import (
    CategoryTag,
    CurrencyCode,
    ExpenseIntent,
    ParseContext,
    ParsedExpense,
)
from voice_expense.pipeline import VoiceExpenseParser, parse_transcript

__version__ = "1.0.0"
__author__ = "Just Spent Team"

__all__ = [
    "CategoryTag",
    "CurrencyCode",
    "ExpenseIntent",
    "ParseContext",
    "ParsedExpense",
    "VoiceExpenseParser",
    "parse_transcript",
]
