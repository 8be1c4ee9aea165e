"""
Data Models Package

This package contains all Pydantic models used by the transcript pipeline.
All data flowing in and out of the parser must conform to these schemas.
"""

from voice_expense.models.expense import (
    CategoryTag,
    CurrencyCode,
    ExpenseIntent,
    ExpenseSource,
    ParseContext,
    ParsedExpense,
    ValidationIssue,
    ValidationResult,
)
from voice_expense.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CategoryTag",
    "CurrencyCode",
    "ExpenseIntent",
    "ExpenseSource",
    "ParseContext",
    "ParsedExpense",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
