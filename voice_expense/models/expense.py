"""
Core Data Models for Voice Expense

These models define the schemas for everything flowing through the
transcript pipeline. They are designed to:
1. Enforce type safety at runtime
2. Keep currency and category inside closed enumerations
3. Be serializable for storage and logging by downstream collaborators
4. Stay free of generated IDs and timestamps so parsing is reproducible

DESIGN DECISION: ParsedExpense is frozen. The pipeline builds it once
and nobody downstream can change it in place; corrections from the
confirmation dialog produce a new record.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class CurrencyCode(str, Enum):
    """
    Supported ISO 4217 currency codes.

    Every code here has exactly one entry in the currency reference table.
    """
    AED = "AED"
    AUD = "AUD"
    BHD = "BHD"
    BRL = "BRL"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    CZK = "CZK"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    HKD = "HKD"
    HUF = "HUF"
    IDR = "IDR"
    INR = "INR"
    JPY = "JPY"
    KRW = "KRW"
    KWD = "KWD"
    MXN = "MXN"
    MYR = "MYR"
    NOK = "NOK"
    NZD = "NZD"
    OMR = "OMR"
    PHP = "PHP"
    PLN = "PLN"
    QAR = "QAR"
    RON = "RON"
    RUB = "RUB"
    SAR = "SAR"
    SEK = "SEK"
    SGD = "SGD"
    THB = "THB"
    TRY = "TRY"
    USD = "USD"
    VND = "VND"
    ZAR = "ZAR"


class CategoryTag(str, Enum):
    """
    Expense categories.

    DESIGN DECISION: A closed set rather than free text so the expense
    list can group and filter reliably. OTHER is the catch-all.
    """
    FOOD_DINING = "Food & Dining"
    GROCERY = "Grocery"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"


class ExpenseSource(str, Enum):
    """Where the expense fields came from."""
    VOICE_TRANSCRIPT = "voice_transcript"   # Free text, parsed
    ASSISTANT_INTENT = "assistant_intent"   # Typed deep-link parameters


def _coerce_currency(v):
    if isinstance(v, str):
        return v.strip().upper()
    return v


def _coerce_category(v):
    """Accept 'grocery', 'GROCERY' or 'Grocery' from assistant parameters."""
    if isinstance(v, str) and not isinstance(v, CategoryTag):
        wanted = v.strip().lower()
        for tag in CategoryTag:
            if wanted in (tag.value.lower(), tag.name.lower()):
                return tag
    return v


# =============================================================================
# PIPELINE INPUTS
# =============================================================================

class ParseContext(BaseModel):
    """
    Caller-supplied hints for one parse.

    All fields are optional. The default currency normally comes from the
    user's preferences; the reference date anchors phrases like "yesterday".
    """
    model_config = ConfigDict(frozen=True)

    default_currency: Optional[CurrencyCode] = Field(
        default=None,
        description="Currency to fall back to when the transcript names none"
    )
    locale: Optional[str] = Field(
        default=None,
        max_length=35,
        description="Locale hint, e.g. 'en_AE'. Only English number words are supported."
    )
    reference_date: Optional[date] = Field(
        default=None,
        description="Date that relative phrases are resolved against"
    )

    @field_validator('default_currency', mode='before')
    @classmethod
    def normalize_currency(cls, v):
        return _coerce_currency(v)


class ExpenseIntent(BaseModel):
    """
    Structured parameters delivered by a voice assistant deep link.

    Any field the assistant filled in bypasses free-text parsing entirely.
    The transcript, when present, is used only for fields left empty.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Amount spoken to the assistant"
    )
    currency: Optional[CurrencyCode] = None
    category: Optional[CategoryTag] = None
    merchant: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=100,
    )
    transcript: Optional[str] = Field(
        default=None,
        description="Raw utterance, if the assistant forwarded it"
    )

    @field_validator('currency', mode='before')
    @classmethod
    def normalize_currency(cls, v):
        return _coerce_currency(v)

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v):
        return _coerce_category(v)

    @field_validator('merchant', mode='before')
    @classmethod
    def blank_merchant_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# =============================================================================
# PIPELINE OUTPUT
# =============================================================================

class ParsedExpense(BaseModel):
    """
    Structured expense extracted from one transcript.

    CRITICAL: This is PROPOSED data. Whether it is saved directly or shown
    in a confirmation dialog is decided by the caller from `confidence`.

    currency and category are always present; amount and merchant are
    optional because partial extraction is a normal outcome.
    """
    model_config = ConfigDict(frozen=True)

    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        decimal_places=2,
        description="Extracted monetary value"
    )
    currency: CurrencyCode = Field(
        ...,
        description="Resolved currency (detected or fallback)"
    )
    category: CategoryTag = Field(
        default=CategoryTag.OTHER,
        description="Resolved category"
    )
    merchant: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Free-text merchant name"
    )
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Extraction completeness score (0-1)"
    )
    raw_transcript: str = Field(
        ...,
        description="Original transcript, kept for the voice history"
    )

    currency_detected: bool = Field(
        default=False,
        description="False when currency is the caller's default"
    )
    transaction_date: Optional[date] = Field(
        default=None,
        description="Date the expense happened, resolved from phrases like 'yesterday'"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=500,
    )
    source: ExpenseSource = Field(
        default=ExpenseSource.VOICE_TRANSCRIPT,
    )

    @property
    def has_amount(self) -> bool:
        return self.amount is not None

    def requires_confirmation(self, threshold: float) -> bool:
        """
        Should the UI ask the user before saving?

        A record without an amount always needs the user.
        """
        if self.amount is None:
            return True
        return self.confidence < threshold


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'fallback')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of checking a parsed expense.

    Errors mean the record cannot be saved as-is; warnings mean the user
    should look at it; info issues only explain fallbacks.
    """

    is_valid: bool = Field(
        ...,
        description="No error-level issues"
    )
    requires_confirmation: bool = Field(
        ...,
        description="Should the user confirm before saving?"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
