"""
Transcript Pipeline

This module ties the parsing stages together and defines the two ways an
expense enters the system:
1. Free text   (transcript → amount, currency, category, merchant → score)
2. Deep link   (typed assistant parameters, transcript only fills gaps)

DESIGN DECISION: The pipeline enforces the boundaries:
- It always returns a ParsedExpense; partial extraction is not an error
- It never decides to save; it reports confidence and the caller decides
- Every parse is audited under one correlation ID

Stages do not share state. Each one re-scans the full transcript, so the
same transcript and context always produce an identical ParsedExpense.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union
from uuid import UUID

import structlog

from voice_expense.audit import AuditLogger, configure_log_level, create_correlation_id
from voice_expense.config import ParserSettings, get_settings
from voice_expense.models.expense import (
    CategoryTag,
    CurrencyCode,
    ExpenseIntent,
    ExpenseSource,
    ParseContext,
    ParsedExpense,
    ValidationResult,
)
from voice_expense.parsing import amount as amount_stage
from voice_expense.parsing import category as category_stage
from voice_expense.parsing import confidence as confidence_stage
from voice_expense.parsing import currency as currency_stage
from voice_expense.parsing.dates import resolve_date
from voice_expense.parsing.merchant import extract_merchant
from voice_expense.parsing.notes import extract_notes
from voice_expense.validation import ExpenseValidator

_CENTS = Decimal("0.01")


def _quantize(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round to cents. Values too large to represent count as no amount."""
    if value is None:
        return None
    try:
        return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


class VoiceExpenseParser:
    """
    Orchestrates the transcript pipeline.

    Flow:
    1. Amount    → numerals first, then spelled-out phrases
    2. Currency  → symbols, codes and names; default when none
    3. Category  → first matching rule; Other when none
    4. Merchant  → "at X" / "from X"
    5. Date and notes
    6. Confidence score

    The auto-save threshold comes from settings. The UI may pass its own.
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ExpenseValidator] = None,
    ):
        self._settings = settings or get_settings().parser

        if audit_logger is None:
            app_settings = get_settings().app
            configure_log_level(app_settings.effective_log_level)
            audit_logger = AuditLogger(enabled=app_settings.audit_enabled)
        self._audit_logger = audit_logger

        self._validator = validator or ExpenseValidator(self._settings)
        self._logger = structlog.get_logger(__name__)

    @property
    def settings(self) -> ParserSettings:
        return self._settings

    # =========================================================================
    # CONTEXT
    # =========================================================================

    def _default_currency(self, context: ParseContext) -> CurrencyCode:
        return context.default_currency or self._settings.default_currency

    @staticmethod
    def _reference_date(context: ParseContext) -> date:
        return context.reference_date or date.today()

    # =========================================================================
    # FREE-TEXT PATH
    # =========================================================================

    def parse(
        self,
        transcript: Optional[str],
        context: Optional[ParseContext] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ParsedExpense:
        """
        Parse a transcript into a proposed expense.

        Args:
            transcript: Raw speech-to-text output. Empty or None is allowed
                        and yields an expense without an amount.
            context: Default currency, locale and reference date
            correlation_id: Audit correlation ID; a new one if omitted

        Returns:
            ParsedExpense. Never raises for any transcript.
        """
        transcript = transcript or ""
        context = context or ParseContext()
        correlation_id = correlation_id or create_correlation_id()
        default_currency = self._default_currency(context)

        self._audit_logger.log_transcript_received(
            transcript=transcript,
            default_currency=default_currency.value,
            correlation_id=correlation_id,
        )

        amount = _quantize(amount_stage.extract(transcript))
        found_currency = currency_stage.find(transcript)
        category = category_stage.classify(transcript)
        merchant = extract_merchant(transcript)

        self._logger.debug(
            "transcript_stages",
            correlation_id=str(correlation_id),
            amount=str(amount) if amount is not None else None,
            currency=found_currency.value if found_currency else None,
            category_keyword=category_stage.matched_keyword(transcript),
            merchant=merchant,
        )

        expense = ParsedExpense(
            amount=amount,
            currency=found_currency or default_currency,
            category=category,
            merchant=merchant,
            confidence=confidence_stage.score(
                amount, found_currency, category, merchant is not None
            ),
            raw_transcript=transcript,
            currency_detected=found_currency is not None,
            transaction_date=resolve_date(transcript, self._reference_date(context)),
            notes=extract_notes(transcript),
            source=ExpenseSource.VOICE_TRANSCRIPT,
        )

        self._audit_result(expense, correlation_id)
        return expense

    # =========================================================================
    # DEEP-LINK PATH
    # =========================================================================

    def parse_intent(
        self,
        intent: ExpenseIntent,
        context: Optional[ParseContext] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ParsedExpense:
        """
        Build an expense from assistant-supplied parameters.

        Supplied fields bypass parsing and count with full weight in the
        confidence score, including a supplied "Other" category. Missing
        fields are parsed from intent.transcript when there is one.
        """
        context = context or ParseContext()
        correlation_id = correlation_id or create_correlation_id()
        transcript = intent.transcript or ""
        default_currency = self._default_currency(context)

        supplied_fields = [
            name for name in ("amount", "currency", "category", "merchant")
            if getattr(intent, name) is not None
        ]
        self._audit_logger.log_intent_applied(
            supplied_fields=supplied_fields,
            correlation_id=correlation_id,
        )

        if intent.amount is not None:
            amount = _quantize(intent.amount)
        else:
            amount = _quantize(amount_stage.extract(transcript))

        explicit_currency = intent.currency or currency_stage.find(transcript)
        category = intent.category or category_stage.classify(transcript)
        merchant = intent.merchant or extract_merchant(transcript)

        confidence = confidence_stage.score(
            amount, explicit_currency, category, merchant is not None
        )
        if intent.category == CategoryTag.OTHER:
            confidence = round(min(confidence + confidence_stage.CATEGORY_WEIGHT, 1.0), 2)

        expense = ParsedExpense(
            amount=amount,
            currency=explicit_currency or default_currency,
            category=category,
            merchant=merchant,
            confidence=confidence,
            raw_transcript=transcript,
            currency_detected=explicit_currency is not None,
            transaction_date=resolve_date(transcript, self._reference_date(context)),
            notes=extract_notes(transcript),
            source=ExpenseSource.ASSISTANT_INTENT,
        )

        self._audit_result(expense, correlation_id)
        return expense

    # =========================================================================
    # HAND-OFF
    # =========================================================================

    def should_auto_save(
        self,
        expense: ParsedExpense,
        threshold: Optional[float] = None,
    ) -> bool:
        """
        Can the caller save without asking the user?

        Args:
            expense: Parsed expense
            threshold: Override for settings.auto_save_threshold
        """
        if threshold is None:
            threshold = self._settings.auto_save_threshold
        return not expense.requires_confirmation(threshold)

    def validate(
        self,
        expense: ParsedExpense,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        """Validate a parsed expense; failures are audited, never raised."""
        result = self._validator.validate(expense)
        if not result.is_valid:
            self._audit_logger.log_validation_failed(
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            )
        return result

    def _audit_result(self, expense: ParsedExpense, correlation_id: UUID) -> None:
        if expense.amount is None:
            self._audit_logger.log_amount_missing(
                transcript=expense.raw_transcript,
                correlation_id=correlation_id,
            )

        self._audit_logger.log_expense_parsed(
            amount=str(expense.amount) if expense.amount is not None else None,
            currency=expense.currency.value,
            category=expense.category.value,
            merchant=expense.merchant,
            confidence=expense.confidence,
            correlation_id=correlation_id,
        )

        threshold = self._settings.auto_save_threshold
        self._audit_logger.log_confirmation_decided(
            confidence=expense.confidence,
            threshold=threshold,
            requires_confirmation=expense.requires_confirmation(threshold),
            correlation_id=correlation_id,
        )


def parse_transcript(
    transcript: Optional[str],
    default_currency: Optional[Union[CurrencyCode, str]] = None,
    locale: Optional[str] = None,
    reference_date: Optional[date] = None,
) -> ParsedExpense:
    """
    Parse one transcript with settings from the environment.

    Convenience wrapper for callers that do not keep a parser around.
    """
    context = ParseContext(
        default_currency=default_currency,
        locale=locale,
        reference_date=reference_date,
    )
    return VoiceExpenseParser().parse(transcript, context)
