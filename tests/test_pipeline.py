"""
End-to-end tests for the transcript pipeline.

These go through VoiceExpenseParser the way the app does: one call per
transcript, with the user's default currency and a fixed reference date.
"""

import pytest
from datetime import date
from decimal import Decimal

from voice_expense import parse_transcript
from voice_expense.models.expense import (
    CategoryTag,
    CurrencyCode,
    ExpenseIntent,
    ExpenseSource,
    ParseContext,
)


class TestEndToEnd:
    """Complete transcripts."""

    def test_spelled_out_dirhams(self, parser, context):
        """Test a fully spelled-out amount with a currency name."""
        expense = parser.parse("I just spent two thousand dirhams on groceries", context)
        assert expense.amount == Decimal("2000.00")
        assert expense.currency == CurrencyCode.AED
        assert expense.category == CategoryTag.GROCERY
        assert expense.merchant is None
        assert expense.confidence == 0.9

    def test_symbol_beats_default(self, parser, reference_date):
        """Test that ₹ overrides a USD default."""
        context = ParseContext(default_currency="USD", reference_date=reference_date)
        expense = parser.parse("I spent ₹20 for tea", context)
        assert expense.amount == Decimal("20.00")
        assert expense.currency == CurrencyCode.INR
        assert expense.category == CategoryTag.FOOD_DINING
        assert expense.currency_detected is True
        assert expense.notes == "tea"

    def test_complete_transcript(self, parser, context):
        """Test every field extracted, including the date."""
        expense = parser.parse("I paid 150 AED for groceries at Carrefour yesterday", context)
        assert expense.amount == Decimal("150.00")
        assert expense.currency == CurrencyCode.AED
        assert expense.category == CategoryTag.GROCERY
        assert expense.merchant == "Carrefour"
        assert expense.transaction_date == date(2025, 1, 14)
        assert expense.confidence == 1.0
        assert expense.source == ExpenseSource.VOICE_TRANSCRIPT

    def test_default_currency_used(self, parser, reference_date):
        """Test fallback to the caller's default currency."""
        context = ParseContext(default_currency="INR", reference_date=reference_date)
        expense = parser.parse("I spent 50 for shopping", context)
        assert expense.amount == Decimal("50.00")
        assert expense.currency == CurrencyCode.INR
        assert expense.category == CategoryTag.SHOPPING
        assert expense.currency_detected is False
        assert expense.confidence == 0.65

    def test_lakh_rupees(self, parser, context):
        """Test the Indian scale word with no category keyword."""
        expense = parser.parse("five lakh rupees for the car", context)
        assert expense.amount == Decimal("500000.00")
        assert expense.currency == CurrencyCode.INR
        assert expense.category == CategoryTag.OTHER
        assert expense.confidence == 0.75

    def test_comma_after_amount(self, parser, reference_date):
        """Test dictation punctuation right after the number."""
        context = ParseContext(default_currency="AED", reference_date=reference_date)
        expense = parser.parse("Spent 150, at Carrefour", context)
        assert expense.amount == Decimal("150.00")
        assert expense.merchant == "Carrefour"

    def test_verb_won_is_not_a_currency(self, parser, reference_date):
        """Test "I won" leaves the default currency in place."""
        context = ParseContext(default_currency="INR", reference_date=reference_date)
        expense = parser.parse("I won a bet and spent 50 on lunch", context)
        assert expense.currency == CurrencyCode.INR
        assert expense.currency_detected is False
        assert expense.confidence == 0.65

    def test_amount_has_two_decimal_places(self, parser, context):
        """Test amounts are always quantized to cents."""
        expense = parser.parse("two thousand", context)
        assert str(expense.amount) == "2000.00"

    def test_raw_transcript_kept(self, parser, context):
        """Test the original text is preserved verbatim."""
        text = "Coffee at Starbucks, 5 dollars!"
        assert parser.parse(text, context).raw_transcript == text


class TestPartialAndEmpty:
    """Partial extraction is a normal outcome."""

    @pytest.mark.parametrize("text", ["", None, "   ", "hello there"])
    def test_no_amount(self, parser, context, text):
        """Test transcripts without an amount."""
        expense = parser.parse(text, context)
        assert expense.amount is None
        assert expense.currency == CurrencyCode.USD
        assert expense.category == CategoryTag.OTHER
        assert expense.confidence == 0.0
        assert expense.requires_confirmation(0.0) is True

    def test_settings_default_without_context(self, audit_logger):
        """Test the settings default currency when no context is given."""
        from voice_expense.config import ParserSettings
        from voice_expense.pipeline import VoiceExpenseParser

        parser = VoiceExpenseParser(
            settings=ParserSettings(default_currency="EUR"),
            audit_logger=audit_logger,
        )
        expense = parser.parse("12 for lunch")
        assert expense.currency == CurrencyCode.EUR
        assert expense.transaction_date == date.today()


class TestDeterminism:
    """Same input, same output."""

    def test_idempotent(self, parser, context):
        """Test byte-identical output across runs."""
        text = "I paid 150 AED for groceries at Carrefour yesterday"
        first = parser.parse(text, context).model_dump_json()
        for _ in range(5):
            assert parser.parse(text, context).model_dump_json() == first

    def test_multi_category_stable(self, parser, context):
        """Test a two-category transcript always resolves the same way."""
        text = "30 dollars for a taxi to the restaurant"
        categories = {parser.parse(text, context).category for _ in range(10)}
        assert categories == {CategoryTag.FOOD_DINING}


class TestAuditTrail:
    """Events emitted per parse."""

    def test_event_order(self, parser, audit_logger, context):
        """Test a complete parse emits received, parsed, decision."""
        parser.parse("I paid 150 AED for groceries at Carrefour yesterday", context)
        assert audit_logger.event_types == [
            "transcript_received",
            "expense_parsed",
            "auto_save_eligible",
        ]
        assert len({event.correlation_id for event in audit_logger.events}) == 1

    def test_missing_amount_events(self, parser, audit_logger, context):
        """Test a transcript without an amount is flagged."""
        parser.parse("hello", context)
        assert audit_logger.event_types == [
            "transcript_received",
            "amount_missing",
            "expense_parsed",
            "confirmation_required",
        ]

    def test_correlation_id_passed_through(self, parser, audit_logger, context):
        """Test a caller-supplied correlation ID is used."""
        from voice_expense.audit import create_correlation_id

        correlation_id = create_correlation_id()
        parser.parse("20 dollars", context, correlation_id=correlation_id)
        assert {event.correlation_id for event in audit_logger.events} == {correlation_id}


class TestIntent:
    """Deep-link path."""

    def test_full_intent(self, parser, audit_logger, context):
        """Test all fields supplied."""
        intent = ExpenseIntent(
            amount=Decimal("42.5"),
            currency="aed",
            category="grocery",
            merchant="Lulu",
        )
        expense = parser.parse_intent(intent, context)
        assert expense.amount == Decimal("42.50")
        assert expense.currency == CurrencyCode.AED
        assert expense.category == CategoryTag.GROCERY
        assert expense.merchant == "Lulu"
        assert expense.confidence == 1.0
        assert expense.source == ExpenseSource.ASSISTANT_INTENT
        assert expense.raw_transcript == ""
        assert audit_logger.event_types[0] == "intent_applied"
        assert audit_logger.events[0].details["supplied_fields"] == [
            "amount", "currency", "category", "merchant"
        ]

    def test_partial_intent_filled_from_transcript(self, parser, context):
        """Test missing fields come from the transcript."""
        intent = ExpenseIntent(
            category="Transportation",
            transcript="paid 25 dirhams for a ride at Careem",
        )
        expense = parser.parse_intent(intent, context)
        assert expense.amount == Decimal("25.00")
        assert expense.currency == CurrencyCode.AED
        assert expense.category == CategoryTag.TRANSPORTATION
        assert expense.merchant == "Careem"
        assert expense.confidence == 1.0

    def test_supplied_fields_win(self, parser, context):
        """Test supplied values override what the transcript says."""
        intent = ExpenseIntent(amount=Decimal("10"), transcript="I spent 99 dollars")
        expense = parser.parse_intent(intent, context)
        assert expense.amount == Decimal("10.00")
        assert expense.currency == CurrencyCode.USD

    def test_supplied_other_counts(self, parser, context):
        """Test an explicit Other category earns the category weight."""
        intent = ExpenseIntent(amount=Decimal("10"), category="other")
        expense = parser.parse_intent(intent, context)
        assert expense.category == CategoryTag.OTHER
        assert expense.confidence == 0.65
        assert expense.currency_detected is False


class TestHandOff:
    """Auto-save decision and validation."""

    def test_should_auto_save(self, parser, context):
        """Test the settings threshold and an override."""
        confident = parser.parse("I paid 150 AED for groceries at Carrefour", context)
        unsure = parser.parse("I spent 50 for shopping", context)
        assert parser.should_auto_save(confident) is True
        assert parser.should_auto_save(unsure) is False
        assert parser.should_auto_save(unsure, threshold=0.6) is True

    def test_no_amount_never_auto_saves(self, parser, context):
        """Test that even a zero threshold needs an amount."""
        expense = parser.parse("groceries at Carrefour", context)
        assert parser.should_auto_save(expense, threshold=0.0) is False

    def test_validate_logs_failure(self, parser, audit_logger, context):
        """Test invalid expenses are audited."""
        expense = parser.parse("", context)
        result = parser.validate(expense)
        assert result.is_valid is False
        assert audit_logger.event_types[-1] == "validation_failed"

    def test_validate_valid_not_logged(self, parser, audit_logger, context):
        """Test valid expenses emit nothing extra."""
        expense = parser.parse("I paid 150 AED for groceries at Carrefour", context)
        before = len(audit_logger.events)
        assert parser.validate(expense).is_valid is True
        assert len(audit_logger.events) == before


class TestParseTranscript:
    """Module-level convenience function."""

    def test_environment_default(self, monkeypatch):
        """Test the default currency comes from the environment."""
        monkeypatch.setenv("VOICE_EXPENSE_DEFAULT_CURRENCY", "aed")
        expense = parse_transcript("I spent 50 on lunch", reference_date=date(2025, 1, 15))
        assert expense.currency == CurrencyCode.AED
        assert expense.amount == Decimal("50.00")
        assert expense.transaction_date == date(2025, 1, 15)

    def test_debug_mode_sets_package_log_level(self, monkeypatch):
        """Test a parser built from settings honours DEBUG_MODE."""
        import logging

        from voice_expense.pipeline import VoiceExpenseParser

        package_logger = logging.getLogger("voice_expense")
        original_level = package_logger.level
        monkeypatch.setenv("DEBUG_MODE", "true")
        try:
            VoiceExpenseParser()
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(original_level)

    def test_explicit_default(self):
        """Test an explicit default currency."""
        expense = parse_transcript("12 for parking", default_currency="GBP")
        assert expense.currency == CurrencyCode.GBP
        assert expense.category == CategoryTag.TRANSPORTATION


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
