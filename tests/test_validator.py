"""Tests for the parsed-expense validator."""

import pytest
from decimal import Decimal

from voice_expense.config import ParserSettings
from voice_expense.models.expense import CategoryTag, CurrencyCode, ParsedExpense
from voice_expense.validation import ExpenseValidator


def make_expense(**overrides) -> ParsedExpense:
    fields = dict(
        amount=Decimal("150.00"),
        currency=CurrencyCode.AED,
        category=CategoryTag.GROCERY,
        merchant="Carrefour",
        confidence=1.0,
        raw_transcript="I paid 150 AED for groceries at Carrefour",
        currency_detected=True,
    )
    fields.update(overrides)
    return ParsedExpense(**fields)


@pytest.fixture
def validator():
    return ExpenseValidator(ParserSettings(auto_save_threshold=0.7, max_amount=10000))


class TestCompleteness:
    """Stage 1."""

    def test_complete_expense_passes(self, validator):
        """Test a fully extracted expense."""
        result = validator.validate(make_expense())
        assert result.is_valid is True
        assert result.requires_confirmation is False
        assert result.issues == []

    def test_missing_amount_is_error(self, validator):
        """Test that no amount blocks saving."""
        result = validator.validate(make_expense(amount=None, confidence=0.5))
        assert result.is_valid is False
        assert result.requires_confirmation is True
        assert result.error_count == 1
        assert result.issues[0].field == "amount"
        assert result.issues[0].issue_type == "missing"

    def test_zero_amount_is_error(self, validator):
        """Test that zero is not a valid amount."""
        result = validator.validate(make_expense(amount=Decimal("0")))
        assert result.is_valid is False
        assert result.issues[0].issue_type == "invalid_value"

    def test_plausibility_skipped_when_incomplete(self, validator):
        """Test that stage 2 does not run without an amount."""
        result = validator.validate(make_expense(amount=None, confidence=0.1))
        assert all(issue.field == "amount" for issue in result.issues)


class TestPlausibility:
    """Stage 2."""

    def test_amount_above_maximum(self, validator):
        """Test the upper sanity bound."""
        result = validator.validate(make_expense(amount=Decimal("50000")))
        assert result.is_valid is True
        assert result.requires_confirmation is True
        assert any(issue.issue_type == "out_of_range" for issue in result.issues)
        assert "د.إ 50,000.00" in result.warnings[0]

    def test_amount_below_minimum(self):
        """Test the lower sanity bound."""
        validator = ExpenseValidator(ParserSettings(min_amount=1.0))
        result = validator.validate(make_expense(amount=Decimal("0.50")))
        assert any(issue.issue_type == "out_of_range" for issue in result.issues)

    def test_low_confidence_warning(self, validator):
        """Test that scores under the threshold are flagged."""
        result = validator.validate(make_expense(confidence=0.65))
        assert result.requires_confirmation is True
        assert any(issue.issue_type == "low_confidence" for issue in result.issues)

    def test_fallbacks_are_info(self, validator):
        """Test that defaulted fields are explained but do not block."""
        result = validator.validate(make_expense(
            currency_detected=False,
            category=CategoryTag.OTHER,
            merchant=None,
        ))
        severities = {issue.field: issue.severity for issue in result.issues}
        assert severities == {"currency": "info", "category": "info", "merchant": "info"}
        assert result.is_valid is True
        assert result.warnings == []


class TestSummary:
    """User-facing summary text."""

    def test_all_good(self, validator):
        """Test the happy-path message."""
        result = validator.validate(make_expense())
        assert validator.get_user_friendly_summary(result).startswith("✅")

    def test_errors_listed(self, validator):
        """Test that errors and their fixes are shown."""
        result = validator.validate(make_expense(amount=None, confidence=0.5))
        summary = validator.get_user_friendly_summary(result)
        assert "❌" in summary
        assert "No amount could be understood" in summary
        assert "Please fix the issues above" in summary

    def test_warnings_listed(self, validator):
        """Test that warnings are shown with a proceed hint."""
        result = validator.validate(make_expense(confidence=0.5))
        summary = validator.get_user_friendly_summary(result)
        assert "⚠️" in summary
        assert "You can still save" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
