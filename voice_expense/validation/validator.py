"""
Parsed Expense Validation

DESIGN DECISION: Validation runs after parsing, on the finished record,
in two stages:

STAGE 1 - COMPLETENESS:
- Is there an amount at all?
- Is it a positive number?

STAGE 2 - PLAUSIBILITY:
- Amount within the configured sanity bounds
- Confidence at or above the auto-save threshold
- Which fields fell back to defaults

Stage 2 only runs when stage 1 passes; there is nothing to judge about
an amount that was never heard.

IMPORTANT: Validation NEVER silently fixes issues and NEVER raises.
It reports them so the confirmation dialog can show them to the user.
"""

from decimal import Decimal
from typing import Optional

from voice_expense.config import ParserSettings, get_settings
from voice_expense.formatting import format_amount
from voice_expense.models.expense import (
    CategoryTag,
    ParsedExpense,
    ValidationIssue,
    ValidationResult,
)


class ExpenseValidator:
    """
    Validates a ParsedExpense before it is handed to the UI.

    Stage 1: Completeness (amount present and positive)
    Stage 2: Plausibility (bounds, confidence, fallbacks)
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Parser settings with bounds and threshold.
                      If None, loaded from the environment.
        """
        self._settings = settings or get_settings().parser

    def _validate_completeness(
        self,
        expense: ParsedExpense,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Completeness.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if expense.amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="No amount could be understood from what you said",
                severity="error",
                suggested_fix='Try again with the amount first, e.g. "50 dirhams for lunch"',
            ))
        elif expense.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Check if the amount was heard correctly",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_plausibility(
        self,
        expense: ParsedExpense,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Plausibility.

        Only warnings and info; nothing here blocks saving.
        """
        issues = []
        min_amount = Decimal(str(self._settings.min_amount))
        max_amount = Decimal(str(self._settings.max_amount))

        if expense.amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=(
                    f"Amount ({format_amount(expense.amount, expense.currency)}) "
                    f"is above the usual maximum"
                ),
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))
        elif expense.amount < min_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=(
                    f"Amount ({format_amount(expense.amount, expense.currency)}) "
                    f"seems unusually low"
                ),
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        threshold = self._settings.auto_save_threshold
        if expense.confidence < threshold:
            issues.append(ValidationIssue(
                field="confidence",
                issue_type="low_confidence",
                message=f"Extraction confidence is low ({expense.confidence:.0%})",
                severity="warning",
                suggested_fix="Please review all fields carefully",
            ))

        if not expense.currency_detected:
            issues.append(ValidationIssue(
                field="currency",
                issue_type="fallback",
                message=f"No currency was mentioned; using {expense.currency.value}",
                severity="info",
            ))

        if expense.category == CategoryTag.OTHER:
            issues.append(ValidationIssue(
                field="category",
                issue_type="fallback",
                message="Category could not be determined; using Other",
                severity="info",
                suggested_fix="Pick a category if you want this expense grouped",
            ))

        if expense.merchant is None:
            issues.append(ValidationIssue(
                field="merchant",
                issue_type="missing",
                message="No merchant was mentioned",
                severity="info",
            ))

        return issues

    def validate(self, expense: ParsedExpense) -> ValidationResult:
        """
        Run both validation stages.

        Args:
            expense: The parsed expense to check

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        complete, completeness_issues = self._validate_completeness(expense)
        all_issues.extend(completeness_issues)

        if complete:
            all_issues.extend(self._validate_plausibility(expense))

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        requires_confirmation = (
            not complete
            or bool(warnings)
            or expense.requires_confirmation(self._settings.auto_save_threshold)
        )

        return ValidationResult(
            is_valid=complete,
            requires_confirmation=requires_confirmation,
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what the confirmation dialog shows.
        """
        if result.is_valid and not result.warnings:
            return "✅ Got it! Please check the details below."

        lines = []

        if not result.is_valid:
            lines.append("❌ Some required information is missing:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        lines.append("")
        if result.is_valid:
            lines.append("You can still save, but please review carefully.")
        else:
            lines.append("Please fix the issues above before saving.")

        return "\n".join(lines)
