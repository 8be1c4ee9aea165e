"""Static reference tables: currencies, categories and number words."""

from voice_expense.reference.categories import (
    CATEGORY_RULES,
    CategoryRule,
    all_category_keywords,
)
from voice_expense.reference.currencies import (
    CASE_SENSITIVE_CODES,
    COMMON_CURRENCY_PRIORITY,
    CURRENCIES,
    CURRENCY_BY_CODE,
    CurrencyDefinition,
    ReferenceDataError,
    UnknownCurrencyError,
    get_currency,
)
from voice_expense.reference.numbers import (
    SCALE_BY_TOKEN,
    SCALE_UNITS,
    NumberScaleUnit,
)

__all__ = [
    "CASE_SENSITIVE_CODES",
    "CATEGORY_RULES",
    "COMMON_CURRENCY_PRIORITY",
    "CURRENCIES",
    "CURRENCY_BY_CODE",
    "CategoryRule",
    "CurrencyDefinition",
    "NumberScaleUnit",
    "ReferenceDataError",
    "SCALE_BY_TOKEN",
    "SCALE_UNITS",
    "UnknownCurrencyError",
    "all_category_keywords",
    "get_currency",
]
