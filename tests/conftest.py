"""Shared fixtures."""

from datetime import date

import pytest

from voice_expense.audit import AuditLogger
from voice_expense.config import ParserSettings, get_settings
from voice_expense.models.expense import CurrencyCode, ParseContext
from voice_expense.pipeline import VoiceExpenseParser


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    for name in (
        "VOICE_EXPENSE_DEFAULT_CURRENCY",
        "VOICE_EXPENSE_AUTO_SAVE_THRESHOLD",
        "VOICE_EXPENSE_MIN_AMOUNT",
        "VOICE_EXPENSE_MAX_AMOUNT",
        "LOG_LEVEL",
        "AUDIT_ENABLED",
        "DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class RecordingAuditLogger(AuditLogger):
    """Keeps emitted events in memory instead of writing them out."""

    def __init__(self):
        super().__init__(enabled=True)
        self.events = []

    def log(self, event):
        self.events.append(event)
        return True

    @property
    def event_types(self):
        return [event.event_type.value for event in self.events]


@pytest.fixture
def audit_logger():
    return RecordingAuditLogger()


@pytest.fixture
def parser_settings():
    return ParserSettings(default_currency=CurrencyCode.USD, auto_save_threshold=0.7)


@pytest.fixture
def parser(parser_settings, audit_logger):
    return VoiceExpenseParser(settings=parser_settings, audit_logger=audit_logger)


@pytest.fixture
def reference_date():
    # A Wednesday
    return date(2025, 1, 15)


@pytest.fixture
def context(reference_date):
    return ParseContext(default_currency=CurrencyCode.USD, reference_date=reference_date)
