"""
Audit Logger

DESIGN DECISION: Every transcript that goes through the parser is logged.
This provides:
1. Traceability from a saved expense back to what was heard
2. Debugging capability when a transcript is misread
3. A record of which expenses were auto-saved and which were confirmed

The audit logger:
- Is synchronous, like the parser; there is no I/O besides log emission
- Gracefully handles failures (a broken sink never breaks parsing)
- Supports correlation IDs to trace the events of one parse
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from voice_expense.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(level: str) -> None:
    """
    Set the minimum level for this package's loggers.

    Handlers are left to the host application.
    """
    logging.getLogger("voice_expense").setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service for the parsing pipeline.

    Events go to the structured local log. When disabled (see
    AppSettings.audit_enabled) events are built but not emitted, so callers
    never need to branch on configuration.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize audit logger.

        Args:
            enabled: Emit events. False turns every log call into a no-op.
        """
        self._enabled = enabled
        self._logger = structlog.get_logger("voice_expense.audit")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was emitted.
        """
        if not self._enabled:
            return False

        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must never break parsing
            structlog.get_logger().error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

        return True

    def log_transcript_received(
        self,
        transcript: str,
        default_currency: str,
        correlation_id: UUID,
    ) -> None:
        """Log an incoming transcript."""
        event = AuditEventBuilder.transcript_received(
            transcript=transcript,
            default_currency=default_currency,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_expense_parsed(
        self,
        amount: Optional[str],
        currency: str,
        category: str,
        merchant: Optional[str],
        confidence: float,
        correlation_id: UUID,
    ) -> None:
        """Log the extraction result."""
        event = AuditEventBuilder.expense_parsed(
            amount=amount,
            currency=currency,
            category=category,
            merchant=merchant,
            confidence=confidence,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_amount_missing(
        self,
        transcript: str,
        correlation_id: UUID,
    ) -> None:
        """Log a transcript without a recognisable amount."""
        event = AuditEventBuilder.amount_missing(
            transcript=transcript,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_intent_applied(
        self,
        supplied_fields: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log a deep-link intent."""
        event = AuditEventBuilder.intent_applied(
            supplied_fields=supplied_fields,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_confirmation_decided(
        self,
        confidence: float,
        threshold: float,
        requires_confirmation: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log whether the expense goes to the confirmation dialog."""
        event = AuditEventBuilder.confirmation_decided(
            confidence=confidence,
            threshold=threshold,
            requires_confirmation=requires_confirmation,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log validation failure."""
        event = AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a parse and pass it to every event it emits.
    """
    return uuid4()
