"""
Audit Models for Voice Expense

Every transcript that passes through the parser leaves a trail:
what was heard, what was extracted, and whether the user will be asked
to confirm. This provides:
1. Debugging information when a transcript is misread
2. A record of voice history alongside saved expenses
3. The ability to replay a transcript and compare results

DESIGN DECISION: Audit events carry the IDs and timestamps.
ParsedExpense itself stays reproducible.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Free-text path
    TRANSCRIPT_RECEIVED = "transcript_received"
    EXPENSE_PARSED = "expense_parsed"
    AMOUNT_MISSING = "amount_missing"

    # Deep-link path
    INTENT_APPLIED = "intent_applied"

    # Hand-off to the UI
    CONFIRMATION_REQUIRED = "confirmation_required"
    AUTO_SAVE_ELIGIBLE = "auto_save_eligible"

    # Validation
    VALIDATION_FAILED = "validation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Events from one parse share a correlation_id.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one parse"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transcript_received(transcript, correlation_id)
        event = AuditEventBuilder.expense_parsed(expense, correlation_id)
    """

    @staticmethod
    def transcript_received(
        transcript: str,
        default_currency: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSCRIPT_RECEIVED,
            correlation_id=correlation_id,
            description=f"Transcript received ({len(transcript)} chars)",
            details={
                "transcript": transcript,
                "default_currency": default_currency,
            },
        )

    @staticmethod
    def expense_parsed(
        amount: Optional[str],
        currency: str,
        category: str,
        merchant: Optional[str],
        confidence: float,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_PARSED,
            correlation_id=correlation_id,
            description=f"Expense parsed with {confidence:.0%} confidence",
            details={
                "amount": amount,
                "currency": currency,
                "category": category,
                "merchant": merchant,
                "confidence": confidence,
            },
        )

    @staticmethod
    def amount_missing(
        transcript: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_MISSING,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="No amount could be extracted from the transcript",
            details={
                "transcript": transcript,
            },
        )

    @staticmethod
    def intent_applied(
        supplied_fields: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INTENT_APPLIED,
            correlation_id=correlation_id,
            description=f"Assistant intent supplied {len(supplied_fields)} fields",
            details={
                "supplied_fields": supplied_fields,
            },
        )

    @staticmethod
    def confirmation_decided(
        confidence: float,
        threshold: float,
        requires_confirmation: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        if requires_confirmation:
            return AuditEvent(
                event_type=AuditEventType.CONFIRMATION_REQUIRED,
                correlation_id=correlation_id,
                description=f"Confirmation required ({confidence:.0%} < {threshold:.0%})",
                details={
                    "confidence": confidence,
                    "threshold": threshold,
                },
            )
        return AuditEvent(
            event_type=AuditEventType.AUTO_SAVE_ELIGIBLE,
            correlation_id=correlation_id,
            description=f"Eligible for auto-save ({confidence:.0%} >= {threshold:.0%})",
            details={
                "confidence": confidence,
                "threshold": threshold,
            },
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Validation failed with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )
