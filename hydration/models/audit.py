"""
Audit Models for Hydration Tracker

Every change to the ledger is described by an audit event and written
to the structured log. This provides:
1. Traceability of every intake, removal, undo and reset
2. Debugging information when totals look wrong
3. Visibility into storage failures that the app otherwise survives

DESIGN DECISION: Audit events go to the log only. The ledger itself is
the durable record of what happened to each day.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from hydration.models.ledger import IntakeEvent


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    INTAKE_RECORDED = "intake_recorded"
    INTAKE_REMOVED = "intake_removed"
    REMOVAL_IGNORED = "removal_ignored"
    INVALID_AMOUNT = "invalid_amount"
    EVENT_UNDONE = "event_undone"
    DAY_RESET = "day_reset"

    # Goal
    GOAL_UPDATED = "goal_updated"
    GOAL_REJECTED = "goal_rejected"

    # Persistence
    STATE_LOADED = "state_loaded"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"
    MIGRATION_COERCED = "migration_coerced"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerAuditEvent(BaseModel):
    """A single audit event."""

    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Which day and which ledger event this is about
    day_key: Optional[str] = None
    event_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "day_key": self.day_key,
            "event_id": self.event_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.intake_recorded(day_key, intake_event)
        event = AuditEventBuilder.save_failed(error_message)
    """

    @staticmethod
    def intake_recorded(day_key: str, event: IntakeEvent, total: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.INTAKE_RECORDED,
            day_key=day_key,
            event_id=event.id,
            description=f"Recorded {event.amount} ml",
            details={"amount": event.amount, "label": event.label, "total": total},
        )

    @staticmethod
    def intake_removed(
        day_key: str,
        event: IntakeEvent,
        requested: int,
        total: int,
    ) -> LedgerAuditEvent:
        applied = -event.amount
        return LedgerAuditEvent(
            event_type=AuditEventType.INTAKE_REMOVED,
            day_key=day_key,
            event_id=event.id,
            description=f"Removed {applied} ml (requested {requested} ml)",
            details={
                "requested": requested,
                "applied": applied,
                "clamped": applied != requested,
                "total": total,
            },
        )

    @staticmethod
    def removal_ignored(day_key: str, requested: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.REMOVAL_IGNORED,
            severity=AuditSeverity.DEBUG,
            day_key=day_key,
            description=f"Nothing to remove for {requested} ml request",
            details={"requested": requested},
        )

    @staticmethod
    def invalid_amount(day_key: str, value: Any, error_message: str) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.INVALID_AMOUNT,
            severity=AuditSeverity.WARNING,
            day_key=day_key,
            description="Ignored intake with invalid amount",
            details={"value": repr(value)},
            error_message=error_message,
        )

    @staticmethod
    def event_undone(day_key: str, event: IntakeEvent, total: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.EVENT_UNDONE,
            day_key=day_key,
            event_id=event.id,
            description=f"Undid {event.amount} ml",
            details={"amount": event.amount, "total": total},
        )

    @staticmethod
    def day_reset(day_key: str, discarded_events: int, discarded_total: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.DAY_RESET,
            severity=AuditSeverity.WARNING,
            day_key=day_key,
            description=f"Day reset, {discarded_events} events discarded",
            details={
                "discarded_events": discarded_events,
                "discarded_total": discarded_total,
            },
        )

    @staticmethod
    def goal_updated(old_goal: int, new_goal: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.GOAL_UPDATED,
            description=f"Goal changed from {old_goal} ml to {new_goal} ml",
            details={"old_goal": old_goal, "new_goal": new_goal},
        )

    @staticmethod
    def goal_rejected(value: Any, error_message: str) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.GOAL_REJECTED,
            severity=AuditSeverity.WARNING,
            description="Rejected invalid goal",
            details={"value": repr(value)},
            error_message=error_message,
        )

    @staticmethod
    def state_loaded(days: int, goal: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            description=f"Loaded {days} days of history",
            details={"days": days, "goal": goal},
        )

    @staticmethod
    def load_failed(error_message: str) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not load saved state, starting empty",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(error_message: str) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not save state, keeping changes in memory",
            error_message=error_message,
        )

    @staticmethod
    def migration_coerced(day_key: str, raw_type: str, total: int) -> LedgerAuditEvent:
        return LedgerAuditEvent(
            event_type=AuditEventType.MIGRATION_COERCED,
            severity=AuditSeverity.WARNING,
            day_key=day_key,
            description=f"Coerced unrecognized {raw_type} entry to {total} ml",
            details={"raw_type": raw_type, "total": total},
        )
