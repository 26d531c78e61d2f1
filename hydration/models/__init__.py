"""
Data Models Package

This package contains all Pydantic models used in the Hydration Tracker.
All data flowing through the system must conform to these schemas.
"""

from hydration.models.ledger import (
    DEFAULT_GOAL_ML,
    DailyTotal,
    DayEntry,
    HistoryRow,
    IntakeEvent,
    InvalidAmountError,
    InvalidGoalError,
    PersistedState,
    normalize_goal,
    round_half_up,
    validate_amount,
    validate_goal,
)
from hydration.models.audit import (
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    LedgerAuditEvent,
)

__all__ = [
    # Ledger models
    "DEFAULT_GOAL_ML",
    "DailyTotal",
    "DayEntry",
    "HistoryRow",
    "IntakeEvent",
    "InvalidAmountError",
    "InvalidGoalError",
    "PersistedState",
    "normalize_goal",
    "round_half_up",
    "validate_amount",
    "validate_goal",
    # Audit models
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    "LedgerAuditEvent",
]
