"""
Core Data Models for Hydration Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the ledger invariants at runtime (totals are never negative)
2. Be serializable for storage and logging
3. Match the persisted JSON document field for field

DESIGN DECISION: Events are frozen. Once an intake is recorded it is
never edited, only undone. A day's total is the sum of the deltas that
were actually applied, and every applied delta is an event.
"""

import math
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


DEFAULT_GOAL_ML = 2000


class InvalidAmountError(ValueError):
    """Intake amount is not a finite number."""
    pass


class InvalidGoalError(ValueError):
    """Daily goal is not a positive finite number."""
    pass


# =============================================================================
# LEDGER MODELS
# =============================================================================

class IntakeEvent(BaseModel):
    """
    One intake or removal action.

    A removal carries the negative delta that was actually applied,
    which can be smaller in magnitude than what was requested.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique event identifier"
    )
    amount: int = Field(
        ...,
        description="Applied delta in ml (negative for removals)"
    )
    label: str = Field(
        default="",
        description="Display label"
    )
    time: str = Field(
        ...,
        description="ISO-8601 timestamp of the action"
    )

    @property
    def is_removal(self) -> bool:
        return self.amount < 0


class DayEntry(BaseModel):
    """
    All intake for one calendar day.

    CRITICAL: total is never negative. Assignments are validated, so a
    bug that tries to store a negative total fails loudly instead of
    being persisted.
    """
    model_config = ConfigDict(validate_assignment=True)

    total: int = Field(
        default=0,
        ge=0,
        description="Running total for the day in ml"
    )
    events: list[IntakeEvent] = Field(
        default_factory=list,
        description="Events in chronological order"
    )

    @property
    def is_empty(self) -> bool:
        """True when the day carries nothing worth keeping."""
        return not self.events and self.total == 0


class PersistedState(BaseModel):
    """The stored document: daily goal plus the full history."""

    goal: int = Field(
        default=DEFAULT_GOAL_ML,
        gt=0,
        description="Daily goal in ml"
    )
    history: dict[str, DayEntry] = Field(
        default_factory=dict,
        description="Day key -> day entry"
    )

    def to_document(self) -> dict:
        """JSON-ready dict in the persisted shape."""
        return self.model_dump(mode="json")


# =============================================================================
# REPORTING MODELS
# =============================================================================

class DailyTotal(BaseModel):
    """One point of the trailing chart."""

    date: str
    amount: int = Field(ge=0)


class HistoryRow(BaseModel):
    """One row of the history table."""

    date: str
    total: int = Field(ge=0)
    share_percent: int = Field(
        ge=0,
        description="Share of the goal, not capped at 100"
    )


# =============================================================================
# NORMALIZATION
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest int, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def _to_finite_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Booleans are not numbers: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty string is not a number")
        number = float(text)
    else:
        raise ValueError(f"Not a number: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def validate_amount(value: Any) -> int:
    """
    Coerce an intake amount to whole milliliters.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return round_half_up(_to_finite_number(value))
    except ValueError as e:
        raise InvalidAmountError(str(e)) from e


def validate_goal(value: Any) -> int:
    """
    Coerce a daily goal to a positive whole number of milliliters.

    Raises:
        InvalidGoalError: If the value is not a positive finite number
    """
    if isinstance(value, int) and not isinstance(value, bool):
        goal = value
    else:
        try:
            goal = round_half_up(_to_finite_number(value))
        except ValueError as e:
            raise InvalidGoalError(str(e)) from e
    if goal <= 0:
        raise InvalidGoalError(f"Goal must be positive, got {value!r}")
    return goal


def normalize_goal(value: Any, default: int = DEFAULT_GOAL_ML) -> int:
    """Validated goal, or the default when the value is missing or invalid."""
    try:
        return validate_goal(value)
    except InvalidGoalError:
        return default
