"""
Event-Sourced Daily Ledger

The ledger is the only place where days change. It is the core of the
tracker and protects these guarantees after every single operation:

1. A day's total is never negative
2. A day's total equals the sum of the deltas recorded in its events
3. Undo is the exact inverse of the last recorded event

DESIGN DECISION: Clamp, then record.
A removal is reduced to what can actually be removed BEFORE it is
recorded. The event log is therefore a truthful record of what happened
to the total, and undo never has to special-case clamped removals.

Callers never receive references into the ledger. get_day() hands out
deep copies, so mutating a returned entry cannot corrupt state.
"""

from typing import Any, Callable, Iterator, Optional

from hydration.audit import AuditLogger
from hydration.clock import Clock, SystemClock
from hydration.identifiers import new_event_id
from hydration.migration import migrate_history
from hydration.models.audit import AuditEventBuilder
from hydration.models.ledger import (
    DayEntry,
    IntakeEvent,
    InvalidAmountError,
    validate_amount,
)


class Ledger:
    """
    Mapping of day keys to day entries, mutated only through its operations.

    Not thread-safe. The UI is the sole caller and serializes interactions.

    Example:
        ledger = Ledger()
        ledger.record_intake("2024-01-01", 250)
        ledger.record_intake("2024-01-01", -400)   # clamped to -250
        ledger.undo_last("2024-01-01")              # back to 250
    """

    def __init__(
        self,
        days: Optional[dict[str, DayEntry]] = None,
        clock: Optional[Clock] = None,
        id_factory: Callable[[], str] = new_event_id,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._days: dict[str, DayEntry] = {
            key: entry.model_copy(deep=True) for key, entry in (days or {}).items()
        }
        self._clock = clock or SystemClock()
        self._id_factory = id_factory
        self._audit_logger = audit_logger

    @classmethod
    def from_raw(cls, raw_history: Any, **kwargs) -> "Ledger":
        """Build a ledger from persisted history in any known shape."""
        return cls(days=migrate_history(raw_history), **kwargs)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def record_intake(
        self,
        day_key: str,
        amount: Any,
        label: Optional[str] = None,
    ) -> Optional[IntakeEvent]:
        """
        Record an intake (amount >= 0) or a removal (amount < 0).

        Removals are clamped to the day's current total. A removal with
        nothing to remove, or an amount that is not a finite number, is
        a no-op.

        Returns:
            The recorded event, or None if nothing was recorded
        """
        try:
            amount = validate_amount(amount)
        except InvalidAmountError as e:
            self._audit(AuditEventBuilder.invalid_amount(day_key, amount, str(e)))
            return None

        entry = self._days.get(day_key)
        if entry is None:
            entry = DayEntry()

        if amount < 0:
            requested = -amount
            can_remove = min(requested, entry.total)
            if can_remove <= 0:
                self._audit(AuditEventBuilder.removal_ignored(day_key, requested))
                return None
            event = self._new_event(-can_remove, label or f"Remove {can_remove} ml")
            entry.total = max(0, entry.total - can_remove)
        else:
            requested = amount
            event = self._new_event(amount, label or f"{amount} ml")
            entry.total = entry.total + amount

        entry.events.append(event)
        self._days[day_key] = entry

        if event.is_removal:
            self._audit(AuditEventBuilder.intake_removed(day_key, event, requested, entry.total))
        else:
            self._audit(AuditEventBuilder.intake_recorded(day_key, event, entry.total))
        return event

    def undo_last(self, day_key: str) -> Optional[IntakeEvent]:
        """
        Remove the day's last event and reverse its recorded effect.

        The day is dropped from the ledger when nothing is left.

        Returns:
            The undone event, or None if the day had no events
        """
        entry = self._days.get(day_key)
        if entry is None or not entry.events:
            return None

        last = entry.events.pop()
        entry.total = max(0, entry.total - last.amount)

        if entry.is_empty:
            del self._days[day_key]

        self._audit(AuditEventBuilder.event_undone(day_key, last, entry.total))
        return last

    def reset_day(self, day_key: str) -> None:
        """Delete the day and its event history. Cannot be undone."""
        entry = self._days.pop(day_key, None)
        if entry is not None:
            self._audit(AuditEventBuilder.day_reset(day_key, len(entry.events), entry.total))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_day(self, day_key: str) -> DayEntry:
        """Copy of the day's entry; an empty entry if the day is absent."""
        entry = self._days.get(day_key)
        if entry is None:
            return DayEntry()
        return entry.model_copy(deep=True)

    def total_for(self, day_key: str) -> int:
        entry = self._days.get(day_key)
        return entry.total if entry is not None else 0

    def all_days(self) -> set[str]:
        return set(self._days)

    def days_descending(self) -> list[str]:
        """Day keys, newest first."""
        return sorted(self._days, reverse=True)

    def to_history(self) -> dict:
        """JSON-ready snapshot of every day."""
        return {key: entry.model_dump(mode="json") for key, entry in self._days.items()}

    def __contains__(self, day_key: object) -> bool:
        return day_key in self._days

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._days))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _new_event(self, amount: int, label: str) -> IntakeEvent:
        return IntakeEvent(
            id=self._id_factory(),
            amount=amount,
            label=label,
            time=self._clock.timestamp(),
        )

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)
