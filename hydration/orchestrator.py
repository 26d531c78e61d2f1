"""
Main Orchestrator for Hydration Tracker

This module ties together all the components and defines the session
lifecycle:
1. Load (storage -> migration -> ledger + goal), once at startup
2. Mutate (ledger operation -> save full snapshot), on every change
3. Read (reporting views over the ledger), on demand

DESIGN DECISION: The session owns its ledger, goal, clock and storage
explicitly. Nothing is saved implicitly; every mutation method saves
right after the ledger changes, and a failed save never undoes the
in-memory change.
"""

from pathlib import Path
from typing import Any, Optional

import structlog

from hydration.audit import AuditLogger, configure_logging
from hydration.clock import Clock, SystemClock
from hydration.config import TrackerSettings, get_settings
from hydration.identifiers import new_event_id
from hydration.ledger import Ledger
from hydration.models.audit import AuditEventBuilder
from hydration.models.ledger import (
    DEFAULT_GOAL_ML,
    DailyTotal,
    DayEntry,
    HistoryRow,
    IntakeEvent,
    InvalidGoalError,
    validate_goal,
)
from hydration.queries import history_rows, today_progress, trailing_days
from hydration.services.persistence import PersistenceGateway
from hydration.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    StateStorageInterface,
)


DEFAULT_REMOVAL_ML = 250
DEFAULT_WINDOW_DAYS = 7


class TrackerSession:
    """
    One running tracker: a ledger, a goal and their persistence.

    All day-scoped operations act on today's key from the clock, so
    day rollover follows the clock and is testable with FixedClock.
    """

    def __init__(
        self,
        ledger: Ledger,
        gateway: PersistenceGateway,
        goal: int = DEFAULT_GOAL_ML,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        self._ledger = ledger
        self._gateway = gateway
        self._goal = validate_goal(goal)
        self._clock = clock or SystemClock()
        self._audit_logger = audit_logger or AuditLogger()
        self._window_days = window_days
        self.last_save_ok = True

    @classmethod
    def load(
        cls,
        gateway: PersistenceGateway,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
        id_factory=new_event_id,
    ) -> "TrackerSession":
        """Build a session from whatever the gateway can load."""
        clock = clock or SystemClock()
        audit_logger = audit_logger or AuditLogger()
        state = gateway.load()
        ledger = Ledger(
            days=state.history,
            clock=clock,
            id_factory=id_factory,
            audit_logger=audit_logger,
        )
        return cls(
            ledger=ledger,
            gateway=gateway,
            goal=state.goal,
            clock=clock,
            audit_logger=audit_logger,
            window_days=window_days,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def goal(self) -> int:
        return self._goal

    @property
    def today_key(self) -> str:
        return self._clock.today_key()

    # -------------------------------------------------------------------------
    # Mutations (each one saves)
    # -------------------------------------------------------------------------

    def add_intake(self, amount: Any, label: Optional[str] = None) -> Optional[IntakeEvent]:
        """Record an intake (or removal, for negative amounts) for today."""
        event = self._ledger.record_intake(self.today_key, amount, label)
        if event is not None:
            self._save()
        return event

    def remove_intake(
        self,
        amount: int = DEFAULT_REMOVAL_ML,
        label: Optional[str] = None,
    ) -> Optional[IntakeEvent]:
        """Remove up to `amount` ml from today's total."""
        return self.add_intake(-abs(amount), label)

    def undo_last(self) -> Optional[IntakeEvent]:
        event = self._ledger.undo_last(self.today_key)
        if event is not None:
            self._save()
        return event

    def reset_today(self) -> None:
        self._ledger.reset_day(self.today_key)
        self._save()

    def set_goal(self, value: Any) -> bool:
        """
        Change the daily goal.

        Invalid goals are rejected and the current goal is kept.

        Returns:
            True if the goal was accepted
        """
        try:
            goal = validate_goal(value)
        except InvalidGoalError as e:
            self._audit_logger.log(AuditEventBuilder.goal_rejected(value, str(e)))
            return False

        old_goal, self._goal = self._goal, goal
        self._audit_logger.log(AuditEventBuilder.goal_updated(old_goal, goal))
        self._save()
        return True

    def save(self) -> bool:
        """Write the current snapshot explicitly."""
        return self._save()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def today_entry(self) -> DayEntry:
        return self._ledger.get_day(self.today_key)

    def today_total(self) -> int:
        return self._ledger.total_for(self.today_key)

    def progress(self) -> int:
        return today_progress(self._ledger, self._goal, self.today_key)

    def last_days(self, n: Optional[int] = None) -> list[DailyTotal]:
        return trailing_days(
            self._ledger,
            self._window_days if n is None else n,
            self.today_key,
            clock=self._clock,
        )

    def history(self) -> list[HistoryRow]:
        return history_rows(self._ledger, self._goal)

    def _save(self) -> bool:
        self.last_save_ok = self._gateway.save(self._goal, self._ledger)
        return self.last_save_ok


def create_app_components(
    settings: Optional[TrackerSettings] = None,
    use_storage: bool = True,
    clock: Optional[Clock] = None,
) -> tuple[TrackerSession, StateStorageInterface]:
    """
    Factory function to create a ready-to-use session.

    Args:
        settings: Settings to use. Defaults to get_settings().
        use_storage: Whether to use the JSON file storage.
                    Set to False for a purely in-memory session.

    Returns:
        (session, storage)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger = structlog.get_logger("hydration")

    storage: StateStorageInterface
    path = Path(settings.storage_path).expanduser()
    if use_storage and not path.is_dir():
        storage = JsonFileStorage(path)
    else:
        if use_storage:
            # Storage not usable - continue in memory
            logger.warning("storage_not_configured", path=str(path), reason="path is a directory")
        storage = InMemoryStorage()

    audit_logger = AuditLogger()
    gateway = PersistenceGateway(
        storage,
        audit_logger=audit_logger,
        default_goal=settings.default_goal_ml,
    )
    session = TrackerSession.load(
        gateway,
        clock=clock,
        audit_logger=audit_logger,
        window_days=settings.history_window_days,
    )
    return session, storage
