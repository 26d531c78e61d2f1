"""
Persistence Gateway

DESIGN DECISION: Storage problems are never fatal.
- A failed load starts the session with an empty ledger and the
  default goal.
- A failed save keeps the in-memory ledger as the source of truth for
  the rest of the session.
Both are logged so nothing fails silently.
"""

from typing import Optional

from hydration.audit import AuditLogger
from hydration.ledger import Ledger
from hydration.migration import migrate_state_report
from hydration.models.audit import AuditEventBuilder
from hydration.models.ledger import DEFAULT_GOAL_ML, PersistedState
from hydration.services.storage import StateStorageInterface, StorageError


class PersistenceGateway:
    """Best-effort load/save of the {goal, history} document."""

    def __init__(
        self,
        storage: StateStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        default_goal: int = DEFAULT_GOAL_ML,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._default_goal = default_goal

    def load(self) -> PersistedState:
        """
        Load and migrate the stored state.

        Never raises. Returns an empty state with the default goal when
        nothing is stored or the backend fails.
        """
        try:
            raw = self._storage.load()
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.load_failed(str(e)))
            return PersistedState(goal=self._default_goal)

        if raw is None:
            return PersistedState(goal=self._default_goal)

        state, coerced = migrate_state_report(raw, self._default_goal)

        for note in coerced:
            self._audit_logger.log(
                AuditEventBuilder.migration_coerced(note.day_key, note.raw_type, note.total)
            )
        self._audit_logger.log(AuditEventBuilder.state_loaded(len(state.history), state.goal))
        return state

    def save(self, goal: int, ledger: Ledger) -> bool:
        """
        Write the full snapshot.

        Returns:
            True if the backend accepted the write
        """
        document = {"goal": goal, "history": ledger.to_history()}
        try:
            self._storage.save(document)
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.save_failed(str(e)))
            return False
        return True
