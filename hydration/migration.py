"""
Migration Engine

Converts any previously persisted history into the canonical
{day_key: DayEntry} shape. Runs once at load time.

Recognized day shapes:
1. A bare number (totals-only history). A positive total becomes one
   placeholder "Import" event whose id is derived from the date.
2. The canonical {"total", "events"} mapping, or a DayEntry. Passed through.
3. The older {"amount", "events"} mapping. Its events are replayed with
   removals clamped, and the total is rebuilt from the replay.
4. Anything else. Coerced to a number if possible, 0 otherwise, no events.

Migration is pure and idempotent: migrating its own output (or the JSON
dump of its output) yields the same result.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional

from pydantic import ValidationError

from hydration.identifiers import import_event_id
from hydration.models.ledger import (
    DEFAULT_GOAL_ML,
    DayEntry,
    IntakeEvent,
    InvalidAmountError,
    PersistedState,
    normalize_goal,
    validate_amount,
)


IMPORT_LABEL = "Import"


class CoercedEntry(NamedTuple):
    """A day whose stored value was not in a recognized shape."""
    day_key: str
    raw_type: str
    total: int


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_total(value: Any) -> int:
    try:
        return max(0, validate_amount(value))
    except InvalidAmountError:
        return 0


def _from_number(day_key: str, value: Any) -> DayEntry:
    total = _coerce_total(value)
    events = []
    if total > 0:
        events.append(IntakeEvent(
            id=import_event_id(day_key),
            amount=total,
            label=IMPORT_LABEL,
            time=day_key,
        ))
    return DayEntry(total=total, events=events)


def _with_string_id(raw: Any) -> Any:
    if isinstance(raw, Mapping) and _is_number(raw.get("id")):
        return {**raw, "id": str(raw["id"])}
    return raw


def _legacy_event(raw: Any) -> Optional[IntakeEvent]:
    if not isinstance(raw, Mapping):
        return None
    try:
        return IntakeEvent(
            id=str(raw.get("id", "")),
            amount=validate_amount(raw.get("amount")),
            label=str(raw.get("label") or ""),
            time=str(raw.get("time", "")),
        )
    except (InvalidAmountError, ValidationError):
        return None


def _replay_legacy(day_key: str, value: Mapping) -> tuple[DayEntry, Optional[CoercedEntry]]:
    """
    Rebuild an older {"amount", "events"} day by replaying its events.

    The older tracker stored removals unclamped, so each removal is cut
    down to what was actually available and the total is the sum of the
    replayed deltas. Removals with nothing left to remove are dropped.
    """
    stored = _coerce_total(value["amount"])
    if not value["events"]:
        return _from_number(day_key, stored), None

    total = 0
    kept = []
    changed = False
    for raw in value["events"]:
        event = _legacy_event(raw)
        if event is None:
            changed = True
            continue
        if event.amount < 0:
            can_remove = min(-event.amount, total)
            if can_remove <= 0:
                changed = True
                continue
            if can_remove != -event.amount:
                event = event.model_copy(update={"amount": -can_remove})
                changed = True
            total -= can_remove
        else:
            total += event.amount
        kept.append(event)

    note = None
    if changed or total != stored:
        note = CoercedEntry(day_key, "events", total)
    return DayEntry(total=total, events=kept), note


def _migrate_entry(day_key: str, value: Any) -> tuple[DayEntry, Optional[CoercedEntry]]:
    if isinstance(value, DayEntry):
        return value.model_copy(deep=True), None

    if _is_number(value):
        return _from_number(day_key, value), None

    if isinstance(value, Mapping) and isinstance(value.get("events"), list):
        if _is_number(value.get("total")):
            total = _coerce_total(value["total"])
            events = [_with_string_id(raw) for raw in value["events"]]
            try:
                return DayEntry.model_validate({"total": total, "events": events}), None
            except ValidationError:
                # Keep the total, drop the unreadable event detail
                return DayEntry(total=total), CoercedEntry(day_key, "events", total)

        if _is_number(value.get("amount")):
            return _replay_legacy(day_key, value)

    total = _coerce_total(value)
    return DayEntry(total=total), CoercedEntry(day_key, type(value).__name__, total)


def migrate_history_report(raw: Any) -> tuple[dict[str, DayEntry], list[CoercedEntry]]:
    """
    Migrate a raw history mapping and report entries that needed coercion.

    Returns:
        (history, coerced_entries)
    """
    if raw is None:
        return {}, []
    if not isinstance(raw, Mapping):
        return {}, [CoercedEntry("*", type(raw).__name__, 0)]

    history: dict[str, DayEntry] = {}
    coerced: list[CoercedEntry] = []
    for day_key, value in raw.items():
        entry, note = _migrate_entry(str(day_key), value)
        history[str(day_key)] = entry
        if note is not None:
            coerced.append(note)
    return history, coerced


def migrate_history(raw: Any) -> dict[str, DayEntry]:
    """Migrate a raw history mapping into the canonical shape."""
    history, _ = migrate_history_report(raw)
    return history


def migrate_state_report(
    raw: Any,
    default_goal: int = DEFAULT_GOAL_ML,
) -> tuple[PersistedState, list[CoercedEntry]]:
    """
    Migrate a whole stored document ({"goal", "history"}).

    A missing or invalid goal is replaced by the default goal.
    """
    if isinstance(raw, PersistedState):
        return raw.model_copy(deep=True), []
    if raw is None:
        return PersistedState(goal=default_goal), []
    if not isinstance(raw, Mapping):
        return PersistedState(goal=default_goal), [CoercedEntry("*", type(raw).__name__, 0)]

    history, coerced = migrate_history_report(raw.get("history"))
    state = PersistedState(
        goal=normalize_goal(raw.get("goal"), default_goal),
        history=history,
    )
    return state, coerced


def migrate_state(raw: Any, default_goal: int = DEFAULT_GOAL_ML) -> PersistedState:
    """Migrate a whole stored document into a PersistedState."""
    state, _ = migrate_state_report(raw, default_goal)
    return state
