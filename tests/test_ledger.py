"""Tests for the event-sourced daily ledger."""

import random

import pytest

from hydration.audit import AuditLogger
from hydration.ledger import Ledger
from hydration.models.ledger import DayEntry

TODAY = "2024-01-15"


class TestRecordIntake:
    """Tests for Ledger.record_intake."""

    def test_positive_intake_creates_day(self, ledger):
        event = ledger.record_intake(TODAY, 250)
        assert event is not None
        assert event.amount == 250
        assert event.label == "250 ml"
        day = ledger.get_day(TODAY)
        assert day.total == 250
        assert day.events == [event]
        assert ledger.all_days() == {TODAY}

    def test_custom_label(self, ledger):
        event = ledger.record_intake(TODAY, 250, "Glass 250 ml")
        assert event.label == "Glass 250 ml"

    def test_event_id_and_time_come_from_injected_sources(self, ledger, clock):
        first = ledger.record_intake(TODAY, 100)
        second = ledger.record_intake(TODAY, 200)
        assert first.id == "evt-1"
        assert second.id == "evt-2"
        assert first.time == clock.now().isoformat()

    def test_default_ids_are_unique(self, clock):
        ledger = Ledger(clock=clock)
        ids = {ledger.record_intake(TODAY, 10).id for _ in range(50)}
        assert len(ids) == 50

    def test_events_keep_insertion_order(self, ledger):
        for amount in (100, 200, -50, 300):
            ledger.record_intake(TODAY, amount)
        assert [e.amount for e in ledger.get_day(TODAY).events] == [100, 200, -50, 300]
        assert ledger.get_day(TODAY).total == 550

    def test_removal_within_total(self, ledger):
        ledger.record_intake(TODAY, 500)
        event = ledger.record_intake(TODAY, -200)
        assert event.amount == -200
        assert event.label == "Remove 200 ml"
        assert ledger.get_day(TODAY).total == 300

    def test_removal_is_clamped_to_total(self, ledger):
        """Given total 100, removing 250 records exactly -100."""
        ledger.record_intake(TODAY, 100)
        event = ledger.record_intake(TODAY, -250)
        assert event.amount == -100
        assert ledger.get_day(TODAY).total == 0

    def test_removal_with_nothing_to_remove_is_noop(self, ledger):
        """Removing from an empty day creates no event."""
        assert ledger.record_intake(TODAY, -50) is None
        assert ledger.get_day(TODAY) == DayEntry()
        assert TODAY not in ledger.all_days()

    def test_removal_from_zero_total_day_keeps_events(self, ledger):
        ledger.record_intake(TODAY, 100)
        ledger.record_intake(TODAY, -100)
        before = ledger.get_day(TODAY)
        assert ledger.record_intake(TODAY, -50) is None
        assert ledger.get_day(TODAY) == before

    def test_zero_amount_is_recorded(self, ledger):
        event = ledger.record_intake(TODAY, 0)
        assert event.amount == 0
        assert event.label == "0 ml"
        assert ledger.get_day(TODAY).total == 0

    @pytest.mark.parametrize("amount", [None, "abc", float("nan"), float("inf"), True])
    def test_invalid_amount_is_noop(self, ledger, amount):
        assert ledger.record_intake(TODAY, amount) is None
        assert ledger.all_days() == set()

    def test_float_amount_is_rounded(self, ledger):
        event = ledger.record_intake(TODAY, 249.6)
        assert event.amount == 250

    def test_total_never_negative(self, ledger):
        """Random sequences of intakes and removals keep totals >= 0."""
        rng = random.Random(1234)
        for _ in range(500):
            amount = rng.randint(-1000, 600)
            ledger.record_intake(TODAY, amount)
            day = ledger.get_day(TODAY)
            assert day.total >= 0
            assert day.total == sum(e.amount for e in day.events)

    def test_days_are_independent(self, ledger):
        ledger.record_intake("2024-01-14", 1000)
        assert ledger.record_intake(TODAY, -500) is None
        assert ledger.get_day("2024-01-14").total == 1000


class TestUndoLast:
    """Tests for Ledger.undo_last."""

    def test_undo_on_empty_day_is_noop(self, ledger):
        assert ledger.undo_last(TODAY) is None
        assert ledger.all_days() == set()

    def test_undo_single_intake_removes_day(self, ledger):
        ledger.record_intake(TODAY, 250)
        undone = ledger.undo_last(TODAY)
        assert undone.amount == 250
        assert TODAY not in ledger.all_days()

    @pytest.mark.parametrize("amount", [250, 0, -100, -300, -1000])
    def test_undo_restores_previous_state(self, ledger, amount):
        """record then undo is an exact inverse, clamped removals included."""
        ledger.record_intake(TODAY, 200)
        ledger.record_intake(TODAY, 100)
        before = ledger.get_day(TODAY)

        event = ledger.record_intake(TODAY, amount)
        assert event is not None
        ledger.undo_last(TODAY)

        assert ledger.get_day(TODAY) == before

    def test_undo_clamped_removal_restores_full_total(self, ledger):
        ledger.record_intake(TODAY, 100)
        ledger.record_intake(TODAY, -250)
        ledger.undo_last(TODAY)
        assert ledger.get_day(TODAY).total == 100

    def test_undo_walks_back_through_history(self, ledger):
        for amount in (300, -100, 200):
            ledger.record_intake(TODAY, amount)
        assert ledger.undo_last(TODAY).amount == 200
        assert ledger.get_day(TODAY).total == 200
        assert ledger.undo_last(TODAY).amount == -100
        assert ledger.get_day(TODAY).total == 300
        assert ledger.undo_last(TODAY).amount == 300
        assert TODAY not in ledger.all_days()

    def test_undo_keeps_day_with_remaining_events(self, ledger):
        ledger.record_intake(TODAY, 100)
        ledger.record_intake(TODAY, -100)
        ledger.undo_last(TODAY)
        assert TODAY in ledger.all_days()

    def test_undo_of_imported_day_without_events_keeps_total(self, clock):
        ledger = Ledger(days={TODAY: DayEntry(total=400)}, clock=clock)
        assert ledger.undo_last(TODAY) is None
        assert ledger.get_day(TODAY).total == 400


class TestResetAndReads:
    """Tests for reset_day and read-only access."""

    def test_reset_day_deletes_entry(self, ledger):
        ledger.record_intake(TODAY, 250)
        ledger.record_intake("2024-01-14", 500)
        ledger.reset_day(TODAY)
        assert ledger.all_days() == {"2024-01-14"}
        assert ledger.undo_last(TODAY) is None

    def test_reset_missing_day_is_noop(self, ledger):
        ledger.reset_day(TODAY)
        assert len(ledger) == 0

    def test_get_day_missing_returns_empty(self, ledger):
        assert ledger.get_day("2030-01-01") == DayEntry(total=0, events=[])

    def test_get_day_returns_copy(self, ledger):
        """Mutating a returned entry does not touch the ledger."""
        ledger.record_intake(TODAY, 250)
        day = ledger.get_day(TODAY)
        day.total = 9999
        day.events.clear()
        assert ledger.get_day(TODAY).total == 250
        assert len(ledger.get_day(TODAY).events) == 1

    def test_constructor_copies_input(self, clock):
        days = {TODAY: DayEntry(total=100)}
        ledger = Ledger(days=days, clock=clock)
        days[TODAY].total = 5
        assert ledger.total_for(TODAY) == 100

    def test_days_descending(self, ledger):
        for key in ("2024-01-13", "2024-01-15", "2024-01-14"):
            ledger.record_intake(key, 100)
        assert ledger.days_descending() == ["2024-01-15", "2024-01-14", "2024-01-13"]
        assert list(ledger) == ["2024-01-13", "2024-01-14", "2024-01-15"]

    def test_to_history_is_json_ready(self, ledger):
        ledger.record_intake(TODAY, 250)
        history = ledger.to_history()
        assert history[TODAY]["total"] == 250
        assert history[TODAY]["events"][0] == {
            "id": "evt-1",
            "amount": 250,
            "label": "250 ml",
            "time": ledger.get_day(TODAY).events[0].time,
        }

    def test_from_raw_migrates(self, clock):
        ledger = Ledger.from_raw({"2024-01-01": 500}, clock=clock)
        day = ledger.get_day("2024-01-01")
        assert day.total == 500
        assert day.events[0].label == "Import"


class TestLedgerAudit:
    """Tests that ledger operations are logged."""

    def test_operations_are_logged(self, clock, id_factory, recording_logger):
        ledger = Ledger(
            clock=clock,
            id_factory=id_factory,
            audit_logger=AuditLogger(logger=recording_logger),
        )
        ledger.record_intake(TODAY, 100)
        ledger.record_intake(TODAY, -250)
        ledger.record_intake(TODAY, -50)
        ledger.record_intake(TODAY, "abc")
        ledger.undo_last(TODAY)
        ledger.reset_day(TODAY)

        assert recording_logger.event_types() == [
            "intake_recorded",
            "intake_removed",
            "removal_ignored",
            "invalid_amount",
            "event_undone",
            "day_reset",
        ]
        levels = [level for level, _, _ in recording_logger.records]
        assert levels == ["info", "info", "debug", "warning", "info", "warning"]
