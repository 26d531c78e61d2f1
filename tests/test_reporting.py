"""Tests for the read-only reporting views."""

from datetime import date, datetime

import pytest

from hydration.ledger import Ledger
from hydration.queries import history_rows, liters, today_progress, trailing_days

TODAY = "2024-01-15"


class TestTodayProgress:
    """Tests for today_progress."""

    def test_empty_day_is_zero(self, ledger):
        assert today_progress(ledger, 2000, today=TODAY) == 0

    def test_half_way(self, ledger):
        ledger.record_intake(TODAY, 1000)
        assert today_progress(ledger, 2000, today=TODAY) == 50

    def test_rounds_half_up(self, ledger):
        ledger.record_intake(TODAY, 125)
        assert today_progress(ledger, 1000, today=TODAY) == 13

    def test_capped_at_100(self, ledger):
        ledger.record_intake(TODAY, 10000)
        assert today_progress(ledger, 2000, today=TODAY) == 100

    @pytest.mark.parametrize("goal", [0, -500, None, float("nan")])
    def test_invalid_goal_uses_default(self, ledger, goal):
        ledger.record_intake(TODAY, 1000)
        assert today_progress(ledger, goal, today=TODAY) == 50

    def test_only_today_counts(self, ledger):
        ledger.record_intake("2024-01-14", 2000)
        assert today_progress(ledger, 2000, today=TODAY) == 0

    def test_does_not_mutate(self, ledger):
        ledger.record_intake(TODAY, 500)
        before = ledger.to_history()
        today_progress(ledger, 2000, today=TODAY)
        assert ledger.to_history() == before


class TestTrailingDays:
    """Tests for trailing_days."""

    def test_empty_ledger_gives_n_zeros(self):
        days = trailing_days(Ledger(), 7, TODAY)
        assert len(days) == 7
        assert [d.amount for d in days] == [0] * 7
        assert days[0].date == "2024-01-09"
        assert days[-1].date == TODAY

    def test_sparse_ledger(self, ledger):
        ledger.record_intake("2024-01-13", 800)
        ledger.record_intake(TODAY, 250)
        ledger.record_intake("2023-12-01", 999)  # outside the window
        days = trailing_days(ledger, 3, TODAY)
        assert [(d.date, d.amount) for d in days] == [
            ("2024-01-13", 800),
            ("2024-01-14", 0),
            ("2024-01-15", 250),
        ]

    @pytest.mark.parametrize("n", [1, 7, 30, 366])
    def test_always_exactly_n(self, ledger, n):
        for key in ("2024-01-01", "2024-01-10", TODAY):
            ledger.record_intake(key, 100)
        assert len(trailing_days(ledger, n, TODAY)) == n

    def test_zero_or_negative_n_is_empty(self, ledger):
        assert trailing_days(ledger, 0, TODAY) == []
        assert trailing_days(ledger, -3, TODAY) == []

    def test_accepts_date_objects_across_leap_day(self):
        days = trailing_days(Ledger(), 3, date(2024, 3, 1))
        assert [d.date for d in days] == ["2024-02-28", "2024-02-29", "2024-03-01"]

    def test_accepts_datetime(self):
        days = trailing_days(Ledger(), 1, datetime(2024, 1, 15, 23, 59))
        assert days[0].date == TODAY

    def test_oldest_first_across_month_boundary(self):
        days = trailing_days(Ledger(), 2, "2024-02-01")
        assert [d.date for d in days] == ["2024-01-31", "2024-02-01"]

    @pytest.mark.parametrize("reference", ["2024-01-15x", "yesterday", "", None])
    def test_malformed_reference_falls_back_to_today(self, ledger, clock, reference):
        ledger.record_intake(TODAY, 250)
        days = trailing_days(ledger, 2, reference, clock=clock)
        assert [(d.date, d.amount) for d in days] == [("2024-01-14", 0), (TODAY, 250)]


class TestHistoryRows:
    """Tests for history_rows."""

    def test_newest_first_with_uncapped_share(self, ledger):
        ledger.record_intake("2024-01-14", 3000)
        ledger.record_intake(TODAY, 500)
        rows = history_rows(ledger, 2000)
        assert [(r.date, r.total, r.share_percent) for r in rows] == [
            (TODAY, 500, 25),
            ("2024-01-14", 3000, 150),
        ]

    def test_empty_ledger(self):
        assert history_rows(Ledger(), 2000) == []


class TestLiters:
    def test_liters(self):
        assert liters(1250) == 1.25
        assert liters(0) == 0.0
