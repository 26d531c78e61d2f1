"""
Reporting Views

DESIGN DECISION: Reporting is READ-ONLY and DETERMINISTIC.
Everything here derives display values from the ledger on demand.
Nothing here mutates the ledger, and every function is total: sparse
or empty ledgers produce zeros, never errors.
"""

from datetime import date, timedelta
from typing import Any, Optional, Union

from hydration.clock import Clock, SystemClock, day_key, parse_day_key
from hydration.ledger import Ledger
from hydration.models.ledger import (
    DEFAULT_GOAL_ML,
    DailyTotal,
    HistoryRow,
    normalize_goal,
    round_half_up,
)


def today_progress(
    ledger: Ledger,
    goal: Any,
    today: Optional[str] = None,
) -> int:
    """
    Percentage of the goal reached today, capped to [0, 100].

    A goal that is not a positive finite number is replaced by the
    default goal before dividing.
    """
    goal = normalize_goal(goal, DEFAULT_GOAL_ML)
    today = today or SystemClock().today_key()
    ratio = min(1.0, ledger.total_for(today) / goal)
    return round_half_up(ratio * 100)


def trailing_days(
    ledger: Ledger,
    n: int,
    reference_date: Union[date, str],
    clock: Optional[Clock] = None,
) -> list[DailyTotal]:
    """
    Totals for the n calendar days ending at reference_date, oldest first.

    Always returns exactly n entries (none when n <= 0). Days missing
    from the ledger count as 0. A malformed reference key falls back to
    today on the given clock (the system clock by default).
    """
    try:
        end = parse_day_key(day_key(reference_date))
    except (AttributeError, ValueError):
        end = parse_day_key((clock or SystemClock()).today_key())
    out = []
    for offset in range(n - 1, -1, -1):
        key = (end - timedelta(days=offset)).isoformat()
        out.append(DailyTotal(date=key, amount=ledger.total_for(key)))
    return out


def history_rows(ledger: Ledger, goal: Any) -> list[HistoryRow]:
    """
    One row per recorded day, newest first, with its share of the goal.

    The share is not capped, so days over the goal show more than 100%.
    """
    goal = normalize_goal(goal, DEFAULT_GOAL_ML)
    rows = []
    for key in ledger.days_descending():
        total = ledger.total_for(key)
        rows.append(HistoryRow(
            date=key,
            total=total,
            share_percent=round_half_up(total / goal * 100),
        ))
    return rows


def liters(total_ml: int) -> float:
    """Milliliters as liters, two decimals."""
    return round(total_ml / 1000, 2)
