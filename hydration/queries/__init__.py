"""Reporting package."""

from hydration.queries.reporting import (
    history_rows,
    liters,
    today_progress,
    trailing_days,
)

__all__ = ["history_rows", "liters", "today_progress", "trailing_days"]
