"""
Clock and Day Keys

Every ledger bucket is identified by a day key: the local calendar
date of a moment, formatted as YYYY-MM-DD.

DESIGN DECISION: Nothing in the ledger reads the wall clock directly.
The current time comes from a Clock object that is passed in, so day
rollover is deterministic in tests (use FixedClock).
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Union


DAY_KEY_FORMAT = "%Y-%m-%d"


def day_key(value: Union[datetime, date, str]) -> str:
    """
    Derive a day key from a moment, a date or an existing key.

    Aware datetimes are converted to the local timezone first, so two
    moments share a key iff they fall on the same local calendar day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return parse_day_key(value).isoformat()


def parse_day_key(key: str) -> date:
    """Parse a YYYY-MM-DD key. Raises ValueError on malformed keys."""
    return datetime.strptime(key.strip(), DAY_KEY_FORMAT).date()


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Current moment as a timezone-aware datetime."""
        pass

    def today_key(self) -> str:
        """Day key for the current moment."""
        return day_key(self.now())

    def timestamp(self) -> str:
        """ISO-8601 timestamp for the current moment."""
        return self.now().isoformat()


class SystemClock(Clock):
    """Wall clock in the local timezone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock(Clock):
    """
    A clock that only moves when told to.

    Usage:
        clock = FixedClock(datetime(2024, 1, 1, 9, 0))
        clock.advance(hours=20)  # now on 2024-01-02
    """

    def __init__(self, moment: datetime):
        if moment.tzinfo is None:
            moment = moment.astimezone()
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def advance(self, **kwargs) -> datetime:
        """Move forward by a timedelta built from kwargs."""
        self._moment = self._moment + timedelta(**kwargs)
        return self._moment

    def set(self, moment: datetime) -> None:
        if moment.tzinfo is None:
            moment = moment.astimezone()
        self._moment = moment
