"""
Clock -- injectable time source.

Responsibility:
    Services that need "now" (the report timestamp, the default report
    month) receive a Clock instead of calling ``datetime.now()``.  Tests
    pass a DeterministicClock.

Architecture position:
    Kernel > Domain.  SystemClock is the one place that reads the
    system time.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone, tzinfo


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware time."""

    def today(self) -> date:
        return self.now().date()

    def month_start(self) -> date:
        """First day of the current month; the default report month."""
        return self.today().replace(day=1)


class SystemClock(Clock):
    """Wall-clock time in ``tz`` (UTC unless given)."""

    def __init__(self, tz: tzinfo = timezone.utc):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class DeterministicClock(Clock):
    """
    Test clock that only moves when told to.

    Starts at ``fixed_time`` (2024-01-01 12:00 UTC by default).
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._now = fixed_time or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set_time(self, time: datetime) -> None:
        self._now = time

    def advance(self, seconds: int = 1) -> None:
        self._now += timedelta(seconds=seconds)
