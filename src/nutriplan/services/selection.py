"""Weekly selection window policy."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from nutriplan.domain.menus import WindowState

FRIDAY = 4
CUTOFF_HOUR = 17
DAYS_PER_WEEK = 7


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware datetime."""


@dataclass
class SystemClock(Clock):
    """Wall clock in the operational timezone."""

    timezone_name: str = "Asia/Jakarta"

    def now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone_name))


@dataclass
class SelectionWindowPolicy:
    """Students may choose on the selection weekday before the cutoff hour.

    Weekdays use Python's numbering (Monday is 0, Friday is 4). Naive
    datetimes are read as wall time in the operational timezone.
    """

    timezone_name: str = "Asia/Jakarta"
    weekday: int = FRIDAY
    cutoff_hour: int = CUTOFF_HOUR

    def window_state(self, now: datetime) -> WindowState:
        """Return whether selection is open and the deadline at or after `now`."""
        local = self.localize(now)
        can_select = local.weekday() == self.weekday and local.hour < self.cutoff_hour
        return WindowState(can_select=can_select, deadline=self._deadline_from(local))

    def next_deadline_after(self, now: datetime) -> datetime:
        """Return the first cutoff instant strictly after `now`."""
        local = self.localize(now)
        deadline = self._deadline_from(local)
        if deadline <= local:
            deadline = _shift_days(deadline, DAYS_PER_WEEK)
        return deadline

    def upcoming_week_start(self, now: datetime) -> datetime:
        """Return midnight of the Monday following `now`."""
        local = self.localize(now)
        days_ahead = (DAYS_PER_WEEK - local.weekday()) % DAYS_PER_WEEK or DAYS_PER_WEEK
        return _shift_days(local, days_ahead).replace(
            hour=0, minute=0, second=0, microsecond=0
        )

    def _deadline_from(self, local: datetime) -> datetime:
        days_ahead = (self.weekday - local.weekday()) % DAYS_PER_WEEK
        deadline = _shift_days(local, days_ahead).replace(
            hour=self.cutoff_hour, minute=0, second=0, microsecond=0
        )
        if deadline < local:
            deadline = _shift_days(deadline, DAYS_PER_WEEK)
        return deadline

    def localize(self, now: datetime) -> datetime:
        """Return `now` in the operational timezone."""
        tz = ZoneInfo(self.timezone_name)
        if now.tzinfo is None:
            return now.replace(tzinfo=tz)
        return now.astimezone(tz)


def _shift_days(value: datetime, days: int) -> datetime:
    # Wall-clock arithmetic: keeps the local hour across DST changes.
    return value + timedelta(days=days)
