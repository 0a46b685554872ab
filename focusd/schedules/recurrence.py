"""
Recurring windows — a set of weekdays plus a time-of-day span.

Times are minutes since midnight. An ``end`` at or before ``start`` wraps
past midnight into the following day; ``24:00`` is accepted as an end.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, FrozenSet, Iterable, Optional

MINUTES_PER_DAY = 24 * 60

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_DAY_NAMES = {name: i for i, name in enumerate(_WEEKDAYS)}
_DAY_NAMES.update({name[:3]: i for i, name in enumerate(_WEEKDAYS)})
_DAY_GROUPS = {
    "weekdays": frozenset(range(5)),
    "weekends": frozenset({5, 6}),
    "daily": frozenset(range(7)),
}
ALL_DAYS: FrozenSet[int] = frozenset(range(7))


class ScheduleConfigError(ValueError):
    """A configuration file or window could not be understood."""


def parse_clock(value: Any, *, allow_end_of_day: bool = False) -> int:
    """
    Parse ``"HH:MM"`` into minutes since midnight.

    Integers are taken as minutes already; YAML 1.1 reads an unquoted
    ``9:30`` as the sexagesimal number 570, which is exactly that.
    """
    if isinstance(value, bool):
        raise ScheduleConfigError(f"invalid time of day: {value!r}")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str):
        hours, sep, mins = value.strip().partition(":")
        if not sep or not hours.isdigit() or not mins.isdigit() or len(mins) != 2:
            raise ScheduleConfigError(f"invalid time of day: {value!r}")
        if int(mins) > 59:
            raise ScheduleConfigError(f"invalid time of day: {value!r}")
        minutes = int(hours) * 60 + int(mins)
    else:
        raise ScheduleConfigError(f"invalid time of day: {value!r}")

    limit = MINUTES_PER_DAY if allow_end_of_day else MINUTES_PER_DAY - 1
    if not 0 <= minutes <= limit:
        raise ScheduleConfigError(f"time of day out of range: {value!r}")
    return minutes


def parse_days(value: Any) -> FrozenSet[int]:
    """Accept day names (``mon``, ``Monday``), groups, or a list of either."""
    if value is None:
        return ALL_DAYS
    items: Iterable[Any] = [value] if isinstance(value, str) else value
    if not isinstance(items, (list, tuple)):
        raise ScheduleConfigError(f"invalid days: {value!r}")

    days: set[int] = set()
    for item in items:
        if not isinstance(item, str):
            raise ScheduleConfigError(f"invalid day: {item!r}")
        key = item.strip().lower()
        if key in _DAY_GROUPS:
            days |= _DAY_GROUPS[key]
        elif key in _DAY_NAMES:
            days.add(_DAY_NAMES[key])
        else:
            raise ScheduleConfigError(f"invalid day: {item!r}")
    if not days:
        raise ScheduleConfigError("a window needs at least one day")
    return frozenset(days)


@dataclass(frozen=True)
class RecurringWindow:
    days: FrozenSet[int]
    start: int              # minutes since midnight, inclusive
    end: int                # minutes since midnight, exclusive

    @classmethod
    def from_dict(cls, raw: Any) -> "RecurringWindow":
        if not isinstance(raw, dict):
            raise ScheduleConfigError(f"a window must be a mapping, got {raw!r}")
        if "start" not in raw or "end" not in raw:
            raise ScheduleConfigError("a window needs both 'start' and 'end'")
        start = parse_clock(raw["start"])
        end = parse_clock(raw["end"], allow_end_of_day=True)
        if start == end:
            raise ScheduleConfigError("a window cannot start and end at the same time")
        return cls(days=parse_days(raw.get("days")), start=start, end=end)

    @property
    def wraps_midnight(self) -> bool:
        return self.end <= self.start

    def active_until(self, moment: datetime) -> Optional[datetime]:
        """
        If *moment* falls inside an occurrence of this window, return when
        that occurrence ends; otherwise None.
        """
        today = moment.date()
        # an overnight window that started yesterday may still be running
        for start_day in (today, today - timedelta(days=1)):
            if start_day.weekday() not in self.days:
                continue
            begins = _at(start_day, self.start, moment.tzinfo)
            ends = _at(start_day, self.end, moment.tzinfo)
            if self.wraps_midnight:
                ends += timedelta(days=1)
            if begins <= moment < ends:
                return ends
        return None


def _at(day: date, minutes: int, tz: Optional[tzinfo]) -> datetime:
    return datetime.combine(day, time(0), tzinfo=tz) + timedelta(minutes=minutes)
