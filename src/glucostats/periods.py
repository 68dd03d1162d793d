"""Resolución de períodos de calendario (hoy/semana/mes/personalizado)."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from glucostats.model import ResolvedInterval

_WEEKDAYS = (MO, TU, WE, TH, FR, SA, SU)
_LAST_SECOND = relativedelta(seconds=-1)


@dataclass(frozen=True)
class Today:
    """The calendar day containing ``now``."""


@dataclass(frozen=True)
class Week:
    """The calendar week containing ``now``."""


@dataclass(frozen=True)
class Month:
    """The calendar month containing ``now``."""


@dataclass(frozen=True)
class Custom:
    """Explicit day range; ``start <= end`` is the caller's responsibility."""

    start: datetime
    end: datetime


PeriodSelector = Today | Week | Month | Custom

_NAMES: dict[type, str] = {
    Today: "today",
    Week: "week",
    Month: "month",
    Custom: "custom",
}


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return start_of_day(moment) + relativedelta(days=1) + _LAST_SECOND


def _localize(moment: datetime, tz: tzinfo | None) -> datetime:
    if tz is None:
        return moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def resolve_period(
    period: PeriodSelector,
    now: datetime,
    *,
    week_start: int = calendar.MONDAY,
    tz: tzinfo | None = None,
) -> ResolvedInterval:
    """Turn a period selector into a concrete interval.

    Args:
        period: Today, Week, Month or Custom selection.
        now: Reference instant.
        week_start: First day of the week (``calendar.MONDAY`` .. ``calendar.SUNDAY``).
        tz: Timezone applied before computing calendar boundaries. Naive
            datetimes are read as wall time in ``tz``.

    Returns:
        Interval from the first to the last second of the period.
    """
    now = _localize(now, tz)

    if isinstance(period, Today):
        return ResolvedInterval(start=start_of_day(now), end=end_of_day(now))

    if isinstance(period, Week):
        start = start_of_day(now) + relativedelta(weekday=_WEEKDAYS[week_start](-1))
        end = start + relativedelta(weeks=1) + _LAST_SECOND
        return ResolvedInterval(start=start, end=end)

    if isinstance(period, Month):
        start = start_of_day(now) + relativedelta(day=1)
        end = start + relativedelta(months=1) + _LAST_SECOND
        return ResolvedInterval(start=start, end=end)

    if isinstance(period, Custom):
        return ResolvedInterval(
            start=start_of_day(_localize(period.start, tz)),
            end=end_of_day(_localize(period.end, tz)),
        )

    raise TypeError(f"Unsupported period selector: {period!r}")


def parse_period(
    name: str,
    start: date | None = None,
    end: date | None = None,
) -> PeriodSelector:
    """Build a period selector from its name (``today|week|month|custom``).

    Raises:
        ValueError: If the name is unknown or a custom range lacks bounds.
    """
    key = name.strip().lower()
    if key == "today":
        return Today()
    if key == "week":
        return Week()
    if key == "month":
        return Month()
    if key == "custom":
        if start is None or end is None:
            raise ValueError("Custom period requires start and end")
        return Custom(start=_as_datetime(start), end=_as_datetime(end))
    raise ValueError(f"Unknown period: {name!r}")


def period_name(period: PeriodSelector) -> str:
    return _NAMES[type(period)]


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())
