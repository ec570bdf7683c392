"""Period arithmetic and relative date range resolution.

Dates are resolved in the website's timezone, so "yesterday" for a site in
Tokyo can differ from "yesterday" for a site in Los Angeles at the same
instant. Week periods start on Monday.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from visit_insights.core.errors import InvalidArgument

PERIODS = ("day", "week", "month", "year")

MAX_LAST_N = {
    "day": 5 * 365,
    "week": 10 * 52,
    "month": 10 * 12,
    "year": 10,
}

_LAST_N_PATTERN = re.compile(r"^(last|previous)(\d*)$")


class HasTimezone(Protocol):
    timezone: str


def _zone(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgument(f"Unknown timezone {tz!r}") from exc


def _check_period(period: str) -> None:
    if period not in PERIODS:
        raise InvalidArgument(f"Unsupported period {period!r}; expected one of {', '.join(PERIODS)}")


def resolve_end_date(value: str | date, tz: str = "UTC", *, now: datetime | None = None) -> date:
    """Turn ``today``, ``now``, ``yesterday`` or ``YYYY-MM-DD`` into a date."""

    if isinstance(value, date):
        return value
    keyword = value.strip().lower()
    if keyword in ("today", "now", "yesterday"):
        current = (now or datetime.now(tz=_zone(tz))).astimezone(_zone(tz)).date()
        return current - timedelta(days=1) if keyword == "yesterday" else current
    try:
        return date.fromisoformat(keyword)
    except ValueError as exc:
        raise InvalidArgument(f"Invalid date {value!r}; expected YYYY-MM-DD, today or yesterday") from exc


def add_periods(day: date, count: int, period: str) -> date:
    """Shift ``day`` by ``count`` periods, clamping to the end of short months."""

    _check_period(period)
    if period == "day":
        return day + timedelta(days=count)
    if period == "week":
        return day + timedelta(weeks=count)
    if period == "month":
        month_index = day.year * 12 + (day.month - 1) + count
        year, month = divmod(month_index, 12)
        month += 1
        return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))
    year = day.year + count
    return date(year, day.month, min(day.day, calendar.monthrange(year, day.month)[1]))


def period_bounds(period: str, day: date) -> tuple[date, date]:
    """Return the first and last day of the ``period`` containing ``day``."""

    _check_period(period)
    if period == "day":
        return day, day
    if period == "week":
        start = day - timedelta(days=day.weekday())
        return start, start + timedelta(days=6)
    if period == "month":
        return day.replace(day=1), day.replace(day=calendar.monthrange(day.year, day.month)[1])
    return date(day.year, 1, 1), date(day.year, 12, 31)


def previous_period(period: str, day: date) -> tuple[date, date]:
    return period_bounds(period, add_periods(day, -1, period))


def parse_last_n(value: str) -> tuple[str, int]:
    """Split ``last30`` / ``previous7`` into its keyword and count."""

    match = _LAST_N_PATTERN.match(value.strip())
    if match is None:
        raise InvalidArgument(f"Invalid range {value!r}; expected lastN or previousN")
    keyword, digits = match.groups()
    return keyword, int(digits) if digits else 1


def relative_date_range(
    period: str,
    last_n: str,
    end_date: str | date,
    site: HasTimezone,
    *,
    now: datetime | None = None,
) -> str:
    """Return ``start,end`` covering ``last_n`` periods that finish at ``end_date``.

    ``end_date`` may itself be a ``start,end`` expression, in which case only
    its end is used.
    """

    _check_period(period)
    keyword, count = parse_last_n(last_n)
    count = min(max(count, 1), MAX_LAST_N[period])

    if isinstance(end_date, str) and "," in end_date:
        end_date = end_date.split(",", 1)[1]
    end = resolve_end_date(end_date, site.timezone, now=now)

    if keyword == "previous":
        end = add_periods(end, -1, period)
    start = add_periods(end, -(count - 1), period)

    start = period_bounds(period, start)[0]
    end = period_bounds(period, end)[1]
    return f"{start.isoformat()},{end.isoformat()}"


__all__ = [
    "PERIODS",
    "MAX_LAST_N",
    "add_periods",
    "parse_last_n",
    "period_bounds",
    "previous_period",
    "relative_date_range",
    "resolve_end_date",
]
