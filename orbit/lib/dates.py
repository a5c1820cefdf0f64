import calendar
import re
from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from orbit.core.errors import ValidationError
from orbit.core.models import CalendarDay

from . import clock

__all__ = [
    "day_key",
    "end_of_week",
    "month_grid",
    "parse_day",
    "parse_day_key",
    "same_month",
    "start_of_week",
]

_DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
GRID_CELLS = 42


def day_key(day: date) -> str:
    return day.isoformat()


def parse_day_key(key: str) -> date:
    """Parse a strict YYYY-MM-DD day key, rejecting anything that is not a real calendar day."""
    if not isinstance(key, str) or not _DAY_KEY_RE.match(key):
        raise ValidationError(f"invalid day key '{key}', use YYYY-MM-DD")
    try:
        return date.fromisoformat(key)
    except ValueError:
        raise ValidationError(f"invalid day key '{key}', not a calendar day") from None


def start_of_week(day: date) -> date:
    """Monday on or before `day`."""
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


_WEEKDAYS = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}


def parse_day(value: str, today: date | None = None) -> date:
    """Parses a day reference ('today', 'yesterday', 'mon', 'YYYY-MM-DD').

    Weekday names resolve to the most recent occurrence, today included.
    """
    today = today or clock.today()
    lowered = value.strip().lower()

    if lowered == "today":
        return today
    if lowered == "yesterday":
        return today - timedelta(days=1)
    short = lowered[:3]
    if short in _WEEKDAYS and lowered in {short, calendar.day_name[_WEEKDAYS[short]].lower()}:
        days_back = (today.weekday() - _WEEKDAYS[short]) % 7
        return today - timedelta(days=days_back)
    if _DAY_KEY_RE.match(lowered):
        return parse_day_key(lowered)
    try:
        return dateutil_parser.parse(
            value, default=datetime(today.year, today.month, today.day)
        ).date()
    except (ParserError, ValueError, OverflowError):
        raise ValidationError(f"cannot parse day '{value}'") from None


def month_grid(year: int, month: int) -> list[CalendarDay]:
    """Six Sunday-start weeks covering `month`, padded with neighbouring days."""
    first = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]
    lead = (first.weekday() + 1) % 7

    cells: list[CalendarDay] = []
    for offset in range(lead, 0, -1):
        d = first - timedelta(days=offset)
        cells.append(CalendarDay(day=d.day, kind="prev", key=day_key(d)))
    for n in range(1, days_in_month + 1):
        d = date(year, month, n)
        cells.append(CalendarDay(day=n, kind="current", key=day_key(d)))
    last = date(year, month, days_in_month)
    for n in range(1, GRID_CELLS - len(cells) + 1):
        d = last + timedelta(days=n)
        cells.append(CalendarDay(day=d.day, kind="next", key=day_key(d)))
    return cells
