"""Current time and date strings, and elapsed time since a given date."""

from __future__ import annotations

import re
from datetime import MAXYEAR, datetime

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DATE_RE = re.compile(r"\s*([+-]?\d+)\.\s*([+-]?\d+)\.\s*([+-]?\d+)")

_FLAGS = {
    "-s": ("Прошло секунд: {:.0f}", 1.0),
    "-m": ("Прошло минут: {:.1f}", 60.0),
    "-h": ("Прошло часов: {:.1f}", 3600.0),
    "-y": ("Прошло лет: {:.1f}", 3600.0 * 24 * 365.25),
}


class DateError(ValueError):
    """Base class for date parsing and elapsed-time errors."""


class InvalidDateFormatError(DateError):
    """The text is not of the form dd.mm.yyyy."""


class InvalidDateValueError(DateError):
    """The day or month is out of range."""


class DateInFutureError(DateError):
    """The date lies after the current moment."""


class DateBefore1970Error(DateError):
    """Dates before 1970 are not handled."""


class InvalidFlagError(DateError):
    """The unit flag is not one of -s, -m, -h, -y."""


def current_time(now: datetime | None = None) -> str:
    """Return the local time as HH:MM:SS."""
    now = now or datetime.now()
    return f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}"


def current_date(now: datetime | None = None) -> str:
    """Return the local date as DD.MM.YYYY."""
    now = now or datetime.now()
    return f"{now.day:02d}.{now.month:02d}.{now.year:04d}"


def is_leap_year(year: int) -> bool:
    """Return True for a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    """Return the number of days in the month (1-12) of the year."""
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def parse_date(text: str, now: datetime | None = None) -> datetime:
    """Parse dd.mm.yyyy into local midnight of that day.

    The date must be no earlier than 1970 and not after ``now``.
    """
    match = _DATE_RE.match(text)
    if match is None:
        raise InvalidDateFormatError(f"expected dd.mm.yyyy, got {text!r}")
    day, month, year = (int(group) for group in match.groups())

    if year < 1970:
        raise DateBefore1970Error(f"year {year} is before 1970")
    if not 1 <= month <= 12:
        raise InvalidDateValueError(f"invalid month: {month}")
    if not 1 <= day <= days_in_month(month, year):
        raise InvalidDateValueError(f"invalid day: {day}")
    if year > MAXYEAR:
        raise DateInFutureError(f"{text!r} is in the future")

    moment = datetime(year, month, day)
    now = now or datetime.now()
    if moment.timestamp() > now.timestamp():
        raise DateInFutureError(f"{text!r} is in the future")
    return moment


def howmuch(text: str, flag: str, now: datetime | None = None) -> str:
    """Describe the time elapsed since the date in the unit chosen by the flag."""
    now = now or datetime.now()
    moment = parse_date(text, now)
    try:
        template, unit = _FLAGS[flag]
    except KeyError:
        raise InvalidFlagError(f"unknown flag: {flag!r}") from None
    elapsed = now.timestamp() - moment.timestamp()
    return template.format(elapsed / unit)