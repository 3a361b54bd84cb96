__all__ = [
    "CalendarDateTime",
    "parse_iso8601",
    "calendar_to_jd",
    "string_to_jday",
    "jd_to_calendar",
    "jd_to_iso8601",
    "GREGORIAN_CUTOVER",
    "GREGORIAN_CUTOVER_JD",
]

import re
from dataclasses import dataclass

import numpy as np

from .errors import FieldOutOfRange, ParseFailure
from .utils import get_config

# the first day of the Gregorian calendar
GREGORIAN_CUTOVER = (1582, 10, 15)
GREGORIAN_CUTOVER_JD = 2299160.5
JD_EPOCH_OFFSET = 1720996.5

YEAR_MIN = get_config("date", "year_min")
YEAR_MAX = get_config("date", "year_max")

# [+/-]YYYY-MM-DDThh:mm:ss, any single non-digit between fields, time optional
_FIELD = r"(?:(?:\s*[^\d\s]\s*|\s+)(\d+)"
_ISO8601 = re.compile(r"\s*([+-]?\d+)" + _FIELD * 5 + r")?" * 5)


@dataclass(frozen=True)
class CalendarDateTime:
    """Calendar date and time of day, proleptic (the year may be negative)."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def validate(self) -> "CalendarDateTime":
        """Check the field bounds, return self.

        The day is only checked against [1, 31]; the Julian Day formula
        carries an overflowing day into the next month.
        """
        bounds = [
            ("year", self.year, YEAR_MIN, YEAR_MAX),
            ("month", self.month, 1, 12),
            ("day", self.day, 1, 31),
            ("hour", self.hour, 0, 23),
            ("minute", self.minute, 0, 59),
            ("second", self.second, 0, 59),
        ]
        for name, value, lo, hi in bounds:
            if value < lo or value > hi:
                raise FieldOutOfRange(name, value, (lo, hi))
        return self

    def to_jd(self) -> float:
        """
        Julian Day of this date and time.

        Months 1 and 2 are counted as months 13 and 14 of the previous year.
        Dates from 1582-10-15 use the Gregorian leap-year correction, earlier
        ones the Julian calendar (a fixed -2).

        Examples
        --------
        >>> CalendarDateTime(2000, 1, 1, 12, 0, 0).to_jd()
        2451545.0
        """
        year, month = self.year, self.month
        if month <= 2:
            year -= 1
            month += 12

        # correct for the days lost in Oct 1582
        b = -2
        if (year, month, self.day) >= GREGORIAN_CUTOVER:
            b = year // 400 - year // 100

        jd = (
            np.floor(365.25 * year)
            + np.floor(30.6001 * (month + 1))
            + b
            + JD_EPOCH_OFFSET
            + self.day
            + self.hour / 24.0
            + self.minute / 1440.0
            + self.second / 86400.0
        )
        return float(jd)

    def __str__(self):
        return "%04d-%02d-%02d %02d:%02d:%02d" % (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
        )


def parse_iso8601(text: str) -> CalendarDateTime:
    """
    Parse ``[+/-]YYYY-MM-DDThh:mm:ss`` into calendar fields.

    The delimiters are not checked, only the order of the fields. Missing
    time fields are 0. The result is validated.

    Raises
    ------
    ParseFailure
        if year, month and day cannot be read
    FieldOutOfRange
        if a field is out of bounds
    """
    if not isinstance(text, str):
        raise ParseFailure("Invalid date: expected str, got {}".format(type(text).__name__))
    match = _ISO8601.match(text)
    if match is None or match.group(3) is None:
        raise ParseFailure("Invalid date {!r}: expected [+/-]YYYY-MM-DDThh:mm:ss".format(text))
    fields = [int(g) if g is not None else 0 for g in match.groups()]
    return CalendarDateTime(*fields).validate()


def calendar_to_jd(year, month, day, hour=0, minute=0, second=0) -> float:
    """Julian Day of validated calendar fields."""
    return CalendarDateTime(year, month, day, hour, minute, second).validate().to_jd()


def string_to_jday(text: str) -> float:
    """
    Convert an ISO 8601-like date string (no time zone offset) to Julian Day.

    Parameters
    ----------
    text : str
        e.g. "2000-01-01T12:00:00" or "-0500-03-01T00:00:00"

    Returns
    -------
    float
        the Julian Day

    Examples
    --------
    >>> string_to_jday("2000-01-01T12:00:00")
    2451545.0
    """
    return parse_iso8601(text).to_jd()


def jd_to_calendar(jd: float) -> CalendarDateTime:
    """
    Calendar fields of a Julian Day, rounded to the second.

    The inverse of ``CalendarDateTime.to_jd``: days before JD 2299161
    (1582-10-15) are given in the Julian calendar, later ones in the
    Gregorian calendar.

    References
    ----------
    Meeus, J. 1998, Astronomical Algorithms, 2nd ed., chapter 7

    Examples
    --------
    >>> str(jd_to_calendar(2299159.5))
    '1582-10-04 00:00:00'
    """
    z = int(np.floor(jd + 0.5))
    seconds = int(np.floor((jd + 0.5 - z) * 86400.0 + 0.5))
    if seconds >= 86400:
        z += 1
        seconds -= 86400

    if z < 2299161:
        a = z
    else:
        alpha = int(np.floor((z - 1867216.25) / 36524.25))
        a = z + 1 + alpha - alpha // 4
    b = a + 1524
    c = int(np.floor((b - 122.1) / 365.25))
    d = int(np.floor(365.25 * c))
    e = int(np.floor((b - d) / 30.6001))

    day = b - d - int(np.floor(30.6001 * e))
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return CalendarDateTime(year, month, day, seconds // 3600, seconds // 60 % 60, seconds % 60)


def jd_to_iso8601(jd: float, calendar=None) -> str:
    """Return the UTC time of a Julian Day as "YYYY-MM-DD HH:MM:SS"."""
    if calendar is None:
        from .service import SystemCalendarService

        calendar = SystemCalendarService()
    return str(calendar.jd_to_fields(jd))
