"""
Civil time offset and time zone name of a Julian Day.

The local time database is asked through a calendar service (see
``astrotext.service``); pass your own to pin the zone, e.g. in tests.
"""

__all__ = ["EPOCH_JD", "parse_offset", "get_gmt_shift", "get_time_zone_name"]

import re

from .errors import CalendarServiceUnavailable
from .utils import get_config

# calendar services are not reliable before 1970 (and DST rules changed little)
EPOCH_JD = get_config("timezone", "epoch_jd")

_OFFSET = re.compile(r"[+-]\d{4}")


def _get_calendar(calendar):
    if calendar is None:
        from .service import SystemCalendarService

        calendar = SystemCalendarService()
    return calendar


def _clamp(jd: float, verbose: bool = False) -> float:
    if jd < EPOCH_JD:
        if verbose:
            print("@astrotext.tz: JD {} is before JD {}, using JD {} ...".format(jd, EPOCH_JD, EPOCH_JD))
        return EPOCH_JD
    return jd


def parse_offset(text: str) -> float:
    """
    Convert "+HHMM" / "-HHMM" to hours.

    Examples
    --------
    >>> parse_offset("+0530")
    5.5
    >>> parse_offset("-0330")
    -3.5
    """
    if not isinstance(text, str) or _OFFSET.match(text) is None:
        raise CalendarServiceUnavailable("Invalid UTC offset {!r}, expected +HHMM".format(text))
    hours = int(text[:3])
    minutes = int(text[3:5])
    sign = -1 if text[0] == "-" else 1
    return hours + sign * minutes / 60.0


def get_gmt_shift(jd: float, local: bool = False, calendar=None, verbose: bool = False) -> float:
    """
    Hours to add to UTC to get the local civil time on a Julian Day.

    Daylight saving time is included. Positive east of Greenwich.

    Parameters
    ----------
    jd : float
        the Julian Day
    local : bool
        if False, ``jd`` is UTC; if True, ``jd`` is already local time
    calendar : CalendarService, optional
        defaults to ``SystemCalendarService()``
    verbose : bool
        if True, print the resolved local time

    Returns
    -------
    float
        UTC offset in hours

    Raises
    ------
    CalendarServiceUnavailable
        if the calendar service cannot resolve the instant
    """
    calendar = _get_calendar(calendar)
    jd = _clamp(jd, verbose=verbose)
    try:
        if not local:
            # jd is UTC
            instant = calendar.fields_to_instant(calendar.jd_to_fields(jd))
        else:
            instant = calendar.jd_to_instant(jd)
        offset = calendar.local_offset_string(instant)
        if verbose:
            print(
                "@astrotext.tz: local time {}, UTC offset {}, DST={}".format(
                    calendar.instant_to_local_fields(instant), offset, calendar.is_dst(instant)
                )
            )
    except CalendarServiceUnavailable:
        raise
    except (ValueError, OverflowError, OSError) as e_:
        raise CalendarServiceUnavailable("Cannot resolve JD {}: {}".format(jd, e_)) from e_
    return parse_offset(offset)


def get_time_zone_name(jd: float, calendar=None) -> str:
    """Name of the local time zone on a Julian Day, e.g. "CEST".

    The name depends on the day because of the summer time.
    """
    calendar = _get_calendar(calendar)
    jd = _clamp(jd)
    try:
        return calendar.zone_name(calendar.jd_to_instant(jd))
    except CalendarServiceUnavailable:
        raise
    except (ValueError, OverflowError, OSError) as e_:
        raise CalendarServiceUnavailable("Cannot resolve JD {}: {}".format(jd, e_)) from e_
