"""
Calendar service: Julian Day <-> calendar fields, and local time.

``CalendarService`` is the interface the time-zone functions of
``astrotext.tz`` rely on. ``SystemCalendarService`` implements it with
``astropy.time`` and the time-zone database of the process.
"""

__all__ = ["CalendarService", "SystemCalendarService", "UNIX_EPOCH_JD"]

import calendar
import time
import warnings
from datetime import datetime, timedelta, timezone
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astropy.time import Time

from .errors import CalendarServiceUnavailable
from .time import GREGORIAN_CUTOVER_JD, CalendarDateTime, jd_to_calendar
from .utils import get_config

# Julian Day of 1970-01-01T00:00:00 UTC
UNIX_EPOCH_JD = 2440587.5


class CalendarService(Protocol):
    def jd_to_fields(self, jd: float) -> CalendarDateTime: ...

    def fields_to_instant(self, fields: CalendarDateTime) -> float: ...

    def jd_to_instant(self, jd: float) -> float: ...

    def instant_to_local_fields(self, instant: float) -> CalendarDateTime: ...

    def local_offset_string(self, instant: float) -> str: ...

    def zone_name(self, instant: float) -> str: ...

    def is_dst(self, instant: float) -> bool: ...


class SystemCalendarService:
    """
    Calendar service of the running system.

    Parameters
    ----------
    zone : str, optional
        IANA time zone name, e.g. "Europe/Paris", or "local" for the local
        zone of the process. Defaults to ``[timezone] zone`` of the config.

    Notes
    -----
    Instants are POSIX timestamps (seconds since 1970-01-01 UTC). The local
    zone of the process is only read, never set.
    """

    def __init__(self, zone: str = None):
        if zone is None:
            zone = get_config("timezone", "zone")
        self.zone = zone
        self.tzinfo = None
        if zone != "local":
            try:
                self.tzinfo = ZoneInfo(zone)
            except (ZoneInfoNotFoundError, ValueError) as e_:
                raise CalendarServiceUnavailable("Unknown time zone {!r}".format(zone)) from e_

    def __repr__(self):
        return "<SystemCalendarService zone={!r}>".format(self.zone)

    def jd_to_fields(self, jd: float) -> CalendarDateTime:
        """UTC calendar fields of a Julian Day, rounded to the second.

        Days before the Gregorian cutover are in the Julian calendar, as
        ``CalendarDateTime.to_jd`` counts them.
        """
        if jd < GREGORIAN_CUTOVER_JD:
            return jd_to_calendar(jd)
        try:
            with warnings.catch_warnings():
                # erfa warns about "dubious year" outside the leap second table
                warnings.simplefilter("ignore")
                dt = Time(jd, format="jd", scale="utc").to_datetime()
            dt = dt + timedelta(microseconds=500000)
        except (ValueError, OverflowError) as e_:
            raise CalendarServiceUnavailable(
                "Cannot convert JD {} to calendar fields: {}".format(jd, e_)
            ) from e_
        return CalendarDateTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def fields_to_instant(self, fields: CalendarDateTime) -> float:
        """Read the fields as UTC, return the POSIX timestamp."""
        try:
            return float(
                calendar.timegm(
                    (fields.year, fields.month, fields.day, fields.hour, fields.minute, fields.second, 0, 0, 0)
                )
            )
        except (ValueError, OverflowError) as e_:
            raise CalendarServiceUnavailable(
                "Cannot convert {} to an instant: {}".format(fields, e_)
            ) from e_

    def jd_to_instant(self, jd: float) -> float:
        return (jd - UNIX_EPOCH_JD) * 86400.0

    def _localize(self, instant: float) -> datetime:
        try:
            utc = datetime.fromtimestamp(instant, tz=timezone.utc)
            # astimezone(None) is the local zone of the process
            return utc.astimezone(self.tzinfo)
        except (ValueError, OverflowError, OSError) as e_:
            raise CalendarServiceUnavailable(
                "Cannot resolve instant {} in zone {!r}: {}".format(instant, self.zone, e_)
            ) from e_

    def instant_to_local_fields(self, instant: float) -> CalendarDateTime:
        dt = self._localize(instant)
        return CalendarDateTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def local_offset_string(self, instant: float) -> str:
        """Offset of local time from UTC as "+HHMM" or "-HHMM"."""
        return self._localize(instant).strftime("%z")

    def zone_name(self, instant: float) -> str:
        return self._localize(instant).strftime("%Z")

    def is_dst(self, instant: float) -> bool:
        if self.tzinfo is None:
            return time.localtime(instant).tm_isdst > 0
        return bool(self._localize(instant).dst())
