"""
astrotext: astronomical angle and time text <-> numbers.
"""

from .angle import (
    AngleUnitKind,
    ParsedAngle,
    dms_to_rad,
    format_dms,
    format_hms,
    hms_to_rad,
    parse_angle,
    try_parse_angle,
)
from .errors import AstroTextError, CalendarServiceUnavailable, FieldOutOfRange, ParseFailure
from .time import CalendarDateTime, calendar_to_jd, jd_to_iso8601, parse_iso8601, string_to_jday
from .tz import get_gmt_shift, get_time_zone_name

__version__ = "2026.1019.0"
