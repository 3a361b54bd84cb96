"""
Sexagesimal angle text <-> numbers.

Parsing accepts the usual hand-typed forms of a coordinate, e.g.
``12:34:56``, ``12 34 56.7``, ``12h34m56s``, ``45d30'15"``, ``45:00:00S``.
Formatting renders a radian angle as ``+DD°MM'SS"`` or ``HHhMMmSSs``.
"""

__all__ = [
    "AngleUnitKind",
    "ParsedAngle",
    "parse_angle",
    "try_parse_angle",
    "format_dms",
    "format_hms",
    "hms_to_rad",
    "dms_to_rad",
]

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .errors import FieldOutOfRange, ParseFailure
from .utils import get_config

# delimiters of the degrees/hours and minutes fields ("\xba" is an old degree mark)
DELIM_FIELDS = " :.,;DdHhMm'\n\t\xb0\xba"
# delimiters of the seconds field
DELIM_SECONDS = ' NSEWnsew"\n\t'
DELIM_TRAILING = " \n\t"

# upper bound of the magnitude, per unit kind
HOURS_MAX = 24.0
LATITUDE_MAX = 90.0
DEGREES_MAX = 180.0

_INTEGER = re.compile(r"\d+")
_REAL = re.compile(r"\d+(\.\d*)?|\.\d+")
_HEMISPHERE = re.compile(r"[NSEWnsew]")
_NEGATIVE_HEMISPHERE = re.compile(r"[SWsw]")
_LATITUDE_HEMISPHERE = re.compile(r"[NSns]")
# "56s" / "56.7s" after a minutes letter is a seconds mark, not "south"
_SECONDS_MARK = re.compile(r"([Mm]\s*(?:\d+(?:[.,]\d*)?|[.,]\d+))s")


class AngleUnitKind(Enum):
    HOURS = "hours"
    DEGREES = "degrees"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"

    @property
    def max_value(self) -> float:
        if self is AngleUnitKind.HOURS:
            return HOURS_MAX
        if self is AngleUnitKind.LATITUDE:
            return LATITUDE_MAX
        return DEGREES_MAX


@dataclass(frozen=True)
class ParsedAngle:
    """A parsed angle in the native scale of its unit kind.

    ``value`` is in hours for ``AngleUnitKind.HOURS`` and in degrees
    otherwise.
    """

    value: float
    unit_kind: AngleUnitKind

    @property
    def degrees(self) -> float:
        if self.unit_kind is AngleUnitKind.HOURS:
            return self.value * 15.0
        return self.value

    @property
    def radians(self) -> float:
        if self.unit_kind is AngleUnitKind.HOURS:
            return self.value * np.pi / 12.0
        return self.value * np.pi / 180.0


def _token_pattern(delims: str):
    return re.compile("[^{}]+".format(re.escape(delims)))


_FIELD_TOKEN = _token_pattern(DELIM_FIELDS)
_SECONDS_TOKEN = _token_pattern(DELIM_SECONDS)
_TRAILING_TOKEN = _token_pattern(DELIM_TRAILING)


def _next_token(text: str, pos: int, pattern) -> tuple[Optional[str], int]:
    """Return the next token at or after ``pos`` and the position after its
    terminating delimiter. Only locals are touched, so calls never interfere.
    """
    match = pattern.search(text, pos)
    if match is None:
        return None, len(text)
    return match.group(), match.end() + 1


def parse_angle(
    text: str,
    unit_kind: Optional[AngleUnitKind] = None,
) -> ParsedAngle:
    """
    Parse a sexagesimal angle.

    Parameters
    ----------
    text : str
        the angle text, whole degrees (or hours), minutes and seconds,
        optionally signed or followed by a hemisphere letter.
    unit_kind : AngleUnitKind, optional
        context of the caller. It replaces the inferred kind when the text
        itself only says "degrees", e.g. ``AngleUnitKind.LONGITUDE``.

    Returns
    -------
    ParsedAngle
        value in hours or degrees, signed

    Raises
    ------
    ParseFailure
        if the text is empty or malformed
    FieldOutOfRange
        if minutes > 59, seconds >= 60 or the magnitude exceeds the bound
        of its unit kind (24 h, 90 deg for latitude, 180 deg otherwise)

    Examples
    --------
    >>> parse_angle("12h34m56s").unit_kind
    <AngleUnitKind.HOURS: 'hours'>
    >>> parse_angle("45:00:00S").value
    -45.0
    """
    if not isinstance(text, str):
        raise ParseFailure("Invalid angle: expected str, got {}".format(type(text).__name__))
    s = text.strip(" \t")
    if not s:
        raise ParseFailure("Invalid angle: empty string")
    s = _SECONDS_MARK.sub(r'\1"', s)

    # the hemisphere letter has precedence over the sign
    has_hemisphere = _HEMISPHERE.search(s) is not None
    negative = _NEGATIVE_HEMISPHERE.search(s) is not None
    if s[0] in "+-":
        if not has_hemisphere:
            negative = s[0] == "-"
        s = s[1:].lstrip(" \t")

    # infer the unit kind
    h_pos = min((i for i in (s.find("H"), s.find("h")) if i >= 0), default=-1)
    if 0 <= h_pos < 3:
        kind = AngleUnitKind.HOURS
    elif _LATITUDE_HEMISPHERE.search(s) is not None:
        kind = AngleUnitKind.LATITUDE
    else:
        # unspecified, the caller must control it
        kind = unit_kind if unit_kind is not None else AngleUnitKind.DEGREES

    whole, pos = _next_token(s, 0, _FIELD_TOKEN)
    if whole is None or _INTEGER.fullmatch(whole) is None:
        raise ParseFailure("Invalid angle {!r}: missing degrees/hours field".format(text))
    minutes, pos = _next_token(s, pos, _FIELD_TOKEN)
    if minutes is None or _INTEGER.fullmatch(minutes) is None:
        raise ParseFailure("Invalid angle {!r}: missing minutes field".format(text))
    whole, minutes = int(whole), int(minutes)
    if minutes > 59:
        raise FieldOutOfRange("minutes", minutes, (0, 59))

    seconds = 0.0
    token, pos = _next_token(s, pos, _SECONDS_TOKEN)
    if token is not None:
        token = token.replace(",", ".")
        if _REAL.fullmatch(token) is None:
            raise ParseFailure("Invalid angle {!r}: bad seconds field {!r}".format(text, token))
        seconds = float(token)
        if seconds >= 60.0:
            raise FieldOutOfRange("seconds", seconds, (0.0, 60.0))

        token, pos = _next_token(s, pos, _TRAILING_TOKEN)
        if token is not None:
            if token[0] in "SWsw":
                negative = True
            elif token[0] in "NEne":
                negative = False

    value = ((whole * 60 + minutes) * 60 + seconds) / 3600.0
    if value > kind.max_value:
        raise FieldOutOfRange(
            kind.value,
            value,
            (0.0, kind.max_value),
            message="Invalid angle {!r}: {} exceeds {} for {}".format(
                text, value, kind.max_value, kind.value
            ),
        )
    if negative:
        value = -value
    return ParsedAngle(value=value, unit_kind=kind)


def try_parse_angle(
    text: str,
    unit_kind: Optional[AngleUnitKind] = None,
) -> Optional[ParsedAngle]:
    """Like ``parse_angle`` but return ``None`` for invalid input."""
    try:
        return parse_angle(text, unit_kind=unit_kind)
    except ParseFailure:
        return None


# ######### #
# formatter #
# ######### #


def _check_finite(angle: float) -> float:
    angle = float(angle)
    if not np.isfinite(angle):
        raise ValueError("Invalid angle: {}".format(angle))
    return angle


def format_dms(angle: float, decimals: bool = False, use_d: Optional[bool] = None) -> str:
    """
    Print an angle with the format ``+DD°MM'SS(.SS)"``.

    Parameters
    ----------
    angle : float
        angle in radian
    decimals : bool
        if True, also print two decimals of the arcseconds
    use_d : bool, optional
        if True, use the letter "d" instead of the degree mark. Defaults to
        ``[format] use_d`` of the config.

    Returns
    -------
    str
        the formatted angle
    """
    angle = _check_finite(angle)
    if use_d is None:
        use_d = get_config("format", "use_d")
    degsign = "d" if use_d else "°"
    sign = "+"

    angle *= 180.0 / np.pi
    if angle < 0:
        angle = -angle
        sign = "-"

    if decimals:
        d = int(0.5 + angle * (60 * 60 * 100))
        centi = d % 100
        d //= 100
        s = d % 60
        d //= 60
        m = d % 60
        d //= 60
        return "%s%.2d%s%.2d'%.2d.%02d\"" % (sign, d, degsign, m, s, centi)
    else:
        d = int(0.5 + angle * (60 * 60))
        s = d % 60
        d //= 60
        m = d % 60
        d //= 60
        return "%s%.2d%s%.2d'%.2d\"" % (sign, d, degsign, m, s)


def format_hms(angle: float, decimals: bool = False) -> str:
    """
    Print an angle with the format ``HHhMMmSS(.SS)s``.

    The angle is wrapped into [0, 2pi) first, so the hours are in [0, 24).
    """
    angle = _check_finite(angle)
    angle = float(np.fmod(angle, 2.0 * np.pi))
    if angle < 0.0:
        angle += 2.0 * np.pi  # range: [0, 2pi)
    angle *= 12.0 / np.pi  # range: [0, 24)

    if decimals:
        ticks = 24 * 60 * 60 * 100
        angle = 0.5 + angle * (60 * 60 * 100)  # range: [0.5, ticks + 0.5)
        if angle >= ticks:
            angle -= ticks
        h = int(angle)
        centi = h % 100
        h //= 100
        s = h % 60
        h //= 60
        m = h % 60
        h //= 60
        return "%.2dh%.2dm%.2d.%02ds" % (h, m, s, centi)
    else:
        ticks = 24 * 60 * 60
        angle = 0.5 + angle * (60 * 60)  # range: [0.5, ticks + 0.5)
        if angle >= ticks:
            angle -= ticks
        h = int(angle)
        s = h % 60
        h //= 60
        m = h % 60
        h //= 60
        return "%.2dh%.2dm%.2ds" % (h, m, s)


# ############## #
# radian helpers #
# ############## #


def hms_to_rad(h, m, s=0.0):
    """
    Hours, minutes and seconds of time to radian.

    Parameters
    ----------
    h, m, s : float or array-like
        hours, minutes (may be fractional) and seconds

    Returns
    -------
    float or numpy.ndarray
        angle in radian

    Examples
    --------
    >>> hms_to_rad(12, 0, 0)
    3.141592653589793
    """
    h, m, s = np.asarray(h), np.asarray(m), np.asarray(s)
    return np.pi / 24.0 * h * 2.0 + np.pi / 12.0 * m / 60.0 + s * np.pi / 43200.0


def dms_to_rad(d, m, s=0.0):
    """Degrees, arcminutes (may be fractional) and arcseconds to radian."""
    d, m, s = np.asarray(d), np.asarray(m), np.asarray(s)
    return np.pi / 180.0 * d + np.pi / 10800.0 * m + s * np.pi / 648000.0
