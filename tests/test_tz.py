"""Tests of the civil UTC offset and time zone name of a Julian Day."""

from datetime import datetime, timedelta, timezone

import pytest

from astrotext.errors import CalendarServiceUnavailable
from astrotext.service import UNIX_EPOCH_JD, SystemCalendarService
from astrotext.time import CalendarDateTime, string_to_jday
from astrotext.tz import EPOCH_JD, get_gmt_shift, get_time_zone_name, parse_offset

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FakeCalendarService:
    """Calendar service with a fixed offset, or a summer offset from April to September."""

    def __init__(self, offset="+0000", summer_offset=None, name="FAKE"):
        self.offset = offset
        self.summer_offset = summer_offset
        self.name = name
        self.calls = []

    def jd_to_fields(self, jd):
        self.calls.append(("jd_to_fields", jd))
        dt = UNIX_EPOCH + timedelta(seconds=round((jd - UNIX_EPOCH_JD) * 86400))
        return CalendarDateTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def fields_to_instant(self, fields):
        self.calls.append(("fields_to_instant", fields))
        dt = datetime(
            fields.year, fields.month, fields.day, fields.hour, fields.minute, fields.second, tzinfo=timezone.utc
        )
        return (dt - UNIX_EPOCH).total_seconds()

    def jd_to_instant(self, jd):
        self.calls.append(("jd_to_instant", jd))
        return (jd - UNIX_EPOCH_JD) * 86400.0

    def instant_to_local_fields(self, instant):
        dt = UNIX_EPOCH + timedelta(seconds=instant)
        return CalendarDateTime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def is_dst(self, instant):
        month = (UNIX_EPOCH + timedelta(seconds=instant)).month
        return self.summer_offset is not None and 4 <= month <= 9

    def local_offset_string(self, instant):
        self.calls.append(("local_offset_string", instant))
        return self.summer_offset if self.is_dst(instant) else self.offset

    def zone_name(self, instant):
        return self.name + ("S" if self.is_dst(instant) else "")


class BrokenCalendarService(FakeCalendarService):
    def local_offset_string(self, instant):
        raise OverflowError("timestamp out of range for platform time_t")


JD_WINTER = string_to_jday("2024-01-15T12:00:00")
JD_SUMMER = string_to_jday("2024-07-15T12:00:00")


class TestParseOffset:
    @pytest.mark.parametrize(
        "text, hours",
        [("+0000", 0.0), ("+0100", 1.0), ("-0500", -5.0), ("+0530", 5.5), ("+0545", 5.75), ("-0330", -3.5)],
    )
    def test_offsets(self, text: str, hours: float) -> None:
        assert parse_offset(text) == pytest.approx(hours)

    @pytest.mark.parametrize("text", ["", "0100", "+1", "UTC", None])
    def test_malformed(self, text) -> None:
        with pytest.raises(CalendarServiceUnavailable):
            parse_offset(text)


class TestGetGmtShift:
    def test_fixed_offset(self) -> None:
        assert get_gmt_shift(JD_WINTER, calendar=FakeCalendarService("+0100")) == 1.0

    def test_negative_half_hour(self) -> None:
        assert get_gmt_shift(JD_WINTER, calendar=FakeCalendarService("-0330")) == -3.5

    def test_daylight_saving(self) -> None:
        calendar = FakeCalendarService("+0100", summer_offset="+0200")
        assert get_gmt_shift(JD_WINTER, calendar=calendar) == 1.0
        assert get_gmt_shift(JD_SUMMER, calendar=calendar) == 2.0

    def test_utc_path_goes_through_fields(self) -> None:
        calendar = FakeCalendarService("+0100")
        get_gmt_shift(JD_WINTER, calendar=calendar)
        assert [c[0] for c in calendar.calls] == ["jd_to_fields", "fields_to_instant", "local_offset_string"]

    def test_local_path_uses_instant(self) -> None:
        calendar = FakeCalendarService("+0100")
        get_gmt_shift(JD_WINTER, local=True, calendar=calendar)
        assert [c[0] for c in calendar.calls] == ["jd_to_instant", "local_offset_string"]

    def test_clamped_before_1970(self) -> None:
        calendar = FakeCalendarService("+0100")
        get_gmt_shift(2400000.0, local=True, calendar=calendar)
        assert calendar.calls[0] == ("jd_to_instant", EPOCH_JD)
        assert calendar.calls[1] == ("local_offset_string", (EPOCH_JD - UNIX_EPOCH_JD) * 86400.0)

    def test_verbose(self, capsys) -> None:
        get_gmt_shift(2400000.0, calendar=FakeCalendarService("+0100"), verbose=True)
        out = capsys.readouterr().out
        assert "@astrotext.tz:" in out
        assert "+0100" in out

    def test_service_error_propagates(self) -> None:
        with pytest.raises(CalendarServiceUnavailable) as excinfo:
            get_gmt_shift(JD_WINTER, calendar=BrokenCalendarService())
        assert isinstance(excinfo.value.__cause__, OverflowError)

    def test_bad_offset_string(self) -> None:
        with pytest.raises(CalendarServiceUnavailable):
            get_gmt_shift(JD_WINTER, calendar=FakeCalendarService("bogus"))


class TestGetTimeZoneName:
    def test_name_follows_summer_time(self) -> None:
        calendar = FakeCalendarService("+0100", summer_offset="+0200", name="CET")
        assert get_time_zone_name(JD_WINTER, calendar=calendar) == "CET"
        assert get_time_zone_name(JD_SUMMER, calendar=calendar) == "CETS"


class TestSystemCalendarService:
    def test_utc(self) -> None:
        assert get_gmt_shift(JD_WINTER, calendar=SystemCalendarService(zone="UTC")) == 0.0

    def test_half_hour_zone(self) -> None:
        assert get_gmt_shift(JD_SUMMER, calendar=SystemCalendarService(zone="Asia/Kolkata")) == 5.5

    def test_daylight_saving(self) -> None:
        calendar = SystemCalendarService(zone="Europe/Paris")
        assert get_gmt_shift(JD_WINTER, calendar=calendar) == 1.0
        assert get_gmt_shift(JD_SUMMER, calendar=calendar) == 2.0
        assert get_gmt_shift(JD_SUMMER, local=True, calendar=calendar) == 2.0
        assert get_time_zone_name(JD_WINTER, calendar=calendar) == "CET"
        assert get_time_zone_name(JD_SUMMER, calendar=calendar) == "CEST"

    def test_western_zone(self) -> None:
        calendar = SystemCalendarService(zone="America/St_Johns")
        assert get_gmt_shift(JD_WINTER, calendar=calendar) == -3.5

    def test_is_dst(self) -> None:
        calendar = SystemCalendarService(zone="Europe/Paris")
        assert calendar.is_dst(calendar.jd_to_instant(JD_SUMMER))
        assert not calendar.is_dst(calendar.jd_to_instant(JD_WINTER))

    def test_local_fields(self) -> None:
        calendar = SystemCalendarService(zone="Asia/Tokyo")
        fields = calendar.instant_to_local_fields(calendar.jd_to_instant(string_to_jday("2000-01-01T12:00:00")))
        assert fields == CalendarDateTime(2000, 1, 1, 21, 0, 0)

    def test_local_zone(self) -> None:
        # the process zone is unknown here, only check the result is an offset
        shift = get_gmt_shift(JD_WINTER, calendar=SystemCalendarService(zone="local"))
        assert -14.0 <= shift <= 14.0

    @pytest.mark.parametrize("zone", ["Not/AZone", "/etc/localtime"])
    def test_unknown_zone(self, zone: str) -> None:
        with pytest.raises(CalendarServiceUnavailable, match="Unknown time zone"):
            SystemCalendarService(zone=zone)
