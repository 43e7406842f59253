from datetime import datetime, timedelta, timezone

import pytest

from astrocore.errors import IncompleteLocationError, InvalidTimezoneError
from astrocore.services.timeconv import (
    J2000,
    greenwich_sidereal_time,
    julian_centuries,
    julian_day,
    local_sidereal_time,
    to_utc,
)


def test_j2000_midnight_reference_value():
    assert julian_day(datetime(2000, 1, 1, tzinfo=timezone.utc)) == 2451544.5


@pytest.mark.parametrize(
    "dt, expected",
    [
        (datetime(2000, 1, 1, 12), 2451545.0),
        (datetime(2000, 2, 29), 2451603.5),   # January/February branch
        (datetime(1987, 1, 27), 2446822.5),
        (datetime(1988, 6, 19, 12), 2447332.0),
    ],
)
def test_julian_day_known_dates(dt, expected):
    assert julian_day(dt) == pytest.approx(expected, abs=1e-9)


def test_julian_day_strictly_increasing_for_fixed_zone():
    start = datetime(2023, 12, 31, 22, 0)
    stamps = [start + timedelta(minutes=37 * i, seconds=i) for i in range(200)]
    jds = [julian_day(to_utc(s, "Asia/Kolkata")) for s in stamps]
    assert all(a < b for a, b in zip(jds, jds[1:]))


def test_julian_day_matches_swiss_ephemeris():
    swe = pytest.importorskip("swisseph")
    dt = datetime(1990, 8, 18, 9, 2, 30, tzinfo=timezone.utc)
    hour = 9 + 2 / 60 + 30 / 3600
    assert julian_day(dt) == pytest.approx(swe.julday(1990, 8, 18, hour, swe.GREG_CAL), abs=1e-8)


def test_to_utc_applies_daylight_saving_rules():
    summer = to_utc(datetime(2021, 7, 1, 12, 0), "America/New_York")
    winter = to_utc(datetime(2021, 1, 1, 12, 0), "America/New_York")
    assert summer == datetime(2021, 7, 1, 16, 0, tzinfo=timezone.utc)
    assert winter == datetime(2021, 1, 1, 17, 0, tzinfo=timezone.utc)


def test_aware_datetime_needs_no_zone():
    ist = timezone(timedelta(hours=5, minutes=30))
    utc = to_utc(datetime(2000, 1, 1, 5, 30, tzinfo=ist))
    assert julian_day(utc) == 2451544.5


def test_unknown_zone_raises():
    with pytest.raises(InvalidTimezoneError) as exc:
        to_utc(datetime(2000, 1, 1), "Not/AZone")
    assert exc.value.tz == "Not/AZone"
    assert isinstance(exc.value, ValueError)


def test_aware_datetime_with_bad_zone_still_rejected():
    with pytest.raises(InvalidTimezoneError):
        to_utc(datetime(2000, 1, 1, tzinfo=timezone.utc), "Mars/Olympus_Mons")


def test_naive_datetime_without_zone_is_incomplete():
    with pytest.raises(IncompleteLocationError):
        to_utc(datetime(2000, 1, 1))


def test_sidereal_time_at_epoch():
    assert julian_centuries(J2000) == 0.0
    assert greenwich_sidereal_time(J2000) == pytest.approx(280.46061837)
    # east longitude adds, result wraps into [0, 360)
    assert local_sidereal_time(J2000, 100.0) == pytest.approx(20.46061837)
    assert local_sidereal_time(J2000, -180.0) == pytest.approx(100.46061837)
