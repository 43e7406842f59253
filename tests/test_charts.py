from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from astrocore.errors import (
    ChartIntegrityError,
    CoordinateRangeError,
    IncompleteLocationError,
    InvalidTimezoneError,
    UnsupportedAyanamsaError,
)
from astrocore.models import Body, ChartRequest
from astrocore.services.aspects import MAJOR
from astrocore.services.chart import (
    compute_chart,
    cross_aspects,
    transit_chart,
    validate_chart,
    validate_location,
)
from astrocore.services.constants import normalize
from astrocore.services.timeconv import julian_day


def _request(**kw):
    base = dict(when=datetime(1990, 8, 18, 14, 32), tz="Asia/Kolkata", latitude=17.385, longitude=78.4867)
    base.update(kw)
    return ChartRequest(**base)


@pytest.fixture
def chart():
    return compute_chart(_request())


def test_chart_shape(chart):
    assert [p.body for p in chart.points] == list(Body)
    assert len(chart.houses) == 12
    assert chart.ayanamsha == "lahiri"
    assert chart.julian_day == pytest.approx(julian_day(datetime(1990, 8, 18, 9, 2, tzinfo=timezone.utc)))
    assert chart.utc_time == datetime(1990, 8, 18, 9, 2, tzinfo=timezone.utc)
    assert chart.tz == "Asia/Kolkata"


def test_sun_is_in_sidereal_leo(chart):
    sun = chart.point(Body.SUN)
    assert sun.placement.sign == "Leo"
    assert sun.dignity == "domicile"


def test_single_ayanamsa_for_all_bodies(chart):
    assert 23.6 < chart.ayanamsa < 23.8
    for p in chart.points:
        assert normalize(p.position.tropical_lon - p.position.sidereal_lon) == pytest.approx(chart.ayanamsa)


def test_house_partition(chart):
    cusps = chart.houses
    assert cusps[0].cusp_lon == chart.ascendant
    for a, b in zip(cusps, cusps[1:] + cusps[:1]):
        assert normalize(b.cusp_lon - a.cusp_lon) == pytest.approx(30.0)
    for p in chart.points:
        offset = normalize(p.position.sidereal_lon - cusps[p.house - 1].cusp_lon)
        assert offset < 30.0 + 1e-9


def test_nodes_always_in_opposition(chart):
    pairs = {(a.pair, a.aspect_type) for a in chart.aspects}
    assert (frozenset((Body.RAHU, Body.KETU)), "opposition") in pairs


def test_aspects_respect_orbs(chart):
    orbs = {a.name: a.orb for a in MAJOR}
    for a in chart.aspects:
        assert a.orb <= orbs[a.aspect_type]
        assert 1 <= a.strength <= 10
        assert a.body_a != a.body_b


def test_identical_input_gives_identical_chart(chart):
    again = compute_chart(_request())
    assert again == chart


def test_offset_datetime_matches_zone_id(chart):
    ist = timezone(timedelta(hours=5, minutes=30))
    aware = compute_chart(_request(when=datetime(1990, 8, 18, 14, 32, tzinfo=ist), tz=None))
    assert aware.julian_day == chart.julian_day
    assert aware.points == chart.points
    assert aware.tz == "UTC+05:30"


def test_ayanamsha_override():
    kp = compute_chart(_request(), ayanamsha="krishnamurti")
    assert kp.ayanamsha == "krishnamurti"
    with pytest.raises(UnsupportedAyanamsaError):
        compute_chart(_request(), ayanamsha="nope")


def test_ayanamsha_from_settings(monkeypatch):
    from astrocore.config import get_settings

    monkeypatch.setenv("ASTRO_AYANAMSHA", "raman")
    get_settings.cache_clear()
    assert compute_chart(_request()).ayanamsha == "raman"


@pytest.mark.parametrize(
    "kw, error",
    [
        ({"latitude": 200.0}, CoordinateRangeError),
        ({"latitude": -90.5}, CoordinateRangeError),
        ({"longitude": 181.0}, CoordinateRangeError),
        ({"longitude": float("nan")}, CoordinateRangeError),
        ({"latitude": None}, IncompleteLocationError),
        ({"longitude": None}, IncompleteLocationError),
        ({"tz": "Not/AZone"}, InvalidTimezoneError),
        ({"tz": None}, IncompleteLocationError),
    ],
)
def test_bad_input_raises_typed_error(kw, error):
    with pytest.raises(error):
        compute_chart(_request(**kw))


def test_poles_and_dateline_are_accepted():
    assert validate_location(90, -180) == (90.0, -180.0)
    polar = compute_chart(_request(latitude=-90.0, longitude=180.0))
    assert len(polar.houses) == 12


def test_missing_cusp_is_rejected(chart):
    with pytest.raises(ChartIntegrityError):
        validate_chart(replace(chart, houses=chart.houses[:11]))


def test_uneven_cusps_are_rejected(chart):
    bent = list(chart.houses)
    bent[4] = replace(bent[4], cusp_lon=normalize(bent[4].cusp_lon + 1.0))
    with pytest.raises(ChartIntegrityError):
        validate_chart(replace(chart, houses=tuple(bent)))


def test_duplicate_body_is_rejected(chart):
    with pytest.raises(ChartIntegrityError):
        validate_chart(replace(chart, points=chart.points + chart.points[:1]))


def test_missing_body_is_rejected(chart):
    for body in (Body.SUN, Body.KETU):
        points = tuple(p for p in chart.points if p.body is not body)
        aspects = tuple(a for a in chart.aspects if body not in a.pair)
        with pytest.raises(ChartIntegrityError, match=body.value):
            validate_chart(replace(chart, points=points, aspects=aspects))


def test_wrong_house_is_rejected(chart):
    p = chart.points[0]
    moved = replace(p, house=p.house % 12 + 1)
    with pytest.raises(ChartIntegrityError):
        validate_chart(replace(chart, points=(moved,) + chart.points[1:]))


def test_duplicate_aspect_pair_is_rejected(chart):
    a = chart.aspects[0]
    flipped = replace(a, body_a=a.body_b, body_b=a.body_a)
    with pytest.raises(ChartIntegrityError):
        validate_chart(replace(chart, aspects=chart.aspects + (flipped,)))


def test_transit_to_natal_contacts(chart):
    now = transit_chart(chart, datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
    assert now.latitude == chart.latitude and now.ayanamsha == chart.ayanamsha
    found = cross_aspects(now, chart)
    orbs = {a.name: a.orb for a in MAJOR}
    assert all(c.orb <= orbs[c.aspect_type] for c in found)
    assert all(c.transit_body in set(Body) for c in found)


def test_transit_moment_needs_a_zone(chart):
    with pytest.raises(IncompleteLocationError):
        transit_chart(chart, datetime(2024, 1, 1, 12, 0))
    named = transit_chart(chart, datetime(2024, 1, 1, 17, 30), tz="Asia/Kolkata")
    assert named.utc_time == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_cross_aspects_need_same_frame(chart):
    other = compute_chart(_request(), ayanamsha="raman")
    with pytest.raises(ValueError):
        cross_aspects(other, chart)


def test_moon_phase_follows_sun_moon_elongation(chart):
    sun = chart.point(Body.SUN).position.sidereal_lon
    moon = chart.point(Body.MOON).position.sidereal_lon
    phase = chart.moon_phase
    assert phase.elongation == pytest.approx(normalize(moon - sun))
    assert phase.tithi == int(phase.elongation // 12) + 1
    assert phase.paksha == ("Shukla" if phase.tithi <= 15 else "Krishna")


def test_aspects_in_chart_are_interpreted(chart):
    assert chart.aspects
    for a in chart.aspects:
        assert a.interpretation.startswith(f"{a.body_a.value} {a.aspect_type} {a.body_b.value}: ")
