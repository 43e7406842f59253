"""Chart orchestrator: runs the pipeline and assembles an immutable ``Chart``.

time -> tropical positions -> ayanamsa -> {placements, houses} -> aspects.
Every step is a pure function of the request, so identical requests give
identical charts.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..config import get_settings
from ..errors import ChartIntegrityError, CoordinateRangeError, IncompleteLocationError
from ..models import Body, BodyPosition, Chart, ChartPoint, ChartRequest, HouseCusp
from . import ephem
from .aspects import MAJOR, AspectDef, CrossAspect, find_aspects, find_cross_aspects
from .ayanamsa import get_model, to_sidereal
from .constants import normalize
from .derivations import balances
from .dignities import dignity_for
from .houses import HOUSE_SPAN, ascendant, equal_house_cusps, house_of, midheaven, obliquity
from .timeconv import julian_day, local_sidereal_time, resolve_zone, to_utc
from .vedic import moon_phase, placement

logger = logging.getLogger(__name__)

# Slack for float rounding when re-checking cusp spacing and house arcs.
_TOL = 1e-7


def _coordinate(field: str, value: object, lo: float, hi: float) -> float:
    if isinstance(value, bool):
        raise CoordinateRangeError(field, value, lo, hi)
    try:
        v = float(value)
    except (TypeError, ValueError) as exc:
        raise CoordinateRangeError(field, value, lo, hi) from exc
    if not math.isfinite(v) or not lo <= v <= hi:
        raise CoordinateRangeError(field, value, lo, hi)
    return v


def validate_location(lat: Optional[float], lon: Optional[float]) -> Tuple[float, float]:
    """Check coordinates without substituting defaults."""

    missing = [name for name, v in (("latitude", lat), ("longitude", lon)) if v is None]
    if missing:
        raise IncompleteLocationError(f"Missing {', '.join(missing)}")
    return _coordinate("latitude", lat, -90.0, 90.0), _coordinate("longitude", lon, -180.0, 180.0)


def _local_time(when: datetime, tz: Optional[str]) -> Tuple[datetime, str]:
    if when.tzinfo is not None and when.utcoffset() is not None:
        if tz:
            return when.astimezone(resolve_zone(tz)), tz
        offset = when.utcoffset()
        minutes = int(offset.total_seconds() // 60)
        sign = "+" if minutes >= 0 else "-"
        label = "UTC" if minutes == 0 else f"UTC{sign}{abs(minutes) // 60:02d}:{abs(minutes) % 60:02d}"
        return when, label
    return when.replace(tzinfo=resolve_zone(tz)), tz


def compute_chart(
    request: ChartRequest,
    *,
    ayanamsha: Optional[str] = None,
    aspect_table: Sequence[AspectDef] = MAJOR,
) -> Chart:
    lat, lon = validate_location(request.latitude, request.longitude)
    utc = to_utc(request.when, request.tz)
    local, tz_label = _local_time(request.when, request.tz)
    jd = julian_day(utc)

    model = get_model(ayanamsha or get_settings().ayanamsha)
    ayan = model.value(jd)

    tropical = ephem.positions_ecliptic(jd)
    positions = tuple(
        BodyPosition(
            body=body,
            tropical_lon=p.lon,
            sidereal_lon=to_sidereal(p.lon, ayan),
            latitude=p.lat,
            distance_au=p.distance_au,
            speed=p.speed,
        )
        for body, p in tropical.items()
    )

    lst = local_sidereal_time(jd, lon)
    eps = obliquity(jd)
    asc = to_sidereal(ascendant(lst, lat, eps), ayan)
    mc = to_sidereal(midheaven(lst, eps), ayan)
    cusps = equal_house_cusps(asc)
    cusp_lons = [c.cusp_lon for c in cusps]

    points = []
    for pos in positions:
        zp = placement(pos.sidereal_lon)
        points.append(ChartPoint(
            position=pos,
            placement=zp,
            house=house_of(pos.sidereal_lon, cusp_lons),
            dignity=dignity_for(pos.body.value, zp.sign),
        ))

    aspects = find_aspects(positions, aspect_table)
    elements, modalities = balances(p.placement.sign for p in points)
    by_body = {p.body: p.sidereal_lon for p in positions}
    phase = moon_phase(by_body[Body.SUN], by_body[Body.MOON])

    chart = assemble_chart(
        local_time=local,
        tz=tz_label,
        latitude=lat,
        longitude=lon,
        utc_time=utc,
        julian_day=jd,
        sidereal_time=lst,
        obliquity=eps,
        ayanamsha=model.name,
        ayanamsa=ayan,
        ascendant=asc,
        midheaven=mc,
        points=tuple(points),
        houses=cusps,
        aspects=tuple(aspects),
        elements=tuple(elements.items()),
        modalities=tuple(modalities.items()),
        moon_phase=phase,
    )
    logger.debug(
        "chart_computed",
        extra={"jd": jd, "ayanamsha": model.name, "aspect_count": len(aspects)},
    )
    return chart


def assemble_chart(**fields) -> Chart:
    """Build the ``Chart`` and check its structural invariants."""

    return validate_chart(Chart(**fields))


def _arc(start: float, end: float) -> float:
    return normalize(end - start)


def _check_houses(houses: Tuple[HouseCusp, ...], asc: float) -> None:
    if len(houses) != 12:
        raise ChartIntegrityError(f"Expected 12 house cusps, got {len(houses)}")
    if [h.number for h in houses] != list(range(1, 13)):
        raise ChartIntegrityError("House cusps must be numbered 1..12 in order")
    off = _arc(asc, houses[0].cusp_lon)
    if _TOL < off < 360.0 - _TOL:
        raise ChartIntegrityError("House 1 cusp does not match the ascendant")
    for i, h in enumerate(houses):
        nxt = houses[(i + 1) % 12]
        if abs(_arc(h.cusp_lon, nxt.cusp_lon) - HOUSE_SPAN) > _TOL:
            raise ChartIntegrityError(f"Cusps {h.number} and {nxt.number} are not {HOUSE_SPAN:g}° apart")


def _check_points(points: Tuple[ChartPoint, ...], houses: Tuple[HouseCusp, ...]) -> None:
    counts = Counter(p.body for p in points)
    missing = [b.value for b in Body if b not in counts]
    if missing:
        raise ChartIntegrityError(f"Bodies missing from the chart: {', '.join(missing)}")
    dupes = [b.value for b, n in counts.items() if n > 1]
    if dupes:
        raise ChartIntegrityError(f"Bodies placed more than once: {', '.join(dupes)}")
    for p in points:
        if not 1 <= p.house <= 12:
            raise ChartIntegrityError(f"{p.body.value} has no valid house ({p.house})")
        offset = _arc(houses[p.house - 1].cusp_lon, p.position.sidereal_lon)
        if offset >= HOUSE_SPAN + _TOL and offset <= 360.0 - _TOL:
            raise ChartIntegrityError(f"{p.body.value} is not inside house {p.house}")


def _check_aspects(chart: Chart) -> None:
    placed = {p.body for p in chart.points}
    seen = set()
    for a in chart.aspects:
        if a.body_a == a.body_b:
            raise ChartIntegrityError(f"Self aspect on {a.body_a.value}")
        if a.body_a not in placed or a.body_b not in placed:
            raise ChartIntegrityError("Aspect refers to a body missing from the chart")
        if a.pair in seen:
            raise ChartIntegrityError(f"Duplicate aspect between {a.body_a.value} and {a.body_b.value}")
        seen.add(a.pair)


def validate_chart(chart: Chart) -> Chart:
    try:
        _check_houses(chart.houses, chart.ascendant)
        _check_points(chart.points, chart.houses)
        _check_aspects(chart)
    except ChartIntegrityError as exc:
        logger.error("chart_integrity_failed", extra={"reason": str(exc), "jd": chart.julian_day})
        raise
    return chart


def cross_aspects(transit: Chart, natal: Chart, table: Sequence[AspectDef] = MAJOR) -> List[CrossAspect]:
    """Aspects formed by the bodies of ``transit`` to those of ``natal``.

    Both charts must use the same ayanamsa system so their sidereal
    longitudes share a frame.
    """

    if transit.ayanamsha != natal.ayanamsha:
        raise ValueError(
            f"Charts use different ayanamsha systems: {transit.ayanamsha} vs {natal.ayanamsha}"
        )
    return find_cross_aspects(
        (p.position for p in transit.points),
        (p.position for p in natal.points),
        table,
    )


def transit_chart(natal: Chart, when: datetime, tz: Optional[str] = None) -> Chart:
    """Chart for ``when`` at the natal place, in the natal ayanamsa.

    ``when`` must be aware unless ``tz`` names its zone; a naive moment with
    no zone raises ``IncompleteLocationError`` like any other request.
    """

    request = ChartRequest(when=when, tz=tz, latitude=natal.latitude, longitude=natal.longitude)
    return compute_chart(request, ayanamsha=natal.ayanamsha)


__all__ = [
    "assemble_chart",
    "compute_chart",
    "cross_aspects",
    "transit_chart",
    "validate_chart",
    "validate_location",
]
