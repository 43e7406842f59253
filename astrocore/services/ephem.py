"""Low-order ephemeris used by the chart orchestrator.

Longitudes come from mean elements at J2000.0 advanced by a secular rate,
plus one or two periodic (equation-of-centre style) sine terms. Good to a
fraction of a degree for the Sun and a degree or so for the Moon.

The planets are heliocentric mean longitudes and only indicative. Nothing
holds Mercury and Venus near the Sun, so a chart can show Sun-Mercury or
Sun-Venus separations of up to 180°, and aspects between them (a square or
an opposition) that the real sky never shows.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .. import __version__
from ..errors import BodyComputationError
from ..models import Body
from .constants import normalize
from .timeconv import DAYS_PER_CENTURY, J2000, julian_centuries

logger = logging.getLogger(__name__)

ENGINE_VERSION = f"astrocore-{__version__}"

TROPICAL_YEAR_DAYS = 365.25


@dataclass(frozen=True)
class PerturbationTerm:
    """``amplitude * sin(phase + rate * T)``, degrees and degrees/century."""

    amplitude: float
    phase: float
    rate: float

    def at(self, t: float) -> float:
        return self.amplitude * math.sin(math.radians(self.phase + self.rate * t))


@dataclass(frozen=True)
class BodyElements:
    base_lon: float
    rate: float  # deg / Julian century
    terms: Tuple[PerturbationTerm, ...] = ()
    max_latitude: float = 0.0
    distance_au: float = 1.0

    @property
    def mean_daily_motion(self) -> float:
        return self.rate / DAYS_PER_CENTURY


_NODE = BodyElements(125.04452, -1934.136261, (), 0.0, 0.00257)

ELEMENTS: Mapping[Body, BodyElements] = MappingProxyType({
    Body.SUN: BodyElements(
        280.46646, 36000.76983,
        (
            PerturbationTerm(1.914602, 357.52911, 35999.05029),
            PerturbationTerm(0.019993, 715.05822, 71998.10058),
        ),
        0.0, 1.0,
    ),
    Body.MOON: BodyElements(
        218.3164477, 481267.88123421,
        (
            # equation of centre on the anomaly M'
            PerturbationTerm(6.289, 134.9633964, 477198.8675055),
            # evection, on M' - 2D
            PerturbationTerm(-1.274, -460.7369878, -413335.3553013),
        ),
        5.145, 0.00257,
    ),
    Body.MERCURY: BodyElements(252.250906, 149474.0722491, (PerturbationTerm(23.44, 174.7948, 149472.5153),), 7.005, 0.387),
    Body.VENUS: BodyElements(181.979801, 58519.2130302, (PerturbationTerm(0.7758, 50.4161, 58517.8039),), 3.395, 0.723),
    Body.MARS: BodyElements(355.433, 19141.6964746, (PerturbationTerm(10.691, 19.3730, 19139.8585),), 1.850, 1.524),
    Body.JUPITER: BodyElements(34.351519, 3036.3027748, (PerturbationTerm(5.555, 20.0202, 3034.6962),), 1.303, 5.203),
    Body.SATURN: BodyElements(50.077444, 1223.5110686, (PerturbationTerm(6.406, 317.0207, 1222.1138),), 2.485, 9.537),
    Body.RAHU: _NODE,
    Body.KETU: _NODE,
})

BODIES: Tuple[Body, ...] = tuple(Body)


@dataclass(frozen=True)
class TropicalPosition:
    body: Body
    lon: float
    lat: float
    distance_au: float
    speed: float


def _longitude(body: Body, el: BodyElements, t: float) -> float:
    lon = normalize(el.base_lon + el.rate * t)
    for term in el.terms:
        lon += term.at(t)
    if body is Body.KETU:
        lon += 180.0
    return normalize(lon)


def _latitude(el: BodyElements, jd: float) -> float:
    if not el.max_latitude:
        return 0.0
    return el.max_latitude * math.sin(2.0 * math.pi * (jd - J2000) / TROPICAL_YEAR_DAYS)


def body_position(body: Body, jd: float, elements: Mapping[Body, BodyElements] = ELEMENTS) -> TropicalPosition:
    """Tropical geocentric-ish position of one body at a Julian Day (UT)."""

    try:
        el = elements[body]
        t = julian_centuries(jd)
        lon = _longitude(body, el, t)
        lat = _latitude(el, jd)
        values = (lon, lat, el.distance_au, el.mean_daily_motion)
    except (ArithmeticError, ValueError, KeyError, TypeError) as exc:
        logger.error("body_computation_failed", extra={"body": body.value, "jd": jd})
        raise BodyComputationError(body, str(exc) or type(exc).__name__) from exc
    if not all(math.isfinite(v) for v in values):
        logger.error("body_computation_non_finite", extra={"body": body.value, "jd": jd})
        raise BodyComputationError(body, "non-finite result")
    return TropicalPosition(body, lon, lat, el.distance_au, el.mean_daily_motion)


def positions_ecliptic(jd_utc: float, bodies: Tuple[Body, ...] = BODIES) -> Dict[Body, TropicalPosition]:
    """Return tropical positions for the requested bodies, in order."""

    return {body: body_position(body, jd_utc) for body in bodies}
