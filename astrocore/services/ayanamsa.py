"""Tropical to sidereal conversion.

ayanamsa(jd) = offset at J2000.0 + precession rate * years + a small
nutation-like periodic correction. The same value is used for every body
and angle in one chart.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..errors import UnsupportedAyanamsaError
from .constants import normalize
from .timeconv import J2000

JULIAN_YEAR_DAYS = 365.25
# 50.2388475 arc-seconds of general precession per year
PRECESSION_DEG_PER_YEAR = 50.2388475 / 3600.0


@dataclass(frozen=True)
class AyanamsaModel:
    name: str
    offset_j2000: float
    rate: float = PRECESSION_DEG_PER_YEAR

    def value(self, jd: float) -> float:
        years = (jd - J2000) / JULIAN_YEAR_DAYS
        # lunar node (18.6 y) and semi-annual solar terms
        periodic = (
            0.0017 * math.sin(math.radians(125.04 - 19.3413 * years))
            + 0.0002 * math.sin(math.radians(200.93 + 720.0 * years))
        )
        return self.offset_j2000 + self.rate * years + periodic


AYANAMSHA_MAP: Mapping[str, AyanamsaModel] = MappingProxyType({
    "lahiri": AyanamsaModel("lahiri", 23.853),
    "krishnamurti": AyanamsaModel("krishnamurti", 23.757),
    "raman": AyanamsaModel("raman", 22.410),
})

DEFAULT_AYANAMSHA = "lahiri"


def get_model(name: str = DEFAULT_AYANAMSHA) -> AyanamsaModel:
    key = name.strip().lower() if isinstance(name, str) else name
    try:
        return AYANAMSHA_MAP[key]
    except (KeyError, TypeError) as exc:
        raise UnsupportedAyanamsaError(name) from exc


def ayanamsa(jd: float, name: str = DEFAULT_AYANAMSHA) -> float:
    return get_model(name).value(jd)


def to_sidereal(tropical_lon: float, ayanamsa_value: float) -> float:
    return normalize(tropical_lon - ayanamsa_value)
