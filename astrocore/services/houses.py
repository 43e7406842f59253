import math
from typing import Sequence, Tuple

from ..models import HouseCusp
from .constants import normalize, sign_name_from_lon
from .dignities import ruler_of
from .timeconv import julian_centuries

HOUSE_SPAN = 30.0


def obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees (linear in T)."""

    return 23.4392911 - 0.0130042 * julian_centuries(jd)


def ascendant(lst: float, lat: float, eps: float) -> float:
    """Tropical ecliptic longitude rising in the east."""

    th, phi, e = math.radians(lst), math.radians(lat), math.radians(eps)
    y = math.cos(th)
    x = -(math.sin(th) * math.cos(e) + math.tan(phi) * math.sin(e))
    return normalize(math.degrees(math.atan2(y, x)))


def midheaven(lst: float, eps: float) -> float:
    th, e = math.radians(lst), math.radians(eps)
    return normalize(math.degrees(math.atan2(math.sin(th), math.cos(th) * math.cos(e))))


def equal_house_cusps(asc: float) -> Tuple[HouseCusp, ...]:
    cusps = []
    for i in range(12):
        lon = normalize(asc + i * HOUSE_SPAN)
        sign = sign_name_from_lon(lon)
        cusps.append(HouseCusp(number=i + 1, cusp_lon=lon, sign=sign, ruler=ruler_of(sign)))
    return tuple(cusps)


def house_of(lon: float, cusps: Sequence[float]) -> int:
    # Shift everything so cusp 1 sits at 0°, then find the sector
    # cusp[i] <= lon < cusp[i+1]; this handles the 360°/0° wrap.
    shift = cusps[0]
    nlon = normalize(lon - shift)
    ncusps = [normalize(c - shift) for c in cusps[1:]] + [360.0]
    lower = 0.0
    for i, upper in enumerate(ncusps):
        if lower <= nlon < upper:
            return i + 1
        lower = upper
    return 12
