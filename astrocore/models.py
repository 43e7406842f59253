"""Immutable value types flowing through the chart pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Body(str, Enum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"


@dataclass(frozen=True)
class ChartRequest:
    """Birth (or query) moment and place.

    ``when`` is either naive local civil time, paired with ``tz``, or an
    aware datetime carrying its own offset.
    """

    when: datetime
    tz: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]


@dataclass(frozen=True)
class BodyPosition:
    body: Body
    tropical_lon: float
    sidereal_lon: float
    latitude: float
    distance_au: float
    speed: float

    @property
    def retrograde(self) -> bool:
        return self.speed < 0


@dataclass(frozen=True)
class ZodiacPlacement:
    sign_index: int
    sign: str
    degree_in_sign: float
    nakshatra_index: int
    nakshatra: str
    nakshatra_lord: str
    pada: int


@dataclass(frozen=True)
class HouseCusp:
    number: int
    cusp_lon: float
    sign: str
    ruler: str


@dataclass(frozen=True)
class Aspect:
    body_a: Body
    body_b: Body
    aspect_type: str
    separation: float
    orb: float
    applying: bool
    strength: int
    interpretation: str

    @property
    def pair(self) -> frozenset:
        return frozenset((self.body_a, self.body_b))


@dataclass(frozen=True)
class MoonPhase:
    """Phase of the Moon from its elongation east of the Sun."""

    elongation: float
    tithi: int  # 1..30
    paksha: str
    name: str


@dataclass(frozen=True)
class ChartPoint:
    position: BodyPosition
    placement: ZodiacPlacement
    house: int
    dignity: str

    @property
    def body(self) -> Body:
        return self.position.body


@dataclass(frozen=True)
class Chart:
    local_time: datetime
    tz: str
    latitude: float
    longitude: float
    utc_time: datetime
    julian_day: float
    sidereal_time: float
    obliquity: float
    ayanamsha: str
    ayanamsa: float
    ascendant: float
    midheaven: float
    points: Tuple[ChartPoint, ...]
    houses: Tuple[HouseCusp, ...]
    aspects: Tuple[Aspect, ...]
    elements: Tuple[Tuple[str, int], ...]
    modalities: Tuple[Tuple[str, int], ...]
    moon_phase: MoonPhase

    def point(self, body: Body) -> ChartPoint:
        for p in self.points:
            if p.body == body:
                return p
        raise KeyError(body)
