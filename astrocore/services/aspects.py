from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple

from ..models import Aspect, Body, BodyPosition
from .transit_math import is_applying, separation


@dataclass(frozen=True)
class AspectDef:
    name: str
    angle: float
    orb: float
    base_strength: int = 5


MAJOR: Tuple[AspectDef, ...] = (
    AspectDef("conjunction", 0.0, 8.0, 10),
    AspectDef("sextile", 60.0, 6.0, 6),
    AspectDef("square", 90.0, 8.0, 8),
    AspectDef("trine", 120.0, 8.0, 7),
    AspectDef("opposition", 180.0, 8.0, 9),
)

ASPECT_MEANINGS: Mapping[str, str] = MappingProxyType({
    "conjunction": "Blending and amplification of energies",
    "sextile": "Harmonious opportunity and cooperation",
    "square": "Tension and challenge requiring action",
    "trine": "Natural harmony and flowing energy",
    "opposition": "Balance and integration of opposing forces",
})
DEFAULT_MEANING = "Astrological influence"


def interpret(body_a: Body, body_b: Body, aspect_type: str) -> str:
    """One-line reading such as "Sun trine Jupiter: Natural harmony and flowing energy"."""

    meaning = ASPECT_MEANINGS.get(aspect_type.lower(), DEFAULT_MEANING)
    return f"{body_a.value} {aspect_type.lower()} {body_b.value}: {meaning}"


def classify(sep: float, table: Sequence[AspectDef] = MAJOR) -> AspectDef | None:
    """First aspect whose orb contains ``sep``, or None."""

    for a in table:
        if abs(sep - a.angle) <= a.orb:
            return a
    return None


def strength(base: int, orb: float) -> int:
    if orb > 3:
        base -= 2
    elif orb > 1:
        base -= 1
    return max(1, min(10, base))


def _applying(p1: BodyPosition, p2: BodyPosition, angle: float) -> bool:
    # the faster body does the moving; the slower one is the reference
    fast, slow = (p1, p2) if abs(p1.speed) >= abs(p2.speed) else (p2, p1)
    return is_applying(fast.sidereal_lon, fast.speed, slow.sidereal_lon, slow.speed, angle)


def find_aspects(positions: Sequence[BodyPosition], table: Sequence[AspectDef] = MAJOR) -> List[Aspect]:
    res = []
    for i in range(len(positions)):
        for j in range(i+1, len(positions)):
            p1, p2 = positions[i], positions[j]
            if p1.body == p2.body:
                continue
            d = separation(p1.sidereal_lon, p2.sidereal_lon)
            match = classify(d, table)
            if match is None:
                continue
            orb = abs(d - match.angle)
            res.append(Aspect(
                body_a=p1.body,
                body_b=p2.body,
                aspect_type=match.name,
                separation=d,
                orb=orb,
                applying=_applying(p1, p2, match.angle),
                strength=strength(match.base_strength, orb),
                interpretation=interpret(p1.body, p2.body, match.name),
            ))
    return sorted(res, key=lambda x: x.orb)


@dataclass(frozen=True)
class CrossAspect:
    transit_body: Body
    natal_body: Body
    aspect_type: str
    separation: float
    orb: float
    applying: bool
    strength: int
    interpretation: str


def find_cross_aspects(
    transiting: Iterable[BodyPosition],
    natal: Iterable[BodyPosition],
    table: Sequence[AspectDef] = MAJOR,
) -> List[CrossAspect]:
    """Aspects from transiting bodies to fixed natal positions."""

    natal = list(natal)
    res = []
    for t in transiting:
        for n in natal:
            d = separation(t.sidereal_lon, n.sidereal_lon)
            match = classify(d, table)
            if match is None:
                continue
            orb = abs(d - match.angle)
            res.append(CrossAspect(
                transit_body=t.body,
                natal_body=n.body,
                aspect_type=match.name,
                separation=d,
                orb=orb,
                applying=is_applying(t.sidereal_lon, t.speed, n.sidereal_lon, 0.0, match.angle),
                strength=strength(match.base_strength, orb),
                interpretation=interpret(t.body, n.body, match.name),
            ))
    return sorted(res, key=lambda x: x.orb)
