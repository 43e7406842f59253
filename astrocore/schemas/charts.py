from datetime import datetime
from hashlib import sha256
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models import Chart, ChartRequest
from ..services.constants import fmt_deg
from ..services.derivations import dominant
from ..services.ephem import ENGINE_VERSION


class Place(BaseModel):
    # Left unconstrained here: range and presence checks raise the engine's
    # own CoordinateRangeError / IncompleteLocationError.
    lat: Optional[float] = None
    lon: Optional[float] = None
    tz: Optional[str] = None
    query: Optional[str] = None


class ChartOptions(BaseModel):
    ayanamsha: Optional[str] = None


class ChartInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    when: Optional[datetime] = Field(default=None, alias="datetime")
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM[:SS]
    place: Place
    options: ChartOptions = ChartOptions()

    @model_validator(mode="after")
    def _needs_moment(self):
        if self.when is None:
            if not self.date:
                raise ValueError("either 'datetime' or 'date' (with optional 'time') is required")
            self._civil()
        return self

    def _civil(self) -> datetime:
        text = f"{self.date}T{self.time or '00:00:00'}"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid date/time: {text!r}") from exc

    def to_request(self) -> ChartRequest:
        when = self.when if self.when is not None else self._civil()
        return ChartRequest(when=when, tz=self.place.tz, latitude=self.place.lat, longitude=self.place.lon)


class NakshatraOut(BaseModel):
    name: str
    index: int
    lord: str
    pada: int


class BodyOut(BaseModel):
    name: str
    lon: float
    tropical_lon: float
    lat: float
    distance_au: float
    speed: float
    retro: bool
    sign: str
    degree: str
    nakshatra: NakshatraOut
    house: int
    dignity: str


class HouseOut(BaseModel):
    num: int
    cusp_lon: float
    sign: str
    ruler: str


class AspectOut(BaseModel):
    p1: str
    p2: str
    type: str
    separation: float
    orb: float
    applying: bool
    strength: int
    interpretation: str


class MoonPhaseOut(BaseModel):
    name: str
    paksha: str
    tithi: int
    elongation: float


class MetaOut(BaseModel):
    engine: str = "astrocore"
    engine_version: str = ENGINE_VERSION
    zodiac: str = "sidereal"
    house_system: str = "equal"
    ayanamsha: str


class ChartResponse(BaseModel):
    chart_id: str
    meta: MetaOut
    local_time: str
    utc_time: str
    tz: str
    julian_day: float
    ayanamsa: float
    angles: Dict[str, float]
    houses: List[HouseOut]
    bodies: List[BodyOut]
    aspects: List[AspectOut]
    elements: Dict[str, int]
    modalities: Dict[str, int]
    dominant_element: str
    moon_phase: MoonPhaseOut


def chart_id(chart: Chart) -> str:
    seed = f"{chart.utc_time.isoformat()}|{chart.latitude:.6f}|{chart.longitude:.6f}|{chart.tz}|equal|{chart.ayanamsha}"
    return "cht_" + sha256(seed.encode()).hexdigest()[:24]


def to_response(chart: Chart) -> ChartResponse:
    bodies = []
    for p in chart.points:
        pos, zp = p.position, p.placement
        bodies.append(BodyOut(
            name=pos.body.value,
            lon=round(pos.sidereal_lon, 4),
            tropical_lon=round(pos.tropical_lon, 4),
            lat=round(pos.latitude, 4),
            distance_au=pos.distance_au,
            speed=round(pos.speed, 6),
            retro=pos.retrograde,
            sign=zp.sign,
            degree=fmt_deg(pos.sidereal_lon),
            nakshatra=NakshatraOut(name=zp.nakshatra, index=zp.nakshatra_index, lord=zp.nakshatra_lord, pada=zp.pada),
            house=p.house,
            dignity=p.dignity,
        ))

    elements = dict(chart.elements)
    return ChartResponse(
        chart_id=chart_id(chart),
        meta=MetaOut(ayanamsha=chart.ayanamsha),
        local_time=chart.local_time.isoformat(),
        utc_time=chart.utc_time.isoformat(),
        tz=chart.tz,
        julian_day=round(chart.julian_day, 6),
        ayanamsa=round(chart.ayanamsa, 6),
        angles={"ascendant": round(chart.ascendant, 4), "mc": round(chart.midheaven, 4)},
        houses=[HouseOut(num=h.number, cusp_lon=round(h.cusp_lon, 4), sign=h.sign, ruler=h.ruler) for h in chart.houses],
        bodies=bodies,
        aspects=[
            AspectOut(
                p1=a.body_a.value,
                p2=a.body_b.value,
                type=a.aspect_type,
                separation=round(a.separation, 4),
                orb=round(a.orb, 2),
                applying=a.applying,
                strength=a.strength,
                interpretation=a.interpretation,
            )
            for a in chart.aspects
        ],
        elements=elements,
        modalities=dict(chart.modalities),
        dominant_element=dominant(elements),
        moon_phase=MoonPhaseOut(
            name=chart.moon_phase.name,
            paksha=chart.moon_phase.paksha,
            tithi=chart.moon_phase.tithi,
            elongation=round(chart.moon_phase.elongation, 4),
        ),
    )
