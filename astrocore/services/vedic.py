from ..models import MoonPhase, ZodiacPlacement
from .constants import SIGN_NAMES, SIGN_SPAN, normalize, sign_index_from_lon

NAKSHATRAS = (
  "Ashwini","Bharani","Krittika","Rohini","Mrigashira","Ardra","Punarvasu","Pushya","Ashlesha",
  "Magha","Purva Phalguni","Uttara Phalguni","Hasta","Chitra","Swati","Vishakha","Anuradha",
  "Jyeshtha","Mula","Purva Ashadha","Uttara Ashadha","Shravana","Dhanishtha","Shatabhisha",
  "Purva Bhadrapada","Uttara Bhadrapada","Revati"
)

# Lords repeat every nine nakshatras starting from Ashwini
NAKSHATRA_LORDS = ("Ketu","Venus","Sun","Moon","Mars","Rahu","Jupiter","Saturn","Mercury")

NAKSHATRA_SPAN = 360.0 / 27.0  # 13°20′
PADA_SPAN = 90.0 / 27.0        # 3°20′
TITHI_SPAN = 12.0


def nakshatra_index(lon_sid: float) -> int:
    return int(normalize(lon_sid) // NAKSHATRA_SPAN) % 27

def pada_of(lon_sid: float) -> int:
    within = normalize(lon_sid) % NAKSHATRA_SPAN
    return min(int(within // PADA_SPAN), 3) + 1


def placement(lon_sid: float) -> ZodiacPlacement:
    """Sign, nakshatra and pada for a sidereal longitude."""

    lon = normalize(lon_sid)
    sidx = sign_index_from_lon(lon)
    nidx = nakshatra_index(lon)
    return ZodiacPlacement(
        sign_index=sidx,
        sign=SIGN_NAMES[sidx],
        degree_in_sign=lon % SIGN_SPAN,
        nakshatra_index=nidx,
        nakshatra=NAKSHATRAS[nidx],
        nakshatra_lord=NAKSHATRA_LORDS[nidx % 9],
        pada=pada_of(lon),
    )


def moon_phase(sun_lon: float, moon_lon: float) -> MoonPhase:
    """Tithi and paksha from the Moon's elongation east of the Sun."""

    elong = normalize(moon_lon - sun_lon)
    tithi = min(int(elong // TITHI_SPAN), 29) + 1
    if tithi == 15:
        name = "Purnima (Full Moon)"
    elif tithi == 30:
        name = "Amavasya (New Moon)"
    elif tithi < 15:
        name = "Shukla Paksha (Waxing)"
    else:
        name = "Krishna Paksha (Waning)"
    return MoonPhase(
        elongation=elong,
        tithi=tithi,
        paksha="Shukla" if tithi <= 15 else "Krishna",
        name=name,
    )
