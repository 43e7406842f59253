from types import MappingProxyType

# Traditional (seven-planet) rulership; the lunar nodes rule no sign.
RULERS = MappingProxyType({
    "Aries": "Mars",
    "Taurus": "Venus",
    "Gemini": "Mercury",
    "Cancer": "Moon",
    "Leo": "Sun",
    "Virgo": "Mercury",
    "Libra": "Venus",
    "Scorpio": "Mars",
    "Sagittarius": "Jupiter",
    "Capricorn": "Saturn",
    "Aquarius": "Saturn",
    "Pisces": "Jupiter",
})
EXALT = MappingProxyType({
    "Sun": "Aries",
    "Moon": "Taurus",
    "Mercury": "Virgo",
    "Venus": "Pisces",
    "Mars": "Capricorn",
    "Jupiter": "Cancer",
    "Saturn": "Libra",
})
OPPOSITE = MappingProxyType({
    "Aries": "Libra", "Taurus": "Scorpio", "Gemini": "Sagittarius",
    "Cancer": "Capricorn", "Leo": "Aquarius", "Virgo": "Pisces",
    "Libra": "Aries", "Scorpio": "Taurus", "Sagittarius": "Gemini",
    "Capricorn": "Cancer", "Aquarius": "Leo", "Pisces": "Virgo",
})


def ruler_of(sign: str) -> str:
    return RULERS[sign]


def dignity_for(planet: str, sign: str) -> str:
    if sign == EXALT.get(planet):
        return "exaltation"
    if planet in EXALT and OPPOSITE[EXALT[planet]] == sign:
        return "fall"
    if RULERS.get(sign) == planet:
        return "domicile"
    if RULERS.get(OPPOSITE.get(sign, "")) == planet:
        return "detriment"
    return "neutral"
