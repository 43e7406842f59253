import math

SIGN_NAMES = ("Aries","Taurus","Gemini","Cancer","Leo","Virgo","Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces")

SIGN_SPAN = 30.0


def normalize(angle: float) -> float:
    """Reduce an angle to [0, 360)."""

    r = math.fmod(angle, 360.0)
    if r < 0:
        r += 360.0
    # -1e-20 + 360.0 rounds to 360.0
    return 0.0 if r >= 360.0 else r


def sign_index_from_lon(lon: float) -> int:
    return int(normalize(lon) // SIGN_SPAN) % 12

def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]

def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′56″"
    lon = normalize(lon)
    sidx = sign_index_from_lon(lon)
    within = lon % SIGN_SPAN
    deg = int(within)
    minutes_float = (within - deg) * 60
    mins = int(minutes_float)
    secs = int((minutes_float - mins) * 60)
    return f"{SIGN_NAMES[sidx]} {deg:02d}°{mins:02d}′{secs:02d}″"
